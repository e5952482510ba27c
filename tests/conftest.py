from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from og.config import OgSettings
from og.db.init import session_factory
from og.db.models import ANONYMOUS_USER_ID, Entity, User
from og.services import OgServices


def build_services(*, install: bool = True, **settings_overrides) -> OgServices:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    services = OgServices(
        session_factory=session_factory(engine),
        settings=OgSettings(database_url="sqlite://", **settings_overrides),
    )
    if install:
        services.install()
    return services


@pytest.fixture()
def services(monkeypatch: pytest.MonkeyPatch) -> OgServices:
    monkeypatch.delenv("OG_READ_ONLY", raising=False)
    return build_services()


@pytest.fixture()
def persist(services: OgServices) -> Callable:
    def _persist(*objects):
        with services.session() as session:
            for obj in objects:
                session.add(obj)
            session.commit()
            for obj in objects:
                session.refresh(obj)
        return objects[0] if len(objects) == 1 else objects

    return _persist


@pytest.fixture()
def anonymous() -> User:
    return User(user_id=ANONYMOUS_USER_ID, name="anonymous")


@pytest.fixture()
def owner(persist) -> User:
    return persist(User(user_id=1, name="owner"))


@pytest.fixture()
def viewer(persist) -> User:
    return persist(User(user_id=2, name="viewer"))


@pytest.fixture()
def group(services: OgServices, persist, owner: User) -> Entity:
    services.group_types.add_group("node", "group")
    return persist(Entity(entity_type_id="node", bundle="group", label="Group", owner_id=owner.user_id))


@pytest.fixture()
def services_factory(monkeypatch: pytest.MonkeyPatch) -> Callable[..., OgServices]:
    monkeypatch.delenv("OG_READ_ONLY", raising=False)
    return build_services
