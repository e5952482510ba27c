"""Engine construction and session helpers."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, ContextManager, Iterator, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from og.config import OgSettings

from . import models  # noqa: F401  registers the tables on SQLModel.metadata

log = logging.getLogger(__name__)

SessionFactory = Callable[[], ContextManager[Session]]

_MEMORY_URLS = {"sqlite://", "sqlite:///:memory:"}


def create_db_engine(url: str, *, echo: bool = False) -> Engine:
    if url in _MEMORY_URLS:
        # One shared connection, otherwise every session sees an empty database.
        return create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, echo=echo)


def init_db(url: Optional[str] = None, *, settings: Optional[OgSettings] = None) -> Engine:
    """Create the engine for ``url`` (or the configured URL) and its schema."""

    settings = settings or OgSettings.from_env()
    url = url or settings.database_url
    engine = create_db_engine(url, echo=settings.db_echo)
    SQLModel.metadata.create_all(engine)
    log.info(
        "og.db.init url=%s tables=%d",
        engine.url.render_as_string(hide_password=True),
        len(SQLModel.metadata.tables),
    )
    return engine


def session_factory(engine: Engine) -> SessionFactory:
    @contextmanager
    def _session_factory() -> Iterator[Session]:
        with Session(engine, expire_on_commit=False) as session:
            yield session

    return _session_factory


__all__ = ["create_db_engine", "init_db", "session_factory", "SessionFactory"]
