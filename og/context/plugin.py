"""Context plugin base class and descriptor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Type

from og.db.models import Entity, User

if TYPE_CHECKING:
    from og.services import OgServices


@dataclass(frozen=True)
class RouteState:
    """What a context plugin may inspect about the current request."""

    user: Optional[User] = None
    entity: Optional[Entity] = None
    path: str = "/"


class ContextPlugin:
    """Strategy that resolves the group relevant to the current request."""

    def __init__(self, services: "OgServices", definition: "ContextPluginDefinition"):
        self.services = services
        self.definition = definition

    @property
    def plugin_id(self) -> str:
        return self.definition.id

    def get_group(self, state: RouteState) -> Optional[Entity]:
        raise NotImplementedError


@dataclass(frozen=True)
class ContextPluginDefinition:
    id: str
    label: str
    plugin_class: Type[ContextPlugin]
    description: str = ""
