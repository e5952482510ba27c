"""Explicit registry of the available context plugins."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Type

from og.exceptions import DuplicateContextPluginError, UnknownContextPluginError

from .plugin import ContextPlugin, ContextPluginDefinition
from .plugins import CurrentUserContext, EntityContext

if TYPE_CHECKING:
    from og.services import OgServices

log = logging.getLogger(__name__)


class ContextPluginManager:
    """Name -> definition mapping, kept in registration order."""

    def __init__(self) -> None:
        self._definitions: Dict[str, ContextPluginDefinition] = {}

    def register(self, definition: ContextPluginDefinition) -> ContextPluginDefinition:
        if definition.id in self._definitions:
            raise DuplicateContextPluginError(definition.id)
        self._definitions[definition.id] = definition
        log.debug("og.context.registered plugin_id=%s", definition.id)
        return definition

    def register_class(
        self, plugin_id: str, plugin_class: Type[ContextPlugin], label: str, description: str = ""
    ) -> ContextPluginDefinition:
        return self.register(
            ContextPluginDefinition(
                id=plugin_id,
                label=label,
                plugin_class=plugin_class,
                description=description,
            )
        )

    def unregister(self, plugin_id: str) -> None:
        if self._definitions.pop(plugin_id, None) is None:
            raise UnknownContextPluginError(plugin_id)

    def get_definition(self, plugin_id: str) -> ContextPluginDefinition:
        try:
            return self._definitions[plugin_id]
        except KeyError:
            raise UnknownContextPluginError(plugin_id) from None

    def get_definitions(self) -> Dict[str, ContextPluginDefinition]:
        return dict(self._definitions)

    def create_instance(self, plugin_id: str, services: "OgServices") -> ContextPlugin:
        definition = self.get_definition(plugin_id)
        return definition.plugin_class(services, definition)


def register_default_plugins(manager: ContextPluginManager) -> None:
    manager.register_class(
        "entity",
        EntityContext,
        label="Entity",
        description="Get the group from the entity of the current route.",
    )
    manager.register_class(
        "current_user",
        CurrentUserContext,
        label="Current user",
        description="Get the group from the memberships of the current user.",
    )
