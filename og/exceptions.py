"""Errors raised by the membership services."""

from __future__ import annotations


class OgError(Exception):
    """Base class for every error raised by ``og`` and ``og_ui``."""


class UnknownContextPluginError(OgError, LookupError):
    """The plugin name is not present in the context plugin registry."""

    def __init__(self, plugin_id: str):
        super().__init__(f"Unknown context plugin: {plugin_id}")
        self.plugin_id = plugin_id


class DuplicateContextPluginError(OgError, ValueError):
    """A context plugin with the same name is already registered."""

    def __init__(self, plugin_id: str):
        super().__init__(f"Context plugin already registered: {plugin_id}")
        self.plugin_id = plugin_id


class MembershipExistsError(OgError, ValueError):
    """The user already has a membership in the group."""


class RouteNotFoundError(OgError, LookupError):
    """The route name is unknown or a path parameter is missing."""


class OgReadOnlyError(OgError, RuntimeError):
    """Raised by mutating entrypoints while ``OG_READ_ONLY`` is enabled."""


__all__ = [
    "OgError",
    "UnknownContextPluginError",
    "DuplicateContextPluginError",
    "MembershipExistsError",
    "RouteNotFoundError",
    "OgReadOnlyError",
]
