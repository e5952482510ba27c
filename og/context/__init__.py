"""Context plugins: strategies that find the group of the current request."""

from .handler import ContextHandler, ContextPluginEntry, ReturnMode
from .manager import ContextPluginManager, register_default_plugins
from .plugin import ContextPlugin, ContextPluginDefinition, RouteState
from .plugins import CurrentUserContext, EntityContext

__all__ = [
    "ContextHandler",
    "ContextPlugin",
    "ContextPluginDefinition",
    "ContextPluginEntry",
    "ContextPluginManager",
    "CurrentUserContext",
    "EntityContext",
    "ReturnMode",
    "RouteState",
    "register_default_plugins",
]
