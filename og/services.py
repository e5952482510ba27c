"""Dependency container for the membership services.

Callers receive an :class:`OgServices` instance instead of reaching for module
level singletons.  Entry points (the CLI, an application factory) build one on
top of the configured database; tests build their own around an in-memory
engine.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Optional

from sqlmodel import Session

from .access import OgAccess
from .config import OgSettings
from .context.handler import ContextHandler
from .context.manager import ContextPluginManager, register_default_plugins
from .db.init import SessionFactory
from .group_types import GroupTypeManager
from .membership import MembershipManager


class OgServices:
    """Bundle of the services that make up the membership core.

    Parameters
    ----------
    session_factory:
        Zero-argument callable returning a context manager that yields a
        :class:`sqlmodel.Session`.
    settings:
        Runtime switches; read from the environment when omitted.
    plugin_manager:
        Context plugin registry.  A registry holding the built-in ``entity``
        and ``current_user`` plugins is created when omitted.
    """

    def __init__(
        self,
        *,
        session_factory: SessionFactory,
        settings: Optional[OgSettings] = None,
        plugin_manager: Optional[ContextPluginManager] = None,
    ) -> None:
        self._session_factory = session_factory
        self.settings = settings or OgSettings.from_env()
        if plugin_manager is None:
            plugin_manager = ContextPluginManager()
            register_default_plugins(plugin_manager)
        self.plugin_manager = plugin_manager
        self.group_types = GroupTypeManager(self)
        self.membership = MembershipManager(self)
        self.access = OgAccess(self)
        self.context_handler = ContextHandler(self)

    def session(self) -> AbstractContextManager[Session]:
        return self._session_factory()

    def install(self) -> None:
        """Bring stored configuration in line with the registered plugins."""

        self.context_handler.update_config_storage()


__all__ = ["OgServices"]
