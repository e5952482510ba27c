"""Stored configuration and ordering of context plugins.

Every registered plugin may have a :class:`~og.db.models.ContextPluginConfig`
row holding its ``status`` and ``weight``.  Three views are exposed through
:meth:`ContextHandler.get_plugins`:

``ReturnMode.ALL``
    every registered plugin, in registration order;
``ReturnMode.ONLY_IN_STORAGE``
    registered plugins that have a stored row;
``ReturnMode.ONLY_ACTIVE``
    stored rows with ``status`` enabled.

Stored views are ordered by ascending weight, equal weights by plugin name.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Tuple

from sqlmodel import select

from og.config import parse_flag
from og.db.models import ContextPluginConfig, Entity, utcnow
from og.utils import og_entrypoint

from .plugin import ContextPluginDefinition, RouteState

if TYPE_CHECKING:
    from og.services import OgServices

log = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("status", "weight")


def _parse_weight(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Not a plugin weight: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Not a plugin weight: {value!r}") from None


class ReturnMode(str, Enum):
    ALL = "all"
    ONLY_IN_STORAGE = "storage"
    ONLY_ACTIVE = "active"


@dataclass(frozen=True)
class ContextPluginEntry:
    definition: ContextPluginDefinition
    status: bool = False
    weight: int = 0
    stored: bool = False

    @property
    def plugin_id(self) -> str:
        return self.definition.id


class ContextHandler:
    def __init__(self, services: "OgServices"):
        self.services = services

    @property
    def settings(self):
        return self.services.settings

    @property
    def plugin_manager(self):
        return self.services.plugin_manager

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get_plugins(self, mode: ReturnMode = ReturnMode.ONLY_ACTIVE) -> Dict[str, ContextPluginEntry]:
        mode = ReturnMode(mode)
        definitions = self.plugin_manager.get_definitions()
        if mode is ReturnMode.ALL:
            stored = {row.plugin_id: row for row in self._load_rows(active_only=False)}
            return {
                plugin_id: self._entry(definition, stored.get(plugin_id))
                for plugin_id, definition in definitions.items()
            }

        rows = self._load_rows(active_only=mode is ReturnMode.ONLY_ACTIVE)
        return {
            row.plugin_id: self._entry(definitions[row.plugin_id], row)
            for row in rows
            if row.plugin_id in definitions
        }

    def get_group(self, state: RouteState) -> Optional[Entity]:
        """Ask the active plugins in order; the first group found wins."""

        for plugin_id in self.get_plugins(ReturnMode.ONLY_ACTIVE):
            plugin = self.plugin_manager.create_instance(plugin_id, self.services)
            group = plugin.get_group(state)
            if group is not None:
                log.debug("og.context.group_resolved plugin_id=%s group_id=%s", plugin_id, group.id)
                return group
        return None

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    @og_entrypoint("context.update_plugin", mutating=True)
    def update_plugin(self, plugin_id: str, values: Mapping[str, Any]) -> ContextPluginEntry:
        """Merge ``status`` and/or ``weight`` into the stored row of a plugin.

        The row is created when missing.  Unregistered plugins raise
        :class:`~og.exceptions.UnknownContextPluginError`.
        """

        definition = self.plugin_manager.get_definition(plugin_id)
        unknown = sorted(set(values) - set(UPDATABLE_FIELDS))
        if unknown:
            raise ValueError(f"Unsupported context plugin fields: {', '.join(unknown)}")
        status = parse_flag(values["status"]) if "status" in values else None
        weight = _parse_weight(values["weight"]) if "weight" in values else None

        with self.services.session() as session:
            row = session.get(ContextPluginConfig, plugin_id)
            if row is None:
                row = ContextPluginConfig(plugin_id=plugin_id)
            if status is not None:
                row.status = status
            if weight is not None:
                row.weight = weight
            row.updated_at = utcnow()
            session.add(row)
            session.commit()
            session.refresh(row)
        log.info(
            "og.context.plugin_updated plugin_id=%s status=%s weight=%s",
            plugin_id,
            row.status,
            row.weight,
        )
        return self._entry(definition, row)

    @og_entrypoint("context.update_config_storage", mutating=True)
    def update_config_storage(self) -> Tuple[List[str], List[str]]:
        """Create rows for new plugins and drop rows of unregistered ones.

        New rows start disabled with weight 0.  Returns the added and the
        removed plugin names.
        """

        definitions = self.plugin_manager.get_definitions()
        added: List[str] = []
        removed: List[str] = []
        with self.services.session() as session:
            rows = {row.plugin_id: row for row in session.exec(select(ContextPluginConfig)).all()}
            for plugin_id in definitions:
                if plugin_id not in rows:
                    session.add(ContextPluginConfig(plugin_id=plugin_id))
                    added.append(plugin_id)
            for plugin_id, row in rows.items():
                if plugin_id not in definitions:
                    session.delete(row)
                    removed.append(plugin_id)
            session.commit()
        if added or removed:
            log.info("og.context.storage_synced added=%s removed=%s", added, removed)
        return added, removed

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _load_rows(self, *, active_only: bool) -> List[ContextPluginConfig]:
        stmt = select(ContextPluginConfig)
        if active_only:
            stmt = stmt.where(ContextPluginConfig.status == True)  # noqa: E712
        stmt = stmt.order_by(ContextPluginConfig.weight, ContextPluginConfig.plugin_id)
        with self.services.session() as session:
            return list(session.exec(stmt).all())

    @staticmethod
    def _entry(
        definition: ContextPluginDefinition, row: Optional[ContextPluginConfig]
    ) -> ContextPluginEntry:
        if row is None:
            return ContextPluginEntry(definition=definition)
        return ContextPluginEntry(
            definition=definition,
            status=row.status,
            weight=row.weight,
            stored=True,
        )


__all__ = ["ContextHandler", "ContextPluginEntry", "ReturnMode"]
