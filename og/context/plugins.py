"""Built-in context plugins."""

from __future__ import annotations

from typing import Optional

from og.db.models import Entity

from .plugin import ContextPlugin, RouteState


class EntityContext(ContextPlugin):
    """The entity of the current route, when it is a group."""

    def get_group(self, state: RouteState) -> Optional[Entity]:
        entity = state.entity
        if entity is None:
            return None
        if self.services.group_types.is_group(entity.entity_type_id, entity.bundle):
            return entity
        return None


class CurrentUserContext(ContextPlugin):
    """The group of the viewer's earliest active membership."""

    def get_group(self, state: RouteState) -> Optional[Entity]:
        user = state.user
        if user is None or not user.is_authenticated:
            return None
        groups = self.services.membership.get_user_groups(user)
        return groups[0] if groups else None
