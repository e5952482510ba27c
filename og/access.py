"""Group level access decisions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List

from .db.models import MEMBER_ROLE, NON_MEMBER_ROLE, Entity, MembershipState, User

if TYPE_CHECKING:
    from .services import OgServices

log = logging.getLogger(__name__)

ADMINISTER_GROUP_PERMISSION = "administer group"


class OgAccess:
    """Decide whether a user holds a permission inside a group.

    The checks run in order:

    1. entities that are not groups grant nothing;
    2. the site wide ``administer group`` permission grants everything;
    3. the group owner is granted everything while
       ``group_manager_full_access`` is enabled;
    4. a blocked membership grants nothing;
    5. otherwise the permissions of the user's roles apply: ``member`` plus
       any extra membership roles for active or pending members,
       ``non-member`` for everybody else.
    """

    def __init__(self, services: "OgServices"):
        self.services = services

    def user_access(self, group: Entity, permission: str, user: User) -> bool:
        allowed = self._user_access(group, permission, user)
        log.debug(
            "og.access permission=%r user_id=%s group_id=%s allowed=%s",
            permission,
            user.user_id,
            group.id,
            allowed,
        )
        return allowed

    def _user_access(self, group: Entity, permission: str, user: User) -> bool:
        if not self.services.group_types.is_group(group.entity_type_id, group.bundle):
            return False
        if user.has_permission(ADMINISTER_GROUP_PERMISSION):
            return True
        if (
            self.services.settings.group_manager_full_access
            and user.is_authenticated
            and group.owner_id is not None
            and group.owner_id == user.user_id
        ):
            return True

        membership = self.services.membership.get_membership(group, user)
        if membership is not None and membership.state == MembershipState.BLOCKED:
            return False

        role_names: List[str]
        if membership is not None:
            role_names = [MEMBER_ROLE, *(membership.roles or [])]
        else:
            role_names = [NON_MEMBER_ROLE]
        permissions = self.services.group_types.role_permissions(
            group.entity_type_id, group.bundle, role_names
        )
        return permission in permissions
