"""Subscribe and unsubscribe links for group entities.

The formatter decides, for one viewer and one group, which of these to show:

* nothing, when the entity is not a group or the viewer is blocked;
* a "group manager" notice for the owner of the group;
* an unsubscribe link for active and pending members;
* a subscribe or "request membership" link for everybody else, pointing to
  the login page (with a destination back to the current page) for
  anonymous viewers;
* a "closed group" notice when the viewer may not join at all.

The result depends on the viewer, so every element it returns is marked
uncacheable.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Optional, Tuple

from og.access import OgAccess
from og.db.models import Entity, MembershipState, User
from og.group_types import GroupTypeManager
from og.membership import MembershipManager

from .elements import ClosedNotice, Element, Empty, Link, ManagerNotice, uncacheable
from .routing import Router, Url, get_destination_array

if TYPE_CHECKING:
    from og.services import OgServices

log = logging.getLogger(__name__)

Translate = Callable[[str], str]

MANAGER_TEXT = "You are the group manager"
UNSUBSCRIBE_TEXT = "Unsubscribe from group"
SUBSCRIBE_TEXT = "Subscribe to group"
REQUEST_TEXT = "Request group membership"
CLOSED_TEXT = "This is a closed group. Only a group administrator can add you."

MEMBER_STATES = (MembershipState.ACTIVE, MembershipState.PENDING)


def _untranslated(text: str) -> str:
    return text


class GroupSubscribeFormatter:
    formatter_id = "og_ui_group_subscribe"
    label = "OG Group subscribe"
    description = "Display OG Group subscribe and un-subscribe links."
    field_types = ("og_group",)

    def __init__(
        self,
        *,
        group_types: GroupTypeManager,
        membership: MembershipManager,
        access: OgAccess,
        router: Optional[Router] = None,
        translate: Optional[Translate] = None,
    ) -> None:
        self.group_types = group_types
        self.membership = membership
        self.access = access
        self.router = router or Router()
        self.t = translate or _untranslated

    @classmethod
    def from_services(
        cls,
        services: "OgServices",
        *,
        router: Optional[Router] = None,
        translate: Optional[Translate] = None,
    ) -> "GroupSubscribeFormatter":
        return cls(
            group_types=services.group_types,
            membership=services.membership,
            access=services.access,
            router=router,
            translate=translate,
        )

    def view_elements(self, group: Entity, viewer: User, current_path: str = "/") -> Element:
        if not self.group_types.is_group(group.entity_type_id, group.bundle):
            return Empty()

        if group.owner_id is not None and group.owner_id == viewer.user_id:
            return uncacheable(ManagerNotice(title=self.t(MANAGER_TEXT)))

        link: Optional[Tuple[str, Url, Tuple[str, ...]]] = None
        if self.membership.is_member(group, viewer, MEMBER_STATES):
            if self.access.user_access(group, "unsubscribe", viewer):
                url = self.router.from_route(
                    "og.unsubscribe",
                    {"entity_type_id": group.entity_type_id, "entity_id": group.id},
                )
                link = (self.t(UNSUBSCRIBE_TEXT), url, ("unsubscribe",))
        else:
            if self.membership.is_member_blocked(group, viewer):
                log.debug("og_ui.subscribe.blocked user_id=%s group_id=%s", viewer.user_id, group.id)
                return Empty()

            if viewer.is_authenticated:
                url = self.router.from_route(
                    "og.subscribe",
                    {"entity_type_id": group.entity_type_id, "entity_id": group.id},
                )
            else:
                url = self.router.from_route(
                    "user.login", query=get_destination_array(current_path)
                )

            if self.access.user_access(group, "subscribe without approval", viewer):
                link = (self.t(SUBSCRIBE_TEXT), url, ("subscribe",))
            elif self.access.user_access(group, "subscribe", viewer):
                link = (self.t(REQUEST_TEXT), url, ("subscribe", "request"))
            else:
                return uncacheable(ClosedNotice(title=self.t(CLOSED_TEXT)))

        if link is None:
            # Member without the unsubscribe permission.
            return uncacheable(Empty())

        title, url, classes = link
        return uncacheable(Link(title=title, url=url, classes=("group", *classes)))


__all__ = ["GroupSubscribeFormatter", "MEMBER_STATES"]
