"""Decision table of the subscribe / unsubscribe formatter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Set

import pytest

from og.db.models import MEMBER_ROLE, NON_MEMBER_ROLE, Entity, MembershipState, User
from og_ui import ClosedNotice, Empty, GroupSubscribeFormatter, Link, ManagerNotice, render_html
from og_ui.elements import is_cacheable


@pytest.fixture()
def formatter(services) -> GroupSubscribeFormatter:
    return GroupSubscribeFormatter.from_services(services)


def _grant(services, role: str, *permissions: str) -> None:
    services.group_types.grant_permissions("node", "group", role, list(permissions))


def _revoke(services, role: str, *permissions: str) -> None:
    services.group_types.revoke_permissions("node", "group", role, list(permissions))


def test_non_group_entity_renders_nothing(formatter, persist, viewer):
    page = persist(Entity(entity_type_id="node", bundle="page", owner_id=viewer.user_id))

    element = formatter.view_elements(page, viewer)

    assert element == Empty()
    assert is_cacheable(element)


def test_owner_sees_manager_notice(formatter, group, owner):
    element = formatter.view_elements(group, owner)

    assert isinstance(element, ManagerNotice)
    assert element.title == "You are the group manager"
    assert element.classes == ("group", "manager")
    assert element.max_age == 0


def test_active_member_gets_unsubscribe_link(services, formatter, group, viewer):
    services.membership.create_membership(group, viewer)

    element = formatter.view_elements(group, viewer)

    assert isinstance(element, Link)
    assert element.title == "Unsubscribe from group"
    assert element.url.to_string() == f"/group/node/{group.id}/unsubscribe"
    assert element.classes == ("group", "unsubscribe")
    assert element.max_age == 0


def test_pending_member_gets_unsubscribe_link(services, formatter, group, viewer):
    services.membership.create_membership(group, viewer, state=MembershipState.PENDING)

    element = formatter.view_elements(group, viewer)

    assert isinstance(element, Link)
    assert element.url.route_name == "og.unsubscribe"


def test_member_without_unsubscribe_permission_gets_no_link(services, formatter, group, viewer):
    services.membership.create_membership(group, viewer)
    _revoke(services, MEMBER_ROLE, "unsubscribe")

    element = formatter.view_elements(group, viewer)

    assert isinstance(element, Empty)
    assert element.max_age == 0


def test_blocked_user_renders_nothing(services, formatter, group, viewer):
    services.membership.create_membership(group, viewer, state=MembershipState.BLOCKED)
    _grant(services, NON_MEMBER_ROLE, "subscribe without approval")

    element = formatter.view_elements(group, viewer)

    assert element == Empty()
    assert is_cacheable(element)


def test_non_member_can_request_membership(formatter, group, viewer):
    element = formatter.view_elements(group, viewer)

    assert isinstance(element, Link)
    assert element.title == "Request group membership"
    assert element.url.to_string() == f"/group/node/{group.id}/subscribe"
    assert element.classes == ("group", "subscribe", "request")
    assert element.max_age == 0


def test_non_member_can_subscribe_without_approval(services, formatter, group, viewer):
    _grant(services, NON_MEMBER_ROLE, "subscribe without approval")

    element = formatter.view_elements(group, viewer)

    assert isinstance(element, Link)
    assert element.title == "Subscribe to group"
    assert element.classes == ("group", "subscribe")


def test_anonymous_viewer_is_sent_to_login(formatter, group, anonymous):
    element = formatter.view_elements(group, anonymous, current_path=f"/node/{group.id}")

    assert isinstance(element, Link)
    assert element.title == "Request group membership"
    assert element.url.route_name == "user.login"
    assert element.url.to_string() == f"/user/login?destination=%2Fnode%2F{group.id}"


def test_closed_group_notice(services, formatter, group, viewer):
    _revoke(services, NON_MEMBER_ROLE, "subscribe")

    element = formatter.view_elements(group, viewer)

    assert isinstance(element, ClosedNotice)
    assert element.title == "This is a closed group. Only a group administrator can add you."
    assert element.classes == ("group", "closed")
    assert element.max_age == 0


def test_closed_group_notice_for_anonymous(services, formatter, group, anonymous):
    _revoke(services, NON_MEMBER_ROLE, "subscribe")

    assert isinstance(formatter.view_elements(group, anonymous), ClosedNotice)


def test_translation_is_applied(services, group, owner):
    formatter = GroupSubscribeFormatter.from_services(services, translate=str.upper)

    element = formatter.view_elements(group, owner)

    assert element.title == "YOU ARE THE GROUP MANAGER"


def test_render_html(formatter, group, viewer, owner):
    link_html = render_html(formatter.view_elements(group, viewer))
    assert link_html == (
        f'<a href="/group/node/{group.id}/subscribe" title="Request group membership" '
        'class="group subscribe request">Request group membership</a>'
    )
    assert render_html(formatter.view_elements(group, owner)) == (
        '<span title="You are the group manager" class="group manager">'
        "You are the group manager</span>"
    )
    assert render_html(Empty()) == ""


# ----------------------------------------------------------------------
# Injected collaborators
# ----------------------------------------------------------------------
@dataclass
class _GroupTypes:
    groups: Set[tuple] = field(default_factory=lambda: {("node", "group")})

    def is_group(self, entity_type_id: str, bundle: str) -> bool:
        return (entity_type_id, bundle) in self.groups


@dataclass
class _Membership:
    member: bool = False
    blocked: bool = False

    def is_member(self, group, user, states) -> bool:
        return self.member

    def is_member_blocked(self, group, user) -> bool:
        return self.blocked


@dataclass
class _Access:
    granted: Set[str] = field(default_factory=set)
    checked: List[str] = field(default_factory=list)

    def user_access(self, group, permission, user) -> bool:
        self.checked.append(permission)
        return permission in self.granted


def _stub_formatter(membership: _Membership, access: _Access) -> GroupSubscribeFormatter:
    return GroupSubscribeFormatter(group_types=_GroupTypes(), membership=membership, access=access)


GROUP = Entity(id=7, entity_type_id="node", bundle="group", owner_id=5)


@pytest.mark.parametrize("member, blocked", [(False, False), (True, False), (False, True), (True, True)])
def test_owner_notice_ignores_membership_and_access(member, blocked):
    access = _Access(granted={"unsubscribe", "subscribe"})
    formatter = _stub_formatter(_Membership(member=member, blocked=blocked), access)

    element = formatter.view_elements(GROUP, User(user_id=5))

    assert isinstance(element, ManagerNotice)
    assert element.max_age == 0
    assert access.checked == []


@pytest.mark.parametrize("granted", [set(), {"subscribe"}, {"subscribe without approval"}])
def test_blocked_non_member_always_renders_nothing(granted):
    access = _Access(granted=set(granted))
    formatter = _stub_formatter(_Membership(blocked=True), access)

    assert formatter.view_elements(GROUP, User(user_id=3)) == Empty()
    assert access.checked == []


def test_member_access_check_uses_unsubscribe_only():
    access = _Access()
    formatter = _stub_formatter(_Membership(member=True), access)

    element = formatter.view_elements(GROUP, User(user_id=3))

    assert element == Empty(max_age=0)
    assert access.checked == ["unsubscribe"]


def test_subscribe_without_approval_wins_over_subscribe():
    access = _Access(granted={"subscribe", "subscribe without approval"})
    formatter = _stub_formatter(_Membership(), access)

    element = formatter.view_elements(GROUP, User(user_id=3))

    assert element.title == "Subscribe to group"
    assert access.checked == ["subscribe without approval"]
