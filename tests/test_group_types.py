from __future__ import annotations

from og.db.models import MEMBER_ROLE, NON_MEMBER_ROLE


def test_add_and_remove_group_type(services):
    group_types = services.group_types

    assert not group_types.is_group("node", "group")
    assert group_types.add_group("node", "group") is True
    assert group_types.add_group("node", "group") is False
    assert group_types.is_group("node", "group")
    assert not group_types.is_group("node", "page")

    assert group_types.remove_group("node", "group") is True
    assert group_types.remove_group("node", "group") is False
    assert not group_types.is_group("node", "group")
    assert group_types.role_permissions("node", "group", [MEMBER_ROLE]) == ()


def test_default_roles(services):
    services.group_types.add_group("node", "club")

    assert services.group_types.role_permissions("node", "club", [NON_MEMBER_ROLE]) == ("subscribe",)
    assert services.group_types.role_permissions("node", "club", [MEMBER_ROLE]) == ("unsubscribe",)


def test_group_bundles_by_entity_type(services):
    services.group_types.add_group("node", "group")
    services.group_types.add_group("node", "club")
    services.group_types.add_group("taxonomy_term", "tags")

    assert services.group_types.get_all_group_bundles() == {
        "node": ["club", "group"],
        "taxonomy_term": ["tags"],
    }


def test_grant_permissions_is_idempotent(services):
    services.group_types.add_group("node", "group")

    services.group_types.grant_permissions("node", "group", NON_MEMBER_ROLE, ["subscribe"])
    merged = services.group_types.grant_permissions(
        "node", "group", NON_MEMBER_ROLE, ["subscribe without approval"]
    )

    assert merged == ["subscribe", "subscribe without approval"]
