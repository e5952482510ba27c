"""Registry of the bundles that act as groups."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, List, Tuple

from sqlmodel import select

from .db.models import MEMBER_ROLE, NON_MEMBER_ROLE, GroupType, OgRole
from .utils import og_entrypoint

if TYPE_CHECKING:
    from .services import OgServices

log = logging.getLogger(__name__)

DEFAULT_ROLE_PERMISSIONS: Dict[str, List[str]] = {
    NON_MEMBER_ROLE: ["subscribe"],
    MEMBER_ROLE: ["unsubscribe"],
}


class GroupTypeManager:
    def __init__(self, services: "OgServices"):
        self.services = services

    @property
    def settings(self):
        return self.services.settings

    def is_group(self, entity_type_id: str, bundle: str) -> bool:
        with self.services.session() as session:
            return session.get(GroupType, (entity_type_id, bundle)) is not None

    def get_all_group_bundles(self) -> Dict[str, List[str]]:
        """Map each entity type to its group bundles."""

        with self.services.session() as session:
            rows = session.exec(
                select(GroupType).order_by(GroupType.entity_type_id, GroupType.bundle)
            ).all()
        bundles: Dict[str, List[str]] = {}
        for row in rows:
            bundles.setdefault(row.entity_type_id, []).append(row.bundle)
        return bundles

    @og_entrypoint("group_types.add_group", mutating=True)
    def add_group(self, entity_type_id: str, bundle: str) -> bool:
        """Mark a bundle as a group type and create its default roles.

        Returns ``False`` when the bundle already was a group type.
        """

        with self.services.session() as session:
            if session.get(GroupType, (entity_type_id, bundle)) is not None:
                return False
            session.add(GroupType(entity_type_id=entity_type_id, bundle=bundle))
            for role_name, permissions in DEFAULT_ROLE_PERMISSIONS.items():
                if self._find_role(session, entity_type_id, bundle, role_name) is None:
                    session.add(
                        OgRole(
                            entity_type_id=entity_type_id,
                            bundle=bundle,
                            name=role_name,
                            permissions=list(permissions),
                        )
                    )
            session.commit()
        log.info("og.group_types.added %s:%s", entity_type_id, bundle)
        return True

    @og_entrypoint("group_types.remove_group", mutating=True)
    def remove_group(self, entity_type_id: str, bundle: str) -> bool:
        with self.services.session() as session:
            group_type = session.get(GroupType, (entity_type_id, bundle))
            if group_type is None:
                return False
            session.delete(group_type)
            roles = session.exec(
                select(OgRole).where(
                    OgRole.entity_type_id == entity_type_id,
                    OgRole.bundle == bundle,
                )
            ).all()
            for role in roles:
                session.delete(role)
            session.commit()
        log.info("og.group_types.removed %s:%s", entity_type_id, bundle)
        return True

    @og_entrypoint("group_types.grant_permissions", mutating=True)
    def grant_permissions(
        self, entity_type_id: str, bundle: str, role_name: str, permissions: List[str]
    ) -> List[str]:
        """Add ``permissions`` to a role, creating the role when needed."""

        with self.services.session() as session:
            role = self._find_role(session, entity_type_id, bundle, role_name)
            if role is None:
                role = OgRole(entity_type_id=entity_type_id, bundle=bundle, name=role_name, permissions=[])
            merged = list(role.permissions or [])
            merged.extend(p for p in permissions if p not in merged)
            role.permissions = merged
            session.add(role)
            session.commit()
        return merged

    @og_entrypoint("group_types.revoke_permissions", mutating=True)
    def revoke_permissions(
        self, entity_type_id: str, bundle: str, role_name: str, permissions: List[str]
    ) -> List[str]:
        with self.services.session() as session:
            role = self._find_role(session, entity_type_id, bundle, role_name)
            if role is None:
                return []
            remaining = [p for p in (role.permissions or []) if p not in permissions]
            role.permissions = remaining
            session.add(role)
            session.commit()
        return remaining

    def role_permissions(self, entity_type_id: str, bundle: str, role_names: List[str]) -> Tuple[str, ...]:
        if not role_names:
            return ()
        with self.services.session() as session:
            roles = session.exec(
                select(OgRole).where(
                    OgRole.entity_type_id == entity_type_id,
                    OgRole.bundle == bundle,
                    OgRole.name.in_(role_names),  # type: ignore[attr-defined]
                )
            ).all()
        collected: List[str] = []
        for role in roles:
            collected.extend(p for p in (role.permissions or []) if p not in collected)
        return tuple(collected)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _find_role(session, entity_type_id: str, bundle: str, role_name: str):
        return session.exec(
            select(OgRole).where(
                OgRole.entity_type_id == entity_type_id,
                OgRole.bundle == bundle,
                OgRole.name == role_name,
            )
        ).first()
