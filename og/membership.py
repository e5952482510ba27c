"""Membership state queries and mutations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence

from sqlmodel import select

from .db.models import Entity, Membership, MembershipState, User
from .exceptions import MembershipExistsError
from .utils import og_entrypoint

if TYPE_CHECKING:
    from .services import OgServices

log = logging.getLogger(__name__)

DEFAULT_STATES: Sequence[MembershipState] = (MembershipState.ACTIVE,)


class MembershipManager:
    def __init__(self, services: "OgServices"):
        self.services = services

    @property
    def settings(self):
        return self.services.settings

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_membership(
        self,
        group: Entity,
        user: User,
        states: Optional[Iterable[MembershipState]] = None,
    ) -> Optional[Membership]:
        """Return the membership of ``user`` in ``group``.

        ``states`` restricts the lookup; ``None`` matches any state.
        """

        if group.id is None or not user.is_authenticated:
            return None
        stmt = select(Membership).where(
            Membership.group_id == group.id,
            Membership.user_id == user.user_id,
        )
        if states is not None:
            stmt = stmt.where(Membership.state.in_(list(states)))  # type: ignore[attr-defined]
        with self.services.session() as session:
            return session.exec(stmt).first()

    def is_member(
        self,
        group: Entity,
        user: User,
        states: Iterable[MembershipState] = DEFAULT_STATES,
    ) -> bool:
        return self.get_membership(group, user, states) is not None

    def is_member_pending(self, group: Entity, user: User) -> bool:
        return self.is_member(group, user, [MembershipState.PENDING])

    def is_member_blocked(self, group: Entity, user: User) -> bool:
        return self.is_member(group, user, [MembershipState.BLOCKED])

    def get_user_groups(
        self,
        user: User,
        states: Iterable[MembershipState] = DEFAULT_STATES,
    ) -> List[Entity]:
        """Groups of ``user`` ordered by membership creation."""

        if not user.is_authenticated:
            return []
        stmt = (
            select(Entity)
            .join(Membership, Membership.group_id == Entity.id)
            .where(
                Membership.user_id == user.user_id,
                Membership.state.in_(list(states)),  # type: ignore[attr-defined]
            )
            .order_by(Membership.created_at, Membership.id)
        )
        with self.services.session() as session:
            return list(session.exec(stmt).all())

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    @og_entrypoint("membership.create", mutating=True)
    def create_membership(
        self,
        group: Entity,
        user: User,
        state: MembershipState = MembershipState.ACTIVE,
        roles: Optional[List[str]] = None,
    ) -> Membership:
        if not user.is_authenticated:
            raise ValueError("Anonymous users cannot become group members")
        if self.get_membership(group, user) is not None:
            raise MembershipExistsError(
                f"User {user.user_id} already has a membership in group {group.id}"
            )
        membership = Membership(
            user_id=user.user_id,
            group_id=group.id,
            state=state,
            roles=list(roles) if roles else None,
        )
        with self.services.session() as session:
            session.add(membership)
            session.commit()
            session.refresh(membership)
        log.info(
            "og.membership.created user_id=%s group_id=%s state=%s",
            user.user_id,
            group.id,
            state.value,
        )
        return membership

    @og_entrypoint("membership.set_state", mutating=True)
    def set_state(self, group: Entity, user: User, state: MembershipState) -> Optional[Membership]:
        """Change the state of an existing membership; ``None`` if there is none."""

        with self.services.session() as session:
            membership = session.exec(
                select(Membership).where(
                    Membership.group_id == group.id,
                    Membership.user_id == user.user_id,
                )
            ).first()
            if membership is None:
                return None
            membership.state = state
            session.add(membership)
            session.commit()
            session.refresh(membership)
        return membership
