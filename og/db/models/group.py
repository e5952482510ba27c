"""Content entities, group memberships and group roles."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlalchemy.orm import Mapped, relationship
from sqlmodel import Field, Relationship

from .base import MembershipState, TimeStamped


class Entity(TimeStamped, table=True):
    """A content entity.  It acts as a group when its bundle is a group type."""

    id: Optional[int] = Field(default=None, primary_key=True)
    entity_type_id: str = Field(index=True, max_length=32)
    bundle: str = Field(index=True, max_length=32)
    label: Optional[str] = Field(default=None, max_length=255)
    owner_id: Optional[int] = Field(default=None, foreign_key="user.user_id", index=True)

    members: Mapped[List["Membership"]] = Relationship(
        back_populates="group",
        sa_relationship=relationship("Membership", back_populates="group"),
    )


class Membership(TimeStamped, table=True):
    """User-group relationship."""

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.user_id", index=True)
    group_id: int = Field(foreign_key="entity.id", index=True)
    state: MembershipState = Field(default=MembershipState.ACTIVE, nullable=False, index=True)
    roles: Optional[list] = Field(default=None, sa_column=Column(JSON, nullable=True))

    user: Mapped["User"] = Relationship(
        back_populates="memberships",
        sa_relationship=relationship("User", back_populates="memberships"),
    )
    group: Mapped["Entity"] = Relationship(
        back_populates="members",
        sa_relationship=relationship("Entity", back_populates="members"),
    )

    __table_args__ = (
        UniqueConstraint("user_id", "group_id", name="uq_membership_user_group"),
    )


class OgRole(TimeStamped, table=True):
    """Permissions granted to a role inside every group of one bundle."""

    id: Optional[int] = Field(default=None, primary_key=True)
    entity_type_id: str = Field(index=True, max_length=32)
    bundle: str = Field(index=True, max_length=32)
    name: str = Field(max_length=64)
    permissions: Optional[list] = Field(default=None, sa_column=Column(JSON, nullable=True))

    __table_args__ = (
        UniqueConstraint("entity_type_id", "bundle", "name", name="uq_og_role"),
    )


class GroupType(TimeStamped, table=True):
    """An (entity type, bundle) pair registered as a group type."""

    entity_type_id: str = Field(primary_key=True, max_length=32)
    bundle: str = Field(primary_key=True, max_length=32)
