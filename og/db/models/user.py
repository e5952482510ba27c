"""User table definition."""

from typing import List, Optional

from sqlalchemy import JSON, Column
from sqlalchemy.orm import Mapped, relationship
from sqlmodel import Field, Relationship

from .base import ANONYMOUS_USER_ID, TimeStamped


class User(TimeStamped, table=True):
    """Site account.  ``user_id`` 0 is reserved for the anonymous viewer."""

    user_id: int = Field(primary_key=True)
    name: Optional[str] = Field(default=None, max_length=128)
    active: bool = Field(default=True, nullable=False)
    permissions: Optional[list] = Field(
        default=None,
        sa_column=Column(JSON, nullable=True),
    )

    memberships: Mapped[List["Membership"]] = Relationship(
        back_populates="user",
        sa_relationship=relationship("Membership", back_populates="user"),
    )

    @property
    def is_authenticated(self) -> bool:
        return self.user_id != ANONYMOUS_USER_ID

    def has_permission(self, permission: str) -> bool:
        return permission in (self.permissions or [])
