"""Shared column mixins and enums."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimeStamped(SQLModel):
    created_at: datetime = Field(default_factory=utcnow, nullable=False, index=True)
    updated_at: datetime = Field(
        default_factory=utcnow,
        nullable=False,
        sa_column_kwargs={"onupdate": utcnow},
    )


class MembershipState(str, Enum):
    ACTIVE = "active"
    PENDING = "pending"
    BLOCKED = "blocked"


ANONYMOUS_USER_ID = 0

NON_MEMBER_ROLE = "non-member"
MEMBER_ROLE = "member"
