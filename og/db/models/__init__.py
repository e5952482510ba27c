"""SQLModel tables."""

from .base import (
    ANONYMOUS_USER_ID,
    MEMBER_ROLE,
    NON_MEMBER_ROLE,
    MembershipState,
    TimeStamped,
    utcnow,
)
from .context import ContextPluginConfig
from .group import Entity, GroupType, Membership, OgRole
from .user import User

__all__ = [
    "ANONYMOUS_USER_ID",
    "MEMBER_ROLE",
    "NON_MEMBER_ROLE",
    "ContextPluginConfig",
    "Entity",
    "GroupType",
    "Membership",
    "MembershipState",
    "OgRole",
    "TimeStamped",
    "User",
    "utcnow",
]
