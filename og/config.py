"""Environment driven settings for the membership services."""

from __future__ import annotations

import os
from dataclasses import dataclass

TRUTHY = {"1", "true", "yes", "on"}
FALSY = {"0", "false", "no", "off", ""}

DEFAULT_DATABASE_URL = "sqlite:///og.db"


def env_flag(name: str, *, default: str = "0") -> bool:
    value = os.getenv(name)
    if value is None:
        value = default
    return value.strip().lower() in TRUTHY


def parse_flag(value: object) -> bool:
    """Read a boolean from a bool, 0/1 or a truthy/falsy string."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in TRUTHY:
            return True
        if normalized in FALSY:
            return False
    raise ValueError(f"Not a boolean flag: {value!r}")


@dataclass(frozen=True)
class OgSettings:
    """Runtime switches.

    Parameters
    ----------
    database_url:
        SQLAlchemy URL used by :func:`og.db.init.init_db`.
    group_manager_full_access:
        When enabled the owner of a group passes every access check on it.
    read_only:
        Mutating entrypoints raise :class:`og.exceptions.OgReadOnlyError`.
    db_echo:
        Forwarded to ``create_engine(echo=...)``.
    """

    database_url: str = DEFAULT_DATABASE_URL
    group_manager_full_access: bool = True
    read_only: bool = False
    db_echo: bool = False

    @classmethod
    def from_env(cls) -> "OgSettings":
        return cls(
            database_url=os.getenv("OG_DATABASE_URL", DEFAULT_DATABASE_URL),
            group_manager_full_access=env_flag("OG_GROUP_MANAGER_FULL_ACCESS", default="1"),
            read_only=env_flag("OG_READ_ONLY"),
            db_echo=env_flag("OG_DB_ECHO"),
        )


__all__ = ["OgSettings", "env_flag", "parse_flag", "TRUTHY", "FALSY", "DEFAULT_DATABASE_URL"]
