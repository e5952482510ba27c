"""Stored configuration of context plugins."""

from __future__ import annotations

from sqlmodel import Field

from .base import TimeStamped


class ContextPluginConfig(TimeStamped, table=True):
    plugin_id: str = Field(primary_key=True, max_length=64)
    status: bool = Field(default=False, nullable=False, index=True)
    weight: int = Field(default=0, nullable=False, index=True)
