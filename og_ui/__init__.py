"""Presentation helpers for Organic Groups."""

from .elements import ClosedNotice, Element, Empty, Link, ManagerNotice, render_html
from .formatter import GroupSubscribeFormatter
from .routing import Router, Url

__all__ = [
    "ClosedNotice",
    "Element",
    "Empty",
    "GroupSubscribeFormatter",
    "Link",
    "ManagerNotice",
    "Router",
    "Url",
    "render_html",
]
