"""Render results produced by the formatters."""

from __future__ import annotations

import html
from dataclasses import dataclass, replace
from typing import Optional, Tuple, Union

from .routing import Url


@dataclass(frozen=True)
class Empty:
    max_age: Optional[int] = None


@dataclass(frozen=True)
class ManagerNotice:
    title: str
    classes: Tuple[str, ...] = ("group", "manager")
    max_age: Optional[int] = None


@dataclass(frozen=True)
class ClosedNotice:
    title: str
    classes: Tuple[str, ...] = ("group", "closed")
    max_age: Optional[int] = None


@dataclass(frozen=True)
class Link:
    title: str
    url: Url
    classes: Tuple[str, ...] = ("group",)
    max_age: Optional[int] = None


Element = Union[Empty, ManagerNotice, ClosedNotice, Link]


def uncacheable(element: Element) -> Element:
    """Mark ``element`` as valid for the current viewer only."""

    return replace(element, max_age=0)


def is_cacheable(element: Element) -> bool:
    return element.max_age != 0


def render_html(element: Element) -> str:
    if isinstance(element, Link):
        return '<a href="{}" title="{}" class="{}">{}</a>'.format(
            html.escape(element.url.to_string()),
            html.escape(element.title),
            html.escape(" ".join(element.classes)),
            html.escape(element.title),
        )
    if isinstance(element, (ManagerNotice, ClosedNotice)):
        return '<span title="{}" class="{}">{}</span>'.format(
            html.escape(element.title),
            html.escape(" ".join(element.classes)),
            html.escape(element.title),
        )
    return ""
