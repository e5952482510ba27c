#!/usr/bin/env python3
"""Inspect and change the stored configuration of context plugins.

Usage:
    python scripts/og_context.py list --mode active
    python scripts/og_context.py sync
    python scripts/og_context.py update entity --enable --weight -1

``--db-url`` overrides ``OG_DATABASE_URL``.  ``sync`` creates disabled rows
for registered plugins without stored configuration and removes rows of
plugins that are no longer registered.
"""

from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, List, Optional, Sequence

from og.config import OgSettings
from og.context import ReturnMode
from og.db.init import init_db, session_factory
from og.exceptions import OgError
from og.services import OgServices

MODES = {
    "all": ReturnMode.ALL,
    "storage": ReturnMode.ONLY_IN_STORAGE,
    "active": ReturnMode.ONLY_ACTIVE,
}


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage Organic Groups context plugins")
    parser.add_argument(
        "--db-url",
        default=None,
        help="SQLAlchemy database URL (defaults to OG_DATABASE_URL)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    list_parser = sub.add_parser("list", help="List context plugins")
    list_parser.add_argument(
        "--mode",
        choices=sorted(MODES),
        default="all",
        help="all registered plugins, only stored ones, or only active ones",
    )

    sub.add_parser("sync", help="Synchronise stored configuration with the registry")

    update_parser = sub.add_parser("update", help="Change status and/or weight of a plugin")
    update_parser.add_argument("plugin_id")
    status = update_parser.add_mutually_exclusive_group()
    status.add_argument("--enable", dest="status", action="store_const", const=True)
    status.add_argument("--disable", dest="status", action="store_const", const=False)
    update_parser.add_argument("--weight", type=int, default=None)
    return parser.parse_args(argv)


def format_rows(services: OgServices, mode: ReturnMode) -> List[str]:
    rows = []
    for plugin_id, entry in services.context_handler.get_plugins(mode).items():
        state = "enabled" if entry.status else "disabled"
        stored = "" if entry.stored else " (not stored)"
        rows.append(f"{plugin_id:<16} {state:<8} weight={entry.weight}{stored}")
    return rows


def main(argv: Optional[Sequence[str]] = None, *, services: Optional[OgServices] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if services is None:
        settings = OgSettings.from_env()
        engine = init_db(args.db_url, settings=settings)
        services = OgServices(session_factory=session_factory(engine), settings=settings)

    handler = services.context_handler
    try:
        if args.command == "list":
            for line in format_rows(services, MODES[args.mode]):
                print(line)
        elif args.command == "sync":
            added, removed = handler.update_config_storage()
            print(f"[og] added={added} removed={removed}")
        elif args.command == "update":
            values: Dict[str, Any] = {}
            if args.status is not None:
                values["status"] = args.status
            if args.weight is not None:
                values["weight"] = args.weight
            if not values:
                print("[og] nothing to update; pass --enable/--disable and/or --weight")
                return 2
            entry = handler.update_plugin(args.plugin_id, values)
            print(f"[og] {entry.plugin_id} status={entry.status} weight={entry.weight}")
    except OgError as exc:
        print(f"[og] error: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
