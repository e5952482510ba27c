"""Route names, URL construction and redirect destinations."""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple
from urllib.parse import urlencode

from og.exceptions import RouteNotFoundError

DEFAULT_ROUTES: Dict[str, str] = {
    "og.subscribe": "/group/{entity_type_id}/{entity_id}/subscribe",
    "og.unsubscribe": "/group/{entity_type_id}/{entity_id}/unsubscribe",
    "user.login": "/user/login",
}


@dataclass(frozen=True)
class Url:
    route_name: str
    path: str
    query: Tuple[Tuple[str, str], ...] = field(default=())

    def to_string(self) -> str:
        if not self.query:
            return self.path
        return f"{self.path}?{urlencode(self.query)}"

    def __str__(self) -> str:
        return self.to_string()


class Router:
    def __init__(self, routes: Optional[Mapping[str, str]] = None):
        self.routes: Dict[str, str] = dict(DEFAULT_ROUTES if routes is None else routes)

    def add_route(self, route_name: str, template: str) -> None:
        self.routes[route_name] = template

    def from_route(
        self,
        route_name: str,
        parameters: Optional[Mapping[str, object]] = None,
        query: Optional[Mapping[str, str]] = None,
    ) -> Url:
        try:
            template = self.routes[route_name]
        except KeyError:
            raise RouteNotFoundError(f"Route {route_name!r} does not exist") from None
        parameters = dict(parameters or {})
        required = [name for _, name, _, _ in string.Formatter().parse(template) if name]
        missing = [name for name in required if parameters.get(name) in (None, "")]
        if missing:
            raise RouteNotFoundError(
                f"Route {route_name!r} is missing parameters: {', '.join(missing)}"
            )
        path = template.format(**{name: parameters[name] for name in required})
        return Url(route_name=route_name, path=path, query=tuple((query or {}).items()))


def get_destination_array(current_path: str) -> Dict[str, str]:
    """Query arguments that send the user back to ``current_path``."""

    return {"destination": current_path or "/"}
