"""Application routes and the user state shared between views."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from urllib.parse import urlsplit

DEFAULT_USERNAME = "initial"


class Route(enum.Enum):
    """Pages of the application, keyed by their path."""

    LOGIN = "/"
    CHAT = "/chat"
    NOT_FOUND = "/404"


@dataclass
class User:
    """The signed-in user, shared and mutated by the views."""

    username: str = DEFAULT_USERNAME


def route_for_path(path: str) -> Route:
    """Return the route that serves ``path``; unknown paths give NOT_FOUND."""
    cleaned = urlsplit(path).path.rstrip("/") or "/"
    try:
        return Route(cleaned)
    except ValueError:
        return Route.NOT_FOUND


def path_for_route(route: Route) -> str:
    """Return the path at which ``route`` is served."""
    return Route(route).value