"""A broadcast bus that hands every message to all connected subscribers."""

from __future__ import annotations

import itertools
from typing import Callable, Dict

Subscriber = Callable[[str], None]


class EventBus:
    """Delivers each sent message to every connected subscriber."""

    def __init__(self) -> None:
        self._ids = itertools.count()
        self._subscribers: Dict[int, Subscriber] = {}

    def connect(self, callback: Subscriber) -> int:
        """Register ``callback`` and return its handler id."""
        handler_id = next(self._ids)
        self._subscribers[handler_id] = callback
        return handler_id

    def disconnect(self, handler_id: int) -> None:
        """Remove a subscriber; unknown ids are ignored."""
        self._subscribers.pop(handler_id, None)

    def send(self, message: str) -> None:
        """Hand ``message`` to every subscriber."""
        for callback in list(self._subscribers.values()):
            callback(message)

    def __len__(self) -> int:
        return len(self._subscribers)