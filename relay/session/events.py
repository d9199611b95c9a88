"""Minimal subscriber registry for connection events."""

from __future__ import annotations

import logging
from typing import Any
from collections.abc import Callable

from relay.state.events import ConnectionEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[..., None]


class ConnectionEvents:
    def __init__(self) -> None:
        self._handlers: dict[ConnectionEvent, list[EventHandler]] = {}

    def subscribe(self, event: ConnectionEvent, handler: EventHandler) -> None:
        self._handlers.setdefault(event, []).append(handler)

    def emit(self, event: ConnectionEvent, *args: Any) -> None:
        # One misbehaving subscriber must not stop the others from seeing the event.
        for handler in list(self._handlers.get(event, ())):
            try:
                handler(*args)
            except Exception:
                logger.exception("connection: %s handler failed", event.value)


__all__ = ["ConnectionEvents", "EventHandler"]
