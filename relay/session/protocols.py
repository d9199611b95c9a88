"""Narrow protocol for the connection the lifecycle manager and dispatcher drive.

The browser-backed connection satisfies it structurally; tests substitute
in-memory fakes.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from relay.state.events import ConnectionEvent
from relay.state.dispatch import RecipientIdentity

from .events import EventHandler


@runtime_checkable
class Connection(Protocol):
    """A single authenticated channel to the messaging network."""

    def on(self, event: ConnectionEvent, handler: EventHandler) -> None: ...
    async def start(self) -> None: ...
    async def close(self) -> None: ...
    async def resolve(self, address: str) -> RecipientIdentity | None: ...
    async def is_registered(self, chat_id: str) -> bool: ...
    async def send_text(self, identity: RecipientIdentity, body: str) -> str | None: ...


__all__ = ["Connection"]
