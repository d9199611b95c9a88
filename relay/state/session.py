"""Process-wide session state (connection handle + readiness flags).

All fields are read and written under one lock so a reader on any thread or
task sees a whole snapshot. Transitions that name a connection only apply
while that connection is still the current one; events arriving late from a
replaced connection are ignored.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING
from dataclasses import dataclass

from .phase import SessionPhase

if TYPE_CHECKING:
    from relay.session.protocols import Connection


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    connection: Connection | None
    ready: bool
    connecting: bool
    phase: SessionPhase


class SessionState:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._connection: Connection | None = None
        self._ready = False
        self._connecting = False
        self._phase = SessionPhase.UNINITIALIZED

    @property
    def connection(self) -> Connection | None:
        with self._lock:
            return self._connection

    @property
    def ready(self) -> bool:
        with self._lock:
            return self._ready

    @property
    def connecting(self) -> bool:
        with self._lock:
            return self._connecting

    @property
    def phase(self) -> SessionPhase:
        with self._lock:
            return self._phase

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            return SessionSnapshot(
                connection=self._connection,
                ready=self._ready,
                connecting=self._connecting,
                phase=self._phase,
            )

    def begin_connecting(self, connection: Connection) -> bool:
        """Publish a new connection as connecting; False if one is live or in flight."""
        with self._lock:
            if self._connecting or (self._ready and self._connection is not None):
                return False
            self._connection = connection
            self._connecting = True
            self._ready = False
            self._phase = SessionPhase.CONNECTING
            return True

    def mark_ready(self, connection: Connection) -> bool:
        with self._lock:
            if self._connection is not connection:
                return False
            self._ready = True
            self._connecting = False
            self._phase = SessionPhase.READY
            return True

    def mark_down(self, connection: Connection, phase: SessionPhase) -> bool:
        """Drop *connection* after a disconnect or auth failure."""
        with self._lock:
            if self._connection is not connection:
                return False
            self._connection = None
            self._ready = False
            self._connecting = False
            self._phase = phase
            return True

    def abort(self, connection: Connection) -> bool:
        """Roll back a failed attempt to the pre-attempt (not ready, not connecting) state."""
        with self._lock:
            if self._connection is not connection:
                return False
            self._connection = None
            self._ready = False
            self._connecting = False
            if self._phase is SessionPhase.CONNECTING:
                self._phase = SessionPhase.DISCONNECTED
            return True


__all__ = ["SessionSnapshot", "SessionState"]
