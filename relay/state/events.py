"""Connection lifecycle event names."""

from __future__ import annotations

from enum import Enum


class ConnectionEvent(str, Enum):
    PAIRING = "pairing"
    AUTHENTICATED = "authenticated"
    LOADING = "loading"
    READY = "ready"
    AUTH_FAILURE = "auth_failure"
    DISCONNECTED = "disconnected"


__all__ = ["ConnectionEvent"]
