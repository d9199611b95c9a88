"""Session phase enum."""

from __future__ import annotations

from enum import Enum


class SessionPhase(str, Enum):
    UNINITIALIZED = "uninitialized"
    CONNECTING = "connecting"
    READY = "ready"
    DISCONNECTED = "disconnected"
    AUTH_FAILED = "auth_failed"


__all__ = ["SessionPhase"]
