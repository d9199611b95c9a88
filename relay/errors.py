"""Shared error types for the relay server."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RuntimeNotFoundError(Exception):
    """Raised when no usable Chromium/Chrome executable exists on the host."""

    searched: tuple[str, ...]
    override: str | None = None

    def __str__(self) -> str:
        if self.override:
            return (
                f"Chromium executable not found at path: {self.override}. "
                "Please verify the installation."
            )
        return (
            "Chromium/Chrome executable not found. Please ensure Chromium is installed "
            "and BROWSER_EXECUTABLE_PATH is set correctly. Searched: " + ", ".join(self.searched)
        )


@dataclass(frozen=True, slots=True)
class SessionNotReadyError(Exception):
    """Raised by operations that require a ready session."""

    reason: str


@dataclass(frozen=True, slots=True)
class ConnectionClosedError(Exception):
    """Raised when a connection is used before start() or after close()."""

    reason: str


__all__ = ["ConnectionClosedError", "RuntimeNotFoundError", "SessionNotReadyError"]
