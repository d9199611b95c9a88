"""Browser launch description (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LaunchConfig:
    executable_path: str
    headless: bool
    args: tuple[str, ...]


__all__ = ["LaunchConfig"]
