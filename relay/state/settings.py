"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from pathlib import Path
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AuthSettings:
    secret_key: str


@dataclass(frozen=True, slots=True)
class BrowserSettings:
    executable_override: str | None
    candidate_paths: tuple[str, ...]
    headless: bool
    launch_args: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class SessionSettings:
    auth_dir: Path
    client_id: str
    web_url: str
    init_timeout_s: float
    auth_timeout_s: float
    watch_tick_s: float
    clear_on_auth_failure: bool
    autostart: bool

    @property
    def store_dir(self) -> Path:
        return self.auth_dir / f"session-{self.client_id}"


@dataclass(frozen=True, slots=True)
class AppSettings:
    auth: AuthSettings
    browser: BrowserSettings
    session: SessionSettings
    environment: str

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


__all__ = [
    "AppSettings",
    "AuthSettings",
    "BrowserSettings",
    "SessionSettings",
]
