"""Environment parsing for runtime settings."""

from __future__ import annotations

import os
import sys
from pathlib import Path

from relay.config.secrets import ENV_MESSAGE_SECRET_KEY
from relay.config.browser import (
    BROWSER_HEADLESS,
    BROWSER_LAUNCH_ARGS,
    ENV_BROWSER_EXECUTABLE_PATH,
    candidate_paths_for,
)
from relay.state.settings import (
    AppSettings,
    AuthSettings,
    BrowserSettings,
    SessionSettings,
)
from relay.config.session import (
    ENV_APP_ENV,
    DEFAULT_APP_ENV,
    ENV_SESSION_AUTH_DIR,
    ENV_SESSION_WEB_URL,
    ENV_SESSION_AUTOSTART,
    ENV_SESSION_CLIENT_ID,
    DEFAULT_SESSION_AUTH_DIR,
    DEFAULT_SESSION_WEB_URL,
    ENV_SESSION_WATCH_TICK_S,
    DEFAULT_SESSION_AUTOSTART,
    DEFAULT_SESSION_CLIENT_ID,
    ENV_SESSION_AUTH_TIMEOUT_S,
    ENV_SESSION_INIT_TIMEOUT_S,
    DEFAULT_SESSION_WATCH_TICK_S,
    DEFAULT_SESSION_AUTH_TIMEOUT_S,
    DEFAULT_SESSION_INIT_TIMEOUT_S,
    ENV_SESSION_CLEAR_ON_AUTH_FAILURE,
    DEFAULT_SESSION_CLEAR_ON_AUTH_FAILURE,
)


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _optional_str_env(name: str) -> str | None:
    v = (os.getenv(name) or "").strip()
    return v or None


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except Exception:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _load_auth_settings() -> AuthSettings:
    secret_key = (os.getenv(ENV_MESSAGE_SECRET_KEY) or "").strip()
    return AuthSettings(secret_key=secret_key)


def _load_browser_settings() -> BrowserSettings:
    return BrowserSettings(
        executable_override=_optional_str_env(ENV_BROWSER_EXECUTABLE_PATH),
        candidate_paths=candidate_paths_for(sys.platform),
        headless=BROWSER_HEADLESS,
        launch_args=BROWSER_LAUNCH_ARGS,
    )


def _load_session_settings() -> SessionSettings:
    auth_dir_raw = os.getenv(ENV_SESSION_AUTH_DIR)
    auth_dir = Path(auth_dir_raw).expanduser() if auth_dir_raw and auth_dir_raw.strip() else DEFAULT_SESSION_AUTH_DIR
    if not auth_dir.is_absolute():
        auth_dir = Path.cwd() / auth_dir

    init_timeout = _float_env(ENV_SESSION_INIT_TIMEOUT_S, DEFAULT_SESSION_INIT_TIMEOUT_S)
    if init_timeout <= 0:
        init_timeout = DEFAULT_SESSION_INIT_TIMEOUT_S

    auth_timeout = _float_env(ENV_SESSION_AUTH_TIMEOUT_S, DEFAULT_SESSION_AUTH_TIMEOUT_S)
    if auth_timeout <= 0:
        auth_timeout = DEFAULT_SESSION_AUTH_TIMEOUT_S

    watch_tick = _float_env(ENV_SESSION_WATCH_TICK_S, DEFAULT_SESSION_WATCH_TICK_S)
    if watch_tick <= 0:
        watch_tick = DEFAULT_SESSION_WATCH_TICK_S

    return SessionSettings(
        auth_dir=auth_dir,
        client_id=_str_env(ENV_SESSION_CLIENT_ID, DEFAULT_SESSION_CLIENT_ID),
        web_url=_str_env(ENV_SESSION_WEB_URL, DEFAULT_SESSION_WEB_URL),
        init_timeout_s=init_timeout,
        auth_timeout_s=auth_timeout,
        watch_tick_s=watch_tick,
        clear_on_auth_failure=_bool_env(ENV_SESSION_CLEAR_ON_AUTH_FAILURE, DEFAULT_SESSION_CLEAR_ON_AUTH_FAILURE),
        autostart=_bool_env(ENV_SESSION_AUTOSTART, DEFAULT_SESSION_AUTOSTART),
    )


def load_settings() -> AppSettings:
    return AppSettings(
        auth=_load_auth_settings(),
        browser=_load_browser_settings(),
        session=_load_session_settings(),
        environment=_str_env(ENV_APP_ENV, DEFAULT_APP_ENV).lower(),
    )


__all__ = ["load_settings"]
