"""Session lifecycle configuration (env names and defaults only)."""

from __future__ import annotations

from pathlib import Path

ENV_SESSION_AUTH_DIR = "SESSION_AUTH_DIR"
ENV_SESSION_CLIENT_ID = "SESSION_CLIENT_ID"
ENV_SESSION_WEB_URL = "SESSION_WEB_URL"
ENV_SESSION_INIT_TIMEOUT_S = "SESSION_INIT_TIMEOUT_S"
ENV_SESSION_AUTH_TIMEOUT_S = "SESSION_AUTH_TIMEOUT_S"
ENV_SESSION_WATCH_TICK_S = "SESSION_WATCH_TICK_S"
ENV_SESSION_CLEAR_ON_AUTH_FAILURE = "SESSION_CLEAR_ON_AUTH_FAILURE"
ENV_SESSION_AUTOSTART = "SESSION_AUTOSTART"
ENV_APP_ENV = "APP_ENV"

# Credential store root; the Chromium profile lives in session-<client_id>/.
DEFAULT_SESSION_AUTH_DIR = Path(".wwebjs_auth")
DEFAULT_SESSION_CLIENT_ID = "relay"
DEFAULT_SESSION_WEB_URL = "https://web.whatsapp.com/"

# How long a synchronous init request waits before reporting "in progress".
DEFAULT_SESSION_INIT_TIMEOUT_S = 30.0

# Page must show either a pairing code or the chat list within this window.
DEFAULT_SESSION_AUTH_TIMEOUT_S = 60.0
DEFAULT_SESSION_WATCH_TICK_S = 1.0

DEFAULT_SESSION_CLEAR_ON_AUTH_FAILURE = False
DEFAULT_SESSION_AUTOSTART = True
DEFAULT_APP_ENV = "production"

# WhatsApp user ids are <digits>@c.us.
CHAT_ID_SUFFIX = "@c.us"

__all__ = [
    "CHAT_ID_SUFFIX",
    "DEFAULT_APP_ENV",
    "DEFAULT_SESSION_AUTH_DIR",
    "DEFAULT_SESSION_AUTH_TIMEOUT_S",
    "DEFAULT_SESSION_AUTOSTART",
    "DEFAULT_SESSION_CLEAR_ON_AUTH_FAILURE",
    "DEFAULT_SESSION_CLIENT_ID",
    "DEFAULT_SESSION_INIT_TIMEOUT_S",
    "DEFAULT_SESSION_WATCH_TICK_S",
    "DEFAULT_SESSION_WEB_URL",
    "ENV_APP_ENV",
    "ENV_SESSION_AUTH_DIR",
    "ENV_SESSION_AUTH_TIMEOUT_S",
    "ENV_SESSION_AUTOSTART",
    "ENV_SESSION_CLEAR_ON_AUTH_FAILURE",
    "ENV_SESSION_CLIENT_ID",
    "ENV_SESSION_INIT_TIMEOUT_S",
    "ENV_SESSION_WATCH_TICK_S",
    "ENV_SESSION_WEB_URL",
]
