"""Logging configuration (env names and defaults only)."""

from __future__ import annotations

import os

ENV_LOG_LEVEL = "LOG_LEVEL"
ENV_LOG_FORMAT = "LOG_FORMAT"
ENV_SHOW_BROWSER_LOGS = "SHOW_BROWSER_LOGS"

DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

LOG_LEVEL: str = (os.getenv(ENV_LOG_LEVEL) or "INFO").strip().upper()
LOG_FORMAT: str = (os.getenv(ENV_LOG_FORMAT) or "").strip() or DEFAULT_LOG_FORMAT

# Loggers that are chatty at startup and get pinned to WARNING by default.
NOISY_LOGGERS = ("playwright", "asyncio", "httpx")

__all__ = [
    "DEFAULT_LOG_FORMAT",
    "ENV_LOG_FORMAT",
    "ENV_LOG_LEVEL",
    "ENV_SHOW_BROWSER_LOGS",
    "LOG_FORMAT",
    "LOG_LEVEL",
    "NOISY_LOGGERS",
]
