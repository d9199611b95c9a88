"""Logging initialization."""

from __future__ import annotations

import os
import logging

from relay.config.logging import LOG_LEVEL, LOG_FORMAT, NOISY_LOGGERS, ENV_SHOW_BROWSER_LOGS


def configure_logging() -> None:
    # Playwright and asyncio debug output is noisy at startup. Keep it tame unless explicitly enabled.
    if (os.getenv(ENV_SHOW_BROWSER_LOGS) or "").strip().lower() not in {"1", "true", "yes"}:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)


__all__ = ["configure_logging"]
