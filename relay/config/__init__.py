"""Configuration module exports (env names and defaults only)."""

from .secrets import ENV_MESSAGE_SECRET_KEY
from .session import DEFAULT_SESSION_INIT_TIMEOUT_S

__all__ = [
    "DEFAULT_SESSION_INIT_TIMEOUT_S",
    "ENV_MESSAGE_SECRET_KEY",
]
