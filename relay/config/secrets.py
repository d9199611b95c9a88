"""Secrets and authentication configuration."""

from __future__ import annotations

ENV_MESSAGE_SECRET_KEY = "MESSAGE_SECRET_KEY"

# Header clients use to present the shared secret.
SECRET_KEY_HEADER = "x-secret-key"

__all__ = ["ENV_MESSAGE_SECRET_KEY", "SECRET_KEY_HEADER"]
