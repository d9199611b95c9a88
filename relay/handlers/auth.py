"""Shared-secret gating for API routes."""

from __future__ import annotations

import secrets

from fastapi import Request

from relay.config.http import ERROR_UNAUTHORIZED
from relay.config.secrets import SECRET_KEY_HEADER

from .errors import ApiError


def get_secret_key(request: Request) -> str:
    return (request.headers.get(SECRET_KEY_HEADER) or "").strip()


def validate_secret_key(provided: str, expected: str) -> bool:
    if not expected:
        # No key configured: the API is open.
        return True
    return secrets.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def check_secret_key(request: Request, expected: str) -> None:
    if validate_secret_key(get_secret_key(request), expected):
        return
    raise ApiError(
        code=ERROR_UNAUTHORIZED,
        message=f"Invalid or missing secret key. Provide it via the '{SECRET_KEY_HEADER}' header.",
        status_code=401,
    )


__all__ = ["check_secret_key", "get_secret_key", "validate_secret_key"]
