"""Error helpers for the HTTP JSON API."""

from __future__ import annotations

import logging
import traceback
from typing import Any
from dataclasses import dataclass
from datetime import datetime, timezone

from fastapi import Request
from fastapi.responses import ORJSONResponse

from relay.state.dispatch import DispatchErrorKind
from relay.errors import RuntimeNotFoundError, SessionNotReadyError
from relay.config.http import (
    ERROR_INTERNAL,
    ERROR_WHATSAPP_CLIENT,
    ERROR_MESSAGE_SEND_FAILED,
    ERROR_SERVICE_UNAVAILABLE,
    ERROR_WHATSAPP_NOT_READY,
    ERROR_INVALID_NUMBER_FORMAT,
    ERROR_NUMBER_NOT_REGISTERED,
)

logger = logging.getLogger(__name__)

DISPATCH_ERROR_STATUS: dict[DispatchErrorKind, tuple[str, int]] = {
    DispatchErrorKind.NOT_READY: (ERROR_WHATSAPP_NOT_READY, 503),
    DispatchErrorKind.RECIPIENT_NOT_REGISTERED: (ERROR_NUMBER_NOT_REGISTERED, 400),
    DispatchErrorKind.INVALID_ADDRESS_FORMAT: (ERROR_INVALID_NUMBER_FORMAT, 400),
    DispatchErrorKind.RECIPIENT_RESOLUTION_FAILED: (ERROR_WHATSAPP_CLIENT, 502),
    DispatchErrorKind.SEND_FAILED: (ERROR_MESSAGE_SEND_FAILED, 500),
}


@dataclass(slots=True, eq=False)
class ApiError(Exception):
    """Raised by route code to produce a structured error response."""

    code: str
    message: str
    status_code: int
    details: Any = None


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_error_body(code: str, message: str, details: Any = None) -> dict[str, Any]:
    return {
        "error": {
            "code": code,
            "message": message,
            "details": details,
            "timestamp": _timestamp(),
        }
    }


def error_response(code: str, message: str, status_code: int, details: Any = None) -> ORJSONResponse:
    return ORJSONResponse(build_error_body(code, message, details), status_code=status_code)


def dispatch_error_status(kind: DispatchErrorKind | None) -> tuple[str, int]:
    if kind is None:
        return ERROR_MESSAGE_SEND_FAILED, 500
    return DISPATCH_ERROR_STATUS[kind]


def handle_error(
    exc: Exception,
    context: str,
    default_message: str = "An unexpected error occurred",
    *,
    development: bool = False,
) -> ORJSONResponse:
    logger.error("[%s] error: %s", context, exc, exc_info=exc)

    if isinstance(exc, RuntimeNotFoundError):
        return error_response(ERROR_SERVICE_UNAVAILABLE, str(exc), 503, {"context": context})

    if isinstance(exc, SessionNotReadyError):
        return error_response(
            ERROR_WHATSAPP_NOT_READY,
            "WhatsApp is not connected yet. Please wait for initialization.",
            503,
            str(exc),
        )

    details: dict[str, Any] = {"context": context}
    message = default_message
    if development:
        message = str(exc) or default_message
        details["stack"] = "".join(traceback.format_exception(exc))
    return error_response(ERROR_INTERNAL, message, 500, details)


async def api_error_handler(_request: Request, exc: Exception) -> ORJSONResponse:
    if not isinstance(exc, ApiError):
        raise exc
    return error_response(exc.code, exc.message, exc.status_code, exc.details)


__all__ = [
    "ApiError",
    "DISPATCH_ERROR_STATUS",
    "api_error_handler",
    "build_error_body",
    "dispatch_error_status",
    "error_response",
    "handle_error",
]
