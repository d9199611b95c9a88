"""HTTP routes: session control, status and message dispatch."""

from __future__ import annotations

import logging
from typing import Any
from datetime import datetime, timezone

from fastapi import Depends, Request, APIRouter
from fastapi.responses import ORJSONResponse

from relay.state import RuntimeDeps
from relay.config.secrets import SECRET_KEY_HEADER
from relay.config.http import (
    API_PREFIX,
    ERROR_VALIDATION,
    MIN_SENDER_NAME_CHARS,
    ERROR_WHATSAPP_CLIENT,
    ERROR_SERVICE_UNAVAILABLE,
    ERROR_WHATSAPP_NOT_READY,
)

from .auth import check_secret_key
from .phone import require_valid_number
from .errors import ApiError, handle_error, error_response, dispatch_error_status
from .parser import require_str, parse_json_body, validate_required, parse_request_body

logger = logging.getLogger(__name__)

router = APIRouter(prefix=API_PREFIX)


def get_runtime_deps(request: Request) -> RuntimeDeps:
    deps = getattr(request.app.state, "runtime_deps", None)
    if deps is None:
        raise ApiError(ERROR_SERVICE_UNAVAILABLE, "Runtime dependencies are not initialized", 503)
    return deps


def require_secret(request: Request, deps: RuntimeDeps = Depends(get_runtime_deps)) -> None:
    check_secret_key(request, deps.settings.auth.secret_key)


def _readiness(deps: RuntimeDeps) -> dict[str, Any]:
    ready = deps.lifecycle.is_ready()
    return {"ready": ready, "status": "connected" if ready else "disconnected"}


@router.get("/status")
async def status(deps: RuntimeDeps = Depends(get_runtime_deps)) -> Any:
    try:
        data = _readiness(deps)
        if deps.settings.is_development:
            snap = deps.lifecycle.snapshot()
            data["debug"] = {
                "ready": snap.ready,
                "hasConnection": snap.connection is not None,
                "connecting": snap.connecting,
                "phase": snap.phase.value,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
            logger.debug("status: %s", data["debug"])
        return {"success": True, "data": data}
    except Exception as exc:
        return handle_error(
            exc, "status:GET", "Failed to get status", development=deps.settings.is_development
        )


@router.get("/auth-config")
async def auth_config(deps: RuntimeDeps = Depends(get_runtime_deps)) -> dict[str, Any]:
    required = bool(deps.settings.auth.secret_key)
    message = (
        f"Secret key is required. Send it in the '{SECRET_KEY_HEADER}' header."
        if required
        else "No secret key is configured; the API is open."
    )
    return {"success": True, "data": {"secretKeyRequired": required, "message": message}}


@router.get("/init-whatsapp", dependencies=[Depends(require_secret)])
async def init_whatsapp_background(deps: RuntimeDeps = Depends(get_runtime_deps)) -> Any:
    try:
        if deps.lifecycle.is_ready():
            return {"success": True, "message": "WhatsApp already initialized and ready", "ready": True}
        deps.lifecycle.start_background()
        return {
            "success": True,
            "message": "WhatsApp initialization started. Check server terminal for QR code.",
            "ready": False,
        }
    except Exception as exc:
        return handle_error(
            exc,
            "init-whatsapp:GET",
            "Failed to initialize WhatsApp",
            development=deps.settings.is_development,
        )


@router.post("/init-whatsapp", dependencies=[Depends(require_secret)])
async def init_whatsapp(deps: RuntimeDeps = Depends(get_runtime_deps)) -> Any:
    try:
        if deps.lifecycle.is_ready():
            return {"success": True, "message": "WhatsApp already initialized and ready", "ready": True}
        ready = await deps.lifecycle.initialize(timeout_s=deps.settings.session.init_timeout_s)
        if ready:
            return {"success": True, "message": "WhatsApp initialization completed", "ready": True}
        return {
            "success": True,
            "message": "WhatsApp initialization is in progress. Check server terminal for QR code.",
            "ready": False,
        }
    except Exception as exc:
        return handle_error(
            exc,
            "init-whatsapp:POST",
            "Failed to initialize WhatsApp",
            development=deps.settings.is_development,
        )


@router.get("/send-message")
async def send_message_status(deps: RuntimeDeps = Depends(get_runtime_deps)) -> dict[str, Any]:
    data = _readiness(deps)
    data["message"] = (
        "WhatsApp is ready to send messages"
        if data["ready"]
        else "WhatsApp is not connected. Initialize it first."
    )
    return {"success": True, "data": data}


@router.post("/send-message", dependencies=[Depends(require_secret)])
async def send_message(request: Request, deps: RuntimeDeps = Depends(get_runtime_deps)) -> Any:
    try:
        body = await parse_request_body(request)
        validate_required(body, ("number", "message", "name"))
        number = require_str(body, "number", "Phone number")
        message = require_str(body, "message", "Message")
        name = require_str(body, "name", "Name")

        sender = name.strip()
        if len(sender) < MIN_SENDER_NAME_CHARS:
            raise ApiError(
                ERROR_VALIDATION,
                f"Name must be at least {MIN_SENDER_NAME_CHARS} characters long",
                400,
                {"providedLength": len(sender)},
            )
        text = message.strip()
        if not text:
            raise ApiError(ERROR_VALIDATION, "Message cannot be empty", 400)

        if not deps.lifecycle.is_ready():
            raise ApiError(
                ERROR_WHATSAPP_NOT_READY,
                "WhatsApp is not connected yet. Please check the server terminal for QR code.",
                503,
                {"ready": False},
            )

        address = require_valid_number(number)
        result = await deps.dispatcher.send(address, f"*{sender}*\n\n{text}")
        if not result.success:
            code, status_code = dispatch_error_status(result.kind)
            return error_response(
                code,
                result.detail or "Failed to send message",
                status_code,
                {"recipient": number},
            )

        logger.info("send-message: delivered to %s", address)
        return {
            "success": True,
            "message": "Message sent successfully",
            "data": {"recipient": number, "recipientName": sender},
        }
    except ApiError:
        raise
    except Exception as exc:
        return handle_error(
            exc,
            "send-message:POST",
            "Failed to send WhatsApp message",
            development=deps.settings.is_development,
        )


@router.post("/check-number", dependencies=[Depends(require_secret)])
async def check_number(request: Request, deps: RuntimeDeps = Depends(get_runtime_deps)) -> Any:
    development = deps.settings.is_development
    try:
        body = await parse_json_body(request)
        validate_required(body, ("number",))
        number = require_str(body, "number", "Phone number")

        if not deps.lifecycle.is_ready():
            raise ApiError(
                ERROR_WHATSAPP_NOT_READY,
                "WhatsApp is not connected. Please initialize WhatsApp first.",
                503,
            )
        if deps.lifecycle.get_connection() is None:
            raise ApiError(ERROR_WHATSAPP_CLIENT, "WhatsApp client is not available", 503)

        address = require_valid_number(number)
    except ApiError:
        raise
    except Exception as exc:
        return handle_error(exc, "check-number:POST", "Failed to check number", development=development)

    try:
        lookup = await deps.dispatcher.lookup(address)
    except Exception as exc:
        return handle_error(
            exc,
            "check-number:isRegisteredUser",
            "Failed to check if number is registered",
            development=development,
        )

    number_id = None
    if lookup.identity is not None:
        number_id = {"serialized": lookup.identity.serialized, "user": lookup.identity.user}
    return {
        "success": True,
        "data": {
            "number": lookup.number,
            "chatId": lookup.chat_id,
            "isRegistered": lookup.registered,
            "numberId": number_id,
        },
    }


__all__ = ["get_runtime_deps", "require_secret", "router"]
