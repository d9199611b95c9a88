"""Request body parsing/validation (JSON, multipart form, URL-encoded form)."""

from __future__ import annotations

from typing import Any
from collections.abc import Iterable

import orjson
from fastapi import Request
from starlette.datastructures import FormData, UploadFile

from relay.config.http import (
    ERROR_VALIDATION,
    CONTENT_TYPE_JSON,
    ERROR_BAD_REQUEST,
    CONTENT_TYPE_MULTIPART,
    CONTENT_TYPE_URLENCODED,
)

from .errors import ApiError


def _decode_json(raw: bytes) -> dict[str, Any]:
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise ApiError(ERROR_BAD_REQUEST, "Invalid JSON in request body", 400, str(exc)) from exc
    if not isinstance(data, dict):
        raise ApiError(ERROR_BAD_REQUEST, "Request body must be a JSON object", 400)
    return data


def _form_to_dict(form: FormData) -> dict[str, Any]:
    data: dict[str, Any] = {}
    for key, value in form.multi_items():
        # Uploaded files are reduced to their filename.
        data[key] = value.filename if isinstance(value, UploadFile) else value
    return data


async def parse_json_body(request: Request) -> dict[str, Any]:
    return _decode_json(await request.body())


async def parse_request_body(request: Request) -> dict[str, Any]:
    content_type = (request.headers.get("content-type") or "").lower()

    if CONTENT_TYPE_JSON in content_type:
        return _decode_json(await request.body())

    if CONTENT_TYPE_MULTIPART in content_type or CONTENT_TYPE_URLENCODED in content_type:
        try:
            form = await request.form()
        except Exception as exc:
            raise ApiError(ERROR_BAD_REQUEST, "Invalid form data in request body", 400, str(exc)) from exc
        return _form_to_dict(form)

    if not content_type:
        raw = await request.body()
        if raw.strip():
            return _decode_json(raw)

    raise ApiError(
        ERROR_BAD_REQUEST,
        f"Unsupported content type: {content_type or 'not specified'}. Supported types: "
        f"{CONTENT_TYPE_JSON}, {CONTENT_TYPE_MULTIPART}, {CONTENT_TYPE_URLENCODED}",
        400,
        {"contentType": content_type or "not specified"},
    )


def validate_required(body: dict[str, Any], fields: Iterable[str]) -> None:
    missing = [
        field
        for field in fields
        if not body.get(field) or (isinstance(body.get(field), str) and not body[field].strip())
    ]
    if missing:
        raise ApiError(
            ERROR_VALIDATION,
            f"Missing required fields: {', '.join(missing)}",
            400,
            {"missingFields": missing},
        )


def require_str(body: dict[str, Any], field: str, label: str) -> str:
    value = body.get(field)
    if not isinstance(value, str):
        raise ApiError(ERROR_VALIDATION, f"{label} must be a string", 400)
    return value


__all__ = ["parse_json_body", "parse_request_body", "require_str", "validate_required"]
