"""HTTP API protocol constants (routes, error codes, validation limits)."""

from __future__ import annotations

API_PREFIX = "/api"

# Error codes (error.code values)
ERROR_BAD_REQUEST = "BAD_REQUEST"
ERROR_VALIDATION = "VALIDATION_ERROR"
ERROR_UNAUTHORIZED = "UNAUTHORIZED"
ERROR_NOT_FOUND = "NOT_FOUND"
ERROR_INTERNAL = "INTERNAL_ERROR"
ERROR_SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
ERROR_WHATSAPP_NOT_READY = "WHATSAPP_NOT_READY"
ERROR_WHATSAPP_CLIENT = "WHATSAPP_CLIENT_ERROR"
ERROR_NUMBER_NOT_REGISTERED = "NUMBER_NOT_REGISTERED"
ERROR_INVALID_NUMBER_FORMAT = "INVALID_NUMBER_FORMAT"
ERROR_MESSAGE_SEND_FAILED = "MESSAGE_SEND_FAILED"

# Request validation
MIN_PHONE_DIGITS = 10
MIN_SENDER_NAME_CHARS = 3

CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_MULTIPART = "multipart/form-data"
CONTENT_TYPE_URLENCODED = "application/x-www-form-urlencoded"

__all__ = [
    "API_PREFIX",
    "CONTENT_TYPE_JSON",
    "CONTENT_TYPE_MULTIPART",
    "CONTENT_TYPE_URLENCODED",
    "ERROR_BAD_REQUEST",
    "ERROR_INTERNAL",
    "ERROR_INVALID_NUMBER_FORMAT",
    "ERROR_MESSAGE_SEND_FAILED",
    "ERROR_NOT_FOUND",
    "ERROR_NUMBER_NOT_REGISTERED",
    "ERROR_SERVICE_UNAVAILABLE",
    "ERROR_UNAUTHORIZED",
    "ERROR_VALIDATION",
    "ERROR_WHATSAPP_CLIENT",
    "ERROR_WHATSAPP_NOT_READY",
    "MIN_PHONE_DIGITS",
    "MIN_SENDER_NAME_CHARS",
]
