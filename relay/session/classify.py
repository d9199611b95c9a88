"""Failure classification for sends.

WhatsApp Web surfaces these conditions only as error text, so this module is
the single place that matches on message substrings.
"""

from __future__ import annotations

from relay.state.dispatch import DispatchErrorKind

# Checked in order; first match wins.
_SEND_FAILURE_PATTERNS: tuple[tuple[str, DispatchErrorKind], ...] = (
    ("LID", DispatchErrorKind.INVALID_ADDRESS_FORMAT),
    ("not registered", DispatchErrorKind.RECIPIENT_NOT_REGISTERED),
)

_KIND_MESSAGES: dict[DispatchErrorKind, str] = {
    DispatchErrorKind.NOT_READY: "WhatsApp client is not ready. Please wait for QR code scan.",
    DispatchErrorKind.RECIPIENT_NOT_REGISTERED: "This number is not registered on WhatsApp.",
    DispatchErrorKind.INVALID_ADDRESS_FORMAT: (
        "Invalid phone number format. Please include country code (e.g., +5511999999999 for Brazil)."
    ),
    DispatchErrorKind.RECIPIENT_RESOLUTION_FAILED: (
        "Could not verify WhatsApp number. Please ensure the number is correct and includes the country code."
    ),
    DispatchErrorKind.SEND_FAILED: "Failed to send message.",
}


def classify_send_failure(exc: BaseException) -> DispatchErrorKind:
    text = str(exc)
    for needle, kind in _SEND_FAILURE_PATTERNS:
        if needle in text:
            return kind
    return DispatchErrorKind.SEND_FAILED


def describe_kind(kind: DispatchErrorKind) -> str:
    return _KIND_MESSAGES[kind]


__all__ = ["classify_send_failure", "describe_kind"]
