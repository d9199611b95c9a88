"""Destination number normalization."""

from __future__ import annotations

import re

from relay.config.http import MIN_PHONE_DIGITS, ERROR_INVALID_NUMBER_FORMAT

from .errors import ApiError

_NON_DIGITS = re.compile(r"\D")


def normalize_number(raw: str) -> str:
    """Keep digits only and drop leading zeros (``+55 (11) 9999-9999`` -> ``55119999999``)."""
    return _NON_DIGITS.sub("", raw).lstrip("0")


def require_valid_number(raw: str) -> str:
    number = normalize_number(raw)
    if len(number) < MIN_PHONE_DIGITS:
        raise ApiError(
            ERROR_INVALID_NUMBER_FORMAT,
            f"Invalid phone number format. Number must contain at least {MIN_PHONE_DIGITS} digits.",
            400,
            {"providedNumber": raw},
        )
    return number


__all__ = ["normalize_number", "require_valid_number"]
