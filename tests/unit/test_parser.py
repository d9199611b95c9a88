from __future__ import annotations

import pytest

from relay.config.http import ERROR_VALIDATION
from relay.handlers.parser import require_str, validate_required
from relay.handlers.errors import ApiError


def test_validate_required_lists_missing_fields() -> None:
    with pytest.raises(ApiError) as exc:
        validate_required({"number": "5511999999999", "message": "   "}, ("number", "message", "name"))
    assert exc.value.code == ERROR_VALIDATION
    assert exc.value.details == {"missingFields": ["message", "name"]}


def test_validate_required_passes() -> None:
    validate_required({"number": "1", "message": "hi", "name": "Bob"}, ("number", "message", "name"))


def test_require_str_rejects_non_strings() -> None:
    with pytest.raises(ApiError) as exc:
        require_str({"number": 5511999999999}, "number", "Phone number")
    assert exc.value.message == "Phone number must be a string"
