from __future__ import annotations

import pytest

from relay.config.http import ERROR_INVALID_NUMBER_FORMAT
from relay.handlers.phone import normalize_number, require_valid_number
from relay.handlers.errors import ApiError


def test_normalize_number() -> None:
    assert normalize_number("+55 (11) 99999-9999") == "5511999999999"
    assert normalize_number("005511999999999") == "5511999999999"
    assert normalize_number("abc") == ""


def test_require_valid_number_rejects_short_numbers() -> None:
    with pytest.raises(ApiError) as exc:
        require_valid_number("0012345")
    assert exc.value.code == ERROR_INVALID_NUMBER_FORMAT
    assert exc.value.status_code == 400
    assert exc.value.details == {"providedNumber": "0012345"}


def test_require_valid_number_accepts_ten_digits() -> None:
    assert require_valid_number("(11) 9999-9999") == "1199999999"
