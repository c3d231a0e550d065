"""Tests for input parsing and validation helpers."""

from datetime import date
from decimal import Decimal

import pytest

from src.domain.exceptions import FieldError, ValidationError
from src.domain.models import DateRange
from src.domain.services.normalization import normalize_name
from src.domain.services.validation import (
    parse_magnitude,
    require_magnitude,
    validate_date_range,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("12.50", Decimal("12.50")),
        (" 3 ", Decimal("3")),
        (0, Decimal("0")),
        (Decimal("7.25"), Decimal("7.25")),
    ],
)
def test_parse_magnitude_accepts_non_negative_numbers(raw, expected) -> None:
    value, error = parse_magnitude("row", "quantity", raw)

    assert value == expected
    assert error is None


@pytest.mark.parametrize("raw", ["", "abc", "NaN", "inf", None, True])
def test_parse_magnitude_rejects_non_numbers(raw) -> None:
    value, error = parse_magnitude("row", "quantity", raw)

    assert value is None
    assert error == FieldError("row", "quantity", "quantity must be a number")


def test_parse_magnitude_rejects_negative_values() -> None:
    _, error = parse_magnitude("row", "unit_price", "-1")

    assert error.message == "unit_price must not be negative"


def test_require_magnitude_raises_with_field_errors() -> None:
    with pytest.raises(ValidationError) as exc_info:
        require_magnitude("cash", "amount", "-5")

    assert exc_info.value.field_errors == [
        FieldError("cash", "amount", "amount must not be negative"),
    ]
    assert exc_info.value.code == "VALIDATION_ERROR"


def test_validate_date_range_rejects_reversed_range() -> None:
    with pytest.raises(ValidationError):
        validate_date_range(DateRange(date(2024, 1, 2), date(2024, 1, 1)))

    validate_date_range(DateRange.day(date(2024, 1, 1)))


def test_normalize_name_collapses_whitespace() -> None:
    assert normalize_name("  Rent   &  Lease ") == "Rent & Lease"
    assert normalize_name("   ") is None
    assert normalize_name(None) is None
