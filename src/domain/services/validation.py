"""Domain validation helpers."""

from decimal import Decimal

from src.domain.exceptions import FieldError, ValidationError
from src.domain.models import DateRange
from src.utils.decimal_utils import parse_decimal


def parse_magnitude(
    key: str,
    field: str,
    value,
) -> tuple[Decimal | None, FieldError | None]:
    """Parse a non-negative numeric field.

    Args:
        key: Identifier of the row being validated.
        field: Field name used in the error.
        value: Raw input value.

    Returns:
        tuple: Parsed value and no error, or None and the error.
    """
    parsed = parse_decimal(value)
    if parsed is None:
        return None, FieldError(key, field, f"{field} must be a number")
    if parsed < 0:
        return None, FieldError(key, field, f"{field} must not be negative")
    return parsed, None


def require_magnitude(key: str, field: str, value) -> Decimal:
    """Parse a non-negative numeric field or raise ValidationError."""
    parsed, error = parse_magnitude(key, field, value)
    if error is not None:
        raise ValidationError(error.message, [error])
    return parsed


def validate_date_range(date_range: DateRange) -> None:
    """Raise ValidationError when the range ends before it starts."""
    if not date_range.is_valid:
        raise ValidationError(
            f"Range end {date_range.end} is before start {date_range.start}",
            [FieldError("range", "end", "end must not be before start")],
        )


__all__ = ["parse_magnitude", "require_magnitude", "validate_date_range"]
