"""Helpers for Decimal normalization."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def parse_decimal(value) -> Decimal | None:
    """Parse user input into a finite Decimal.

    Args:
        value: Raw value from a form field or CLI argument.

    Returns:
        Decimal | None: Parsed value, or None when not a finite number.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        parsed = coerce_decimal(value)
    except (InvalidOperation, ValueError):
        return None
    if not parsed.is_finite():
        return None
    return parsed


def quantize_money(value: Decimal) -> Decimal:
    """Round a currency amount to the cent."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


__all__ = ["CENT", "coerce_decimal", "parse_decimal", "quantize_money"]
