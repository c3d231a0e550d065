"""Business policies shared by the registry and the threshold monitor."""

from decimal import Decimal

from src.domain.models import CashCategory
from src.domain.services.thresholds import exceeds_ceiling


def can_delete_classification(usage_count: int) -> bool:
    """Return True when no movement references the classification."""
    return usage_count == 0


def is_cash_at_risk(
    category: CashCategory,
    balance: Decimal,
    ceiling: Decimal,
) -> bool:
    """Return True when a drawer holds more cash than the ceiling.

    Args:
        category: Cash category being evaluated.
        balance: Current closing balance of the category.
        ceiling: Maximum cash allowed in a drawer.

    Returns:
        bool: False for non-drawer categories.
    """
    if not category.is_drawer:
        return False
    return exceeds_ceiling(balance, ceiling)


__all__ = ["can_delete_classification", "is_cash_at_risk"]
