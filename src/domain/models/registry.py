"""Domain models for mutable ledger dimensions."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Classification:
    """Expense sub-tag referenced by cash movements."""

    id: str
    name: str
    store_id: str | None = None
    icon: str | None = None


@dataclass(frozen=True)
class CashCategory:
    """Cash partition; drawers are the categories cash is physically held in."""

    id: str
    name: str
    is_drawer: bool = True


@dataclass(frozen=True)
class Item:
    """Stocked item.

    Attributes:
        id: Item identifier.
        name: Unique display name.
        sku: Stock keeping unit.
        category: Optional product category name.
        cost_price: Default unit cost.
        low_stock_threshold: Item specific threshold, None for the global one.
    """

    id: str
    name: str
    sku: str = ""
    category: str | None = None
    cost_price: Decimal = Decimal("0")
    low_stock_threshold: Decimal | None = None


__all__ = ["Classification", "CashCategory", "Item"]
