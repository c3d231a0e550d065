"""Domain models package."""

from .ledger import (
    BalanceSummary,
    CashOnHand,
    DailyLedgerEntry,
    DateRange,
    DrawerBalance,
    ExpenseBreakdownItem,
    ExpiringBatch,
    StockSnapshot,
)
from .movements import (
    CASH_KINDS,
    STOCK_KINDS,
    CashMovement,
    LedgerKind,
    Movement,
    MovementKind,
    PartitionKey,
    StockMovement,
)
from .registry import CashCategory, Classification, Item

__all__ = [
    "BalanceSummary",
    "CashOnHand",
    "DailyLedgerEntry",
    "DateRange",
    "DrawerBalance",
    "ExpenseBreakdownItem",
    "ExpiringBatch",
    "StockSnapshot",
    "CASH_KINDS",
    "STOCK_KINDS",
    "CashMovement",
    "LedgerKind",
    "Movement",
    "MovementKind",
    "PartitionKey",
    "StockMovement",
    "CashCategory",
    "Classification",
    "Item",
]
