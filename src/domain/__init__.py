"""Domain package for ledger rules and core models."""

from .constants import (
    DEFAULT_CASH_RISK_CEILING,
    DEFAULT_LOW_STOCK_THRESHOLD,
    OVERALL_CATEGORY,
)
from .exceptions import (
    AtomicityViolation,
    ClassificationInUse,
    FieldError,
    LedgerError,
    NotFound,
    PartialFailureForbidden,
    ValidationError,
)
from .models import (
    BalanceSummary,
    CashCategory,
    CashMovement,
    Classification,
    DateRange,
    Item,
    LedgerKind,
    Movement,
    MovementKind,
    PartitionKey,
    StockMovement,
    StockSnapshot,
)
from .policies import can_delete_classification, is_cash_at_risk
from .services import (
    compute_balance,
    compute_balance_from_log,
    compute_stock_snapshot,
    rank_low_stock,
    rank_most_stocked,
)

__all__ = [
    "DEFAULT_CASH_RISK_CEILING",
    "DEFAULT_LOW_STOCK_THRESHOLD",
    "OVERALL_CATEGORY",
    "AtomicityViolation",
    "ClassificationInUse",
    "FieldError",
    "LedgerError",
    "NotFound",
    "PartialFailureForbidden",
    "ValidationError",
    "BalanceSummary",
    "CashCategory",
    "CashMovement",
    "Classification",
    "DateRange",
    "Item",
    "LedgerKind",
    "Movement",
    "MovementKind",
    "PartitionKey",
    "StockMovement",
    "StockSnapshot",
    "can_delete_classification",
    "is_cash_at_risk",
    "compute_balance",
    "compute_balance_from_log",
    "compute_stock_snapshot",
    "rank_low_stock",
    "rank_most_stocked",
]
