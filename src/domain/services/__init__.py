"""Domain services package."""

from .ledger import (
    compute_balance,
    compute_balance_from_log,
    compute_daily_ledger,
    compute_expense_breakdown,
    compute_stock_snapshot,
    effective_threshold,
    net_total,
    order_movements,
    split_log,
    sum_directions,
)
from .normalization import normalize_name, normalize_reference
from .thresholds import (
    exceeds_ceiling,
    rank_expiring_soon,
    rank_low_stock,
    rank_most_stocked,
)
from .validation import (
    parse_magnitude,
    require_magnitude,
    validate_date_range,
)

__all__ = [
    "compute_balance",
    "compute_balance_from_log",
    "compute_daily_ledger",
    "compute_expense_breakdown",
    "compute_stock_snapshot",
    "effective_threshold",
    "net_total",
    "order_movements",
    "split_log",
    "sum_directions",
    "normalize_name",
    "normalize_reference",
    "exceeds_ceiling",
    "rank_expiring_soon",
    "rank_low_stock",
    "rank_most_stocked",
    "parse_magnitude",
    "require_magnitude",
    "validate_date_range",
]
