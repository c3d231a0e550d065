"""Pure aggregation services for the cash and stock ledgers.

Every function here is a pure function of its inputs: no repository access,
no clock, no hidden state. Balances obey

    forwarded(range) + period_in(range) - period_out(range)
        == forwarded(range.end + 1 day)

because ``forwarded`` always covers every movement strictly before
``range.start`` and the period covers ``start <= occurred_at <= end``.
"""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from src.domain.models import (
    BalanceSummary,
    CashMovement,
    DailyLedgerEntry,
    DateRange,
    ExpenseBreakdownItem,
    Item,
    Movement,
    MovementKind,
    PartitionKey,
    StockMovement,
    StockSnapshot,
)
from src.domain.constants import UNCATEGORIZED_SOURCE, UNCLASSIFIED_LABEL

ZERO = Decimal("0")


def movement_sort_key(movement: Movement) -> tuple:
    """Return the total order of movements within a partition."""
    return (movement.occurred_at, movement.created_at, movement.id)


def order_movements(movements: Iterable[Movement]) -> list[Movement]:
    """Return movements ordered by (occurred_at, created_at, id)."""
    return sorted(movements, key=movement_sort_key)


def sum_directions(movements: Iterable[Movement]) -> tuple[Decimal, Decimal]:
    """Return inbound and outbound magnitude totals.

    Args:
        movements: Movements of a single ledger.

    Returns:
        tuple[Decimal, Decimal]: (total inbound, total outbound).
    """
    total_in = ZERO
    total_out = ZERO
    for movement in order_movements(movements):
        if movement.is_inbound:
            total_in += movement.magnitude
        else:
            total_out += movement.magnitude
    return total_in, total_out


def net_total(movements: Iterable[Movement]) -> Decimal:
    """Return the signed sum of movements."""
    total_in, total_out = sum_directions(movements)
    return total_in - total_out


def compute_balance(
    partition_key: PartitionKey,
    date_range: DateRange,
    prior: Iterable[Movement],
    period: Iterable[Movement],
) -> BalanceSummary:
    """Compute the balance of a partition from pre-split movements.

    Args:
        partition_key: Partition the movements belong to.
        date_range: Inclusive business date range.
        prior: Movements with ``occurred_at < date_range.start``.
        period: Movements inside the range.

    Returns:
        BalanceSummary: Forwarded balance and period totals.
    """
    forwarded = net_total(prior)
    period_in, period_out = sum_directions(period)
    return BalanceSummary(
        partition_key=partition_key,
        start=date_range.start,
        end=date_range.end,
        forwarded=forwarded,
        period_in=period_in,
        period_out=period_out,
    )


def split_log(
    movements: Iterable[Movement],
    date_range: DateRange,
) -> tuple[list[Movement], list[Movement]]:
    """Split a movement log into (before range, inside range).

    Movements after ``date_range.end`` are dropped.
    """
    prior: list[Movement] = []
    period: list[Movement] = []
    for movement in order_movements(movements):
        if movement.occurred_at < date_range.start:
            prior.append(movement)
        elif movement.occurred_at <= date_range.end:
            period.append(movement)
    return prior, period


def compute_balance_from_log(
    partition_key: PartitionKey,
    movements: Iterable[Movement],
    date_range: DateRange,
) -> BalanceSummary:
    """Compute a balance from the full movement log of any partitions.

    Movements of other partitions are ignored, so callers may pass a whole
    ledger.
    """
    relevant = [
        movement
        for movement in movements
        if movement.partition_key == partition_key
    ]
    prior, period = split_log(relevant, date_range)
    return compute_balance(partition_key, date_range, prior, period)


def compute_daily_ledger(
    label: str,
    prior: Iterable[Movement],
    period: Iterable[Movement],
    date_range: DateRange,
) -> list[DailyLedgerEntry]:
    """Build one ledger row per day, forwarding each closing balance.

    Args:
        label: Category name shown on every row.
        prior: Movements before the range start.
        period: Movements inside the range.
        date_range: Inclusive business date range.

    Returns:
        list[DailyLedgerEntry]: Rows in ascending date order.
    """
    by_day: dict[date, list[Movement]] = {}
    for movement in order_movements(period):
        by_day.setdefault(movement.occurred_at, []).append(movement)

    forwarded = net_total(prior)
    entries = []
    for day in date_range.days():
        cash_in, cash_out = sum_directions(by_day.get(day, []))
        entry = DailyLedgerEntry(
            category=label,
            date=day,
            forwarded=forwarded,
            cash_in=cash_in,
            cash_out=cash_out,
        )
        entries.append(entry)
        forwarded = entry.balance
    return entries


def compute_stock_snapshot(
    item: Item,
    movements: Iterable[StockMovement],
    default_threshold: Decimal,
) -> StockSnapshot:
    """Aggregate an item's stock movements into its current position.

    Args:
        item: Item the movements belong to.
        movements: Stock movements; those of other items are ignored.
        default_threshold: Global threshold used when the item has none.

    Returns:
        StockSnapshot: Quantities in, out and sold plus the threshold.
    """
    totals = {
        MovementKind.STOCK_IN: ZERO,
        MovementKind.STOCK_OUT: ZERO,
        MovementKind.STOCK_SOLD: ZERO,
    }
    for movement in order_movements(movements):
        if movement.item_id != item.id:
            continue
        totals[movement.kind] += movement.quantity
    return StockSnapshot(
        item_id=item.id,
        item_name=item.name,
        quantity_in=totals[MovementKind.STOCK_IN],
        quantity_out=totals[MovementKind.STOCK_OUT],
        quantity_sold=totals[MovementKind.STOCK_SOLD],
        threshold=effective_threshold(item, default_threshold),
    )


def effective_threshold(item: Item, default_threshold: Decimal) -> Decimal:
    """Return the item's own threshold or the global default."""
    if item.low_stock_threshold is None:
        return default_threshold
    return item.low_stock_threshold


def compute_expense_breakdown(
    movements: Iterable[CashMovement],
    category_names: dict[str, str],
    classification_names: dict[str, str],
) -> list[ExpenseBreakdownItem]:
    """Group cash-out amounts by source category and classification.

    Cash-outs without a classification are skipped; unknown names fall back
    to "Uncategorized" (source) and "Other" (classification).
    """
    totals: dict[tuple[str, str], Decimal] = {}
    for movement in order_movements(movements):
        if movement.kind != MovementKind.CASH_OUT:
            continue
        if movement.classification_id is None:
            continue
        source = category_names.get(movement.category_id, UNCATEGORIZED_SOURCE)
        classification = classification_names.get(
            movement.classification_id,
            UNCLASSIFIED_LABEL,
        )
        key = (source, classification)
        totals[key] = totals.get(key, ZERO) + movement.amount
    return [
        ExpenseBreakdownItem(
            source=source,
            classification=classification,
            amount=amount,
        )
        for (source, classification), amount in sorted(totals.items())
    ]


__all__ = [
    "movement_sort_key",
    "order_movements",
    "sum_directions",
    "net_total",
    "compute_balance",
    "split_log",
    "compute_balance_from_log",
    "compute_daily_ledger",
    "compute_stock_snapshot",
    "effective_threshold",
    "compute_expense_breakdown",
]
