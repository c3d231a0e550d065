"""Ranking helpers for stock and cash alerts."""

from collections.abc import Iterable, Mapping
from datetime import date, timedelta
from decimal import Decimal

from src.domain.models import (
    ExpiringBatch,
    Item,
    MovementKind,
    StockMovement,
    StockSnapshot,
)


def rank_low_stock(
    snapshots: Iterable[StockSnapshot],
    limit: int,
    offset: int = 0,
) -> list[StockSnapshot]:
    """Return items at or under their threshold, lowest stock first.

    Args:
        snapshots: Stock snapshots with effective thresholds.
        limit: Maximum number of items returned.
        offset: Number of ranked items to skip, for paging.

    Returns:
        list[StockSnapshot]: Ascending by stock, ties by item name.
    """
    flagged = [snapshot for snapshot in snapshots if snapshot.is_low]
    ranked = sorted(
        flagged,
        key=lambda snapshot: (
            snapshot.current_stock,
            snapshot.item_name,
            snapshot.item_id,
        ),
    )
    return _page(ranked, limit, offset)


def rank_most_stocked(
    snapshots: Iterable[StockSnapshot],
    limit: int,
    offset: int = 0,
) -> list[StockSnapshot]:
    """Return items with the most stock first, ties by item name."""
    ranked = sorted(
        snapshots,
        key=lambda snapshot: (
            -snapshot.current_stock,
            snapshot.item_name,
            snapshot.item_id,
        ),
    )
    return _page(ranked, limit, offset)


def rank_expiring_soon(
    movements: Iterable[StockMovement],
    items: Mapping[str, Item],
    as_of: date,
    within_days: int,
    limit: int,
    offset: int = 0,
) -> list[ExpiringBatch]:
    """Return stock-in batches expiring within a window, soonest first.

    A batch is flagged when its expiry date lies in
    ``[as_of, as_of + within_days]``. Only stock-ins of items present in
    ``items`` are considered; expired batches are left out.

    Args:
        movements: Stock movements to scan.
        items: Registered items keyed by id.
        as_of: Evaluation date.
        within_days: Length of the alert window in days.
        limit: Maximum number of batches returned.
        offset: Number of ranked batches to skip, for paging.

    Returns:
        list[ExpiringBatch]: Ascending by expiry date, ties by item name.
    """
    horizon = as_of + timedelta(days=max(within_days, 0))
    flagged = [
        ExpiringBatch(
            movement_id=movement.id,
            item_id=movement.item_id,
            item_name=items[movement.item_id].name,
            quantity=movement.quantity,
            expiry_date=movement.expiry_date,
            days_left=(movement.expiry_date - as_of).days,
        )
        for movement in movements
        if movement.kind == MovementKind.STOCK_IN
        and movement.expiry_date is not None
        and movement.item_id in items
        and as_of <= movement.expiry_date <= horizon
    ]
    ranked = sorted(
        flagged,
        key=lambda batch: (
            batch.expiry_date,
            batch.item_name,
            batch.movement_id,
        ),
    )
    return _page(ranked, limit, offset)


def exceeds_ceiling(balance: Decimal, ceiling: Decimal) -> bool:
    """Return True when a cash balance is above the risk ceiling."""
    return balance > ceiling


def _page(ranked: list, limit: int, offset: int) -> list:
    if limit <= 0:
        return []
    start = max(offset, 0)
    return ranked[start:start + limit]


__all__ = [
    "rank_low_stock",
    "rank_most_stocked",
    "rank_expiring_soon",
    "exceeds_ceiling",
]
