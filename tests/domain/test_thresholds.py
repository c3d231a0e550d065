"""Tests for stock ranking and cash risk helpers."""

from datetime import date, datetime
from decimal import Decimal

from src.domain.models import (
    CashCategory,
    Item,
    MovementKind,
    StockMovement,
    StockSnapshot,
)
from src.domain.policies import can_delete_classification, is_cash_at_risk
from src.domain.services.thresholds import (
    rank_expiring_soon,
    rank_low_stock,
    rank_most_stocked,
)


def _snapshot(
    item_id: str,
    name: str,
    stock: str,
    threshold: str = "5",
) -> StockSnapshot:
    return StockSnapshot(
        item_id=item_id,
        item_name=name,
        quantity_in=Decimal(stock),
        quantity_out=Decimal("0"),
        quantity_sold=Decimal("0"),
        threshold=Decimal(threshold),
    )


def _catalog() -> list[StockSnapshot]:
    return [
        _snapshot("1", "A", "10"),
        _snapshot("2", "B", "2"),
        _snapshot("3", "C", "2"),
        _snapshot("4", "D", "7"),
        _snapshot("5", "E", "0"),
    ]


def test_low_stock_orders_ascending_with_name_ties() -> None:
    """Stocks [10, 2, 2, 7, 0] with threshold 5 give E, B, C."""
    ranked = rank_low_stock(_catalog(), limit=3)

    assert [snapshot.item_name for snapshot in ranked] == ["E", "B", "C"]


def test_low_stock_includes_items_at_threshold() -> None:
    ranked = rank_low_stock([_snapshot("1", "A", "5")], limit=10)

    assert [snapshot.item_name for snapshot in ranked] == ["A"]


def test_most_stocked_orders_descending_with_name_ties() -> None:
    ranked = rank_most_stocked(_catalog(), limit=5)

    assert [snapshot.item_name for snapshot in ranked] == [
        "A",
        "D",
        "B",
        "C",
        "E",
    ]


def test_rankings_are_stable_across_input_order() -> None:
    catalog = _catalog()
    reversed_catalog = list(reversed(catalog))

    assert rank_low_stock(catalog, 5) == rank_low_stock(reversed_catalog, 5)
    assert rank_most_stocked(catalog, 5) == rank_most_stocked(
        reversed_catalog,
        5,
    )


def test_rankings_page_with_offset_and_limit() -> None:
    ranked = rank_most_stocked(_catalog(), limit=2, offset=1)

    assert [snapshot.item_name for snapshot in ranked] == ["D", "B"]
    assert rank_most_stocked(_catalog(), limit=0) == []


def test_cash_risk_only_applies_to_drawers() -> None:
    drawer = CashCategory("d", "Main Drawer", is_drawer=True)
    bank = CashCategory("b", "Bank", is_drawer=False)

    assert is_cash_at_risk(drawer, Decimal("50000.01"), Decimal("50000"))
    assert not is_cash_at_risk(drawer, Decimal("50000"), Decimal("50000"))
    assert not is_cash_at_risk(bank, Decimal("90000"), Decimal("50000"))


def test_classification_delete_policy() -> None:
    assert can_delete_classification(0) is True
    assert can_delete_classification(3) is False


def _stock_in(movement_id: str, item_id: str, expiry: date) -> StockMovement:
    return StockMovement(
        id=movement_id,
        kind=MovementKind.STOCK_IN,
        item_id=item_id,
        quantity=Decimal("4"),
        occurred_at=date(2024, 3, 1),
        created_at=datetime(2024, 3, 1, 8, 0),
        expiry_date=expiry,
    )


def test_rank_expiring_soon_includes_today_and_skips_unregistered() -> None:
    items = {"y": Item(id="y", name="Yogurt")}
    movements = [
        _stock_in("m1", "y", date(2024, 3, 5)),
        _stock_in("m2", "ghost", date(2024, 3, 5)),
        _stock_in("m3", "y", date(2024, 3, 4)),
    ]

    ranked = rank_expiring_soon(
        movements,
        items,
        as_of=date(2024, 3, 5),
        within_days=0,
        limit=5,
    )

    assert [(batch.movement_id, batch.days_left) for batch in ranked] == [
        ("m1", 0),
    ]
