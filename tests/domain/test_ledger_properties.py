"""Property tests for the ledger consistency laws."""

from datetime import date, datetime, timedelta
from decimal import Decimal

from hypothesis import given, settings
from hypothesis import strategies as st

from src.domain.models import (
    CashMovement,
    DateRange,
    Item,
    Movement,
    MovementKind,
    PartitionKey,
    StockMovement,
)
from src.domain.services.ledger import (
    compute_balance_from_log,
    compute_daily_ledger,
    compute_stock_snapshot,
    split_log,
)

DRAWER = PartitionKey.cash("drawer")
SHELF = PartitionKey.stock("rice")
BASE_DAY = date(2024, 1, 1)

amounts = st.decimals(
    min_value=Decimal("0"),
    max_value=Decimal("99999.99"),
    places=2,
    allow_nan=False,
    allow_infinity=False,
)

quantities = st.decimals(
    min_value=Decimal("0"),
    max_value=Decimal("5000"),
    places=4,
    allow_nan=False,
    allow_infinity=False,
)


@st.composite
def cash_logs(draw) -> list[CashMovement]:
    """Draw a log of cash movements spread over sixty days."""
    size = draw(st.integers(min_value=0, max_value=40))
    log = []
    for index in range(size):
        offset = draw(st.integers(min_value=0, max_value=59))
        log.append(
            CashMovement(
                id=f"m{index:03d}",
                kind=draw(
                    st.sampled_from(
                        [MovementKind.CASH_IN, MovementKind.CASH_OUT]
                    )
                ),
                category_id=draw(st.sampled_from(["drawer", "petty"])),
                amount=draw(amounts),
                occurred_at=BASE_DAY + timedelta(days=offset),
                created_at=datetime(2024, 3, 1)
                + timedelta(minutes=draw(st.integers(0, 600))),
            )
        )
    return log


@st.composite
def stock_logs(draw) -> list[StockMovement]:
    """Draw stock-ins, stock-outs and sales of two items over sixty days."""
    size = draw(st.integers(min_value=0, max_value=40))
    log = []
    for index in range(size):
        offset = draw(st.integers(min_value=0, max_value=59))
        log.append(
            StockMovement(
                id=f"s{index:03d}",
                kind=draw(
                    st.sampled_from(
                        [
                            MovementKind.STOCK_IN,
                            MovementKind.STOCK_OUT,
                            MovementKind.STOCK_SOLD,
                        ]
                    )
                ),
                item_id=draw(st.sampled_from(["rice", "oil"])),
                quantity=draw(quantities),
                occurred_at=BASE_DAY + timedelta(days=offset),
                created_at=datetime(2024, 3, 1)
                + timedelta(minutes=draw(st.integers(0, 600))),
            )
        )
    return log


ledgers = st.one_of(
    st.tuples(st.just(DRAWER), cash_logs()),
    st.tuples(st.just(SHELF), stock_logs()),
)


@st.composite
def date_ranges(draw) -> DateRange:
    start = BASE_DAY + timedelta(days=draw(st.integers(-5, 64)))
    length = draw(st.integers(min_value=0, max_value=30))
    return DateRange(start, start + timedelta(days=length))


@settings(max_examples=150, deadline=None)
@given(ledger=ledgers, date_range=date_ranges())
def test_closing_balance_equals_next_day_forwarded(ledger, date_range) -> None:
    partition_key, log = ledger
    summary = compute_balance_from_log(partition_key, log, date_range)
    next_day = compute_balance_from_log(
        partition_key,
        log,
        DateRange.day(date_range.end + timedelta(days=1)),
    )

    assert (
        summary.forwarded + summary.period_in - summary.period_out
        == next_day.forwarded
    )


@settings(max_examples=150, deadline=None)
@given(
    ledger=ledgers,
    first=date_ranges(),
    extra=st.integers(min_value=0, max_value=20),
)
def test_adjacent_ranges_compose(ledger, first, extra) -> None:
    """closing([A, B]) feeds forwarded([B+1, C]) and matches [A, C]."""
    partition_key, log = ledger
    second = DateRange(
        first.end + timedelta(days=1),
        first.end + timedelta(days=1 + extra),
    )
    combined = DateRange(first.start, second.end)

    left = compute_balance_from_log(partition_key, log, first)
    right = compute_balance_from_log(partition_key, log, second)
    whole = compute_balance_from_log(partition_key, log, combined)

    assert left.balance == right.forwarded
    assert whole.forwarded == left.forwarded
    assert whole.period_in == left.period_in + right.period_in
    assert whole.period_out == left.period_out + right.period_out
    assert whole.balance == right.balance


@settings(max_examples=100, deadline=None)
@given(log=cash_logs(), date_range=date_ranges())
def test_balance_ignores_input_order(log, date_range) -> None:
    forward = compute_balance_from_log(DRAWER, log, date_range)
    backward = compute_balance_from_log(DRAWER, list(reversed(log)), date_range)

    assert forward == backward
    assert forward == compute_balance_from_log(DRAWER, log, date_range)


@settings(max_examples=100, deadline=None)
@given(log=cash_logs(), date_range=date_ranges())
def test_daily_ledger_closes_at_range_balance(log, date_range) -> None:
    relevant = [m for m in log if m.partition_key == DRAWER]
    prior, period = split_log(relevant, date_range)

    entries = compute_daily_ledger("Drawer", prior, period, date_range)
    summary = compute_balance_from_log(DRAWER, log, date_range)

    assert len(entries) == len(date_range.days())
    assert entries[0].forwarded == summary.forwarded
    assert entries[-1].balance == summary.balance
    for previous, current in zip(entries, entries[1:]):
        assert current.forwarded == previous.balance


@settings(max_examples=100, deadline=None)
@given(log=stock_logs())
def test_stock_snapshot_matches_closing_balance(log) -> None:
    everything = DateRange(BASE_DAY, BASE_DAY + timedelta(days=59))
    relevant: list[Movement] = [m for m in log if m.partition_key == SHELF]

    snapshot = compute_stock_snapshot(
        Item(id="rice", name="Rice 5kg"),
        relevant,
        Decimal("10"),
    )

    assert (
        snapshot.current_stock
        == compute_balance_from_log(SHELF, log, everything).balance
    )
