"""Streamlit dashboard entry point."""

from collections.abc import Sequence
from datetime import date, timedelta
from decimal import Decimal
from importlib import import_module

import streamlit as st
import altair as alt

from src.domain.models import (
    CashOnHand,
    DailyLedgerEntry,
    DateRange,
    ExpenseBreakdownItem,
    ExpiringBatch,
    StockSnapshot,
)
from src.infrastructure.container import (
    build_cash_flow_ledger,
    build_cash_on_hand,
    build_expense_breakdown,
    build_threshold_monitor,
)
from src.utils import time_utils

CURRENCY_SYMBOLS = {"PHP": "₱", "EUR": "€", "USD": "$"}


def _fetch_cash_on_hand(as_of: date) -> CashOnHand:
    """Fetch closing drawer balances for a day."""
    return build_cash_on_hand().execute(as_of)


@st.cache_data(show_spinner=False, ttl=60)
def _load_cash_on_hand(as_of: date, schema_version: int = 1) -> CashOnHand:
    """Cached wrapper around _fetch_cash_on_hand."""
    _ = schema_version
    return _fetch_cash_on_hand(as_of)


def _fetch_flow_categories() -> list[str]:
    """Fetch selectable ledgers, "Overall" first."""
    return build_cash_flow_ledger().categories()


def _fetch_cash_flow_ledger(
    category: str,
    start_date: date,
    end_date: date,
) -> list[DailyLedgerEntry]:
    """Fetch daily ledger rows for a category or for all of them."""
    use_case = build_cash_flow_ledger()
    return use_case.execute(category, DateRange(start_date, end_date))


@st.cache_data(show_spinner=False, ttl=60)
def _load_cash_flow_ledger(
    category: str,
    start_date: date,
    end_date: date,
) -> list[DailyLedgerEntry]:
    """Cached wrapper around _fetch_cash_flow_ledger."""
    return _fetch_cash_flow_ledger(category, start_date, end_date)


def _fetch_expense_breakdown(
    start_date: date,
    end_date: date,
) -> list[ExpenseBreakdownItem]:
    """Fetch cash-out totals per source and classification."""
    use_case = build_expense_breakdown()
    return use_case.execute(DateRange(start_date, end_date))


def _fetch_stock_rankings(
    limit: int,
) -> tuple[list[StockSnapshot], list[StockSnapshot]]:
    """Fetch low-stock and most-stocked items."""
    monitor = build_threshold_monitor()
    return monitor.low_stock(limit), monitor.most_stocked(limit)


@st.cache_data(show_spinner=False, ttl=60)
def _load_stock_rankings(
    limit: int,
) -> tuple[list[StockSnapshot], list[StockSnapshot]]:
    """Cached wrapper around _fetch_stock_rankings."""
    return _fetch_stock_rankings(limit)


def _fetch_expiring_soon(within_days: int) -> list[ExpiringBatch]:
    """Fetch stock-in batches expiring within the window."""
    monitor = build_threshold_monitor()
    return monitor.expiring_soon(within_days, limit=50)


@st.cache_data(show_spinner=False, ttl=60)
def _load_expiring_soon(within_days: int) -> list[ExpiringBatch]:
    """Cached wrapper around _fetch_expiring_soon."""
    return _fetch_expiring_soon(within_days)


def _format_currency(value: Decimal, currency_code: str) -> str:
    """Format currency values for display."""
    symbol = CURRENCY_SYMBOLS.get(currency_code, currency_code)
    return f"{symbol}{value:,.2f}"


def _format_quantity(value: Decimal) -> str:
    if value == value.to_integral_value():
        return f"{value:,.0f}"
    return f"{value:,.2f}"


def _get_period_start(period: str, today: date) -> date:
    """Return the start date for the selected period."""
    if period == "Today":
        return today
    if period == "Last 7 Days":
        return today - timedelta(days=6)
    if period == "YTD":
        return date(today.year, 1, 1)
    return date(today.year, today.month, 1)


def _check_altair_dependencies() -> tuple[bool, str | None]:
    """Check that the data libraries Altair relies on import cleanly.

    Returns:
        Tuple with a flag and an error message when the check fails.
    """
    try:
        numpy = import_module("numpy")
    except ImportError as exc:
        return False, f"numpy could not be imported: {exc}"
    if not hasattr(numpy, "ndarray"):
        return False, "numpy is installed but incomplete (no ndarray)."
    try:
        pandas = import_module("pandas")
    except ImportError as exc:
        return False, f"pandas could not be imported: {exc}"
    if not hasattr(pandas, "Timestamp"):
        return False, "pandas is installed but incomplete (no Timestamp)."
    return True, None


def _ledger_rows(
    entries: Sequence[DailyLedgerEntry],
    currency_code: str,
) -> list[dict[str, str]]:
    """Convert ledger entries into table rows, latest day first."""
    return [
        {
            "Date": entry.date.isoformat(),
            "Forwarded": _format_currency(entry.forwarded, currency_code),
            "Cash In": _format_currency(entry.cash_in, currency_code),
            "Cash Out": _format_currency(entry.cash_out, currency_code),
            "Balance": _format_currency(entry.balance, currency_code),
        }
        for entry in reversed(entries)
    ]


def _stock_rows(snapshots: Sequence[StockSnapshot]) -> list[dict[str, str]]:
    return [
        {
            "Item": snapshot.item_name,
            "In": _format_quantity(snapshot.quantity_in),
            "Out": _format_quantity(snapshot.quantity_out),
            "Sold": _format_quantity(snapshot.quantity_sold),
            "Stock": _format_quantity(snapshot.current_stock),
            "Threshold": _format_quantity(snapshot.threshold),
        }
        for snapshot in snapshots
    ]


def _prepare_stock_chart_data(
    snapshots: Sequence[StockSnapshot],
) -> list[dict[str, str | float]]:
    """Prepare bar chart data keeping the ranking order."""
    return [
        {
            "item": snapshot.item_name,
            "stock": float(snapshot.current_stock),
            "rank": index,
            "status": "Low" if snapshot.is_low else "OK",
        }
        for index, snapshot in enumerate(snapshots)
    ]


def _render_stock_chart(
    snapshots: Sequence[StockSnapshot],
    title: str,
    height: int = 320,
) -> None:
    """Render a horizontal bar chart of current stock.

    Args:
        snapshots: Ranked stock snapshots.
        title: Chart title shown above the bars.
        height: Chart height in pixels.
    """
    st.subheader(title)
    if not snapshots:
        st.info("No items to display.")
        return
    ok, message = _check_altair_dependencies()
    if not ok:
        st.warning(message)
        st.dataframe(_stock_rows(snapshots), hide_index=True)
        return
    chart = alt.Chart(
        alt.Data(values=_prepare_stock_chart_data(snapshots))
    ).mark_bar(cornerRadiusEnd=4).encode(
        x=alt.X("stock:Q", title="Current stock"),
        y=alt.Y("item:N", sort=alt.EncodingSortField("rank"), title=None),
        color=alt.Color(
            "status:N",
            scale=alt.Scale(domain=["Low", "OK"], range=["#e76f51", "#2e7d32"]),
            legend=None,
        ),
        tooltip=[alt.Tooltip("item:N"), alt.Tooltip("stock:Q")],
    ).properties(height=height)
    st.altair_chart(chart, width="stretch")


def _render_cash_page(today: date) -> None:
    period = st.sidebar.selectbox(
        "Period",
        ["Today", "Last 7 Days", "MTD", "YTD"],
    )
    start_date = _get_period_start(period, today)

    cash_on_hand = _load_cash_on_hand(today)
    currency_code = cash_on_hand.currency_code
    st.metric(
        "Cash on Hand",
        _format_currency(cash_on_hand.total_net_balance, currency_code),
    )
    columns = st.columns(max(len(cash_on_hand.drawers), 1))
    for column, drawer in zip(columns, cash_on_hand.drawers):
        column.metric(
            drawer.category,
            _format_currency(drawer.balance, currency_code),
        )

    categories = _fetch_flow_categories()
    category = st.selectbox("Cash flow", categories, index=0)
    entries = _load_cash_flow_ledger(category, start_date, today)
    st.subheader(f"{category} cash flow")
    st.dataframe(
        _ledger_rows(entries, currency_code),
        width="stretch",
        hide_index=True,
    )

    breakdown = _fetch_expense_breakdown(start_date, today)
    st.subheader("Expenses by classification")
    if not breakdown:
        st.info("No classified cash-outs in this period.")
        return
    st.dataframe(
        [
            {
                "Source": item.source,
                "Classification": item.classification,
                "Amount": _format_currency(item.amount, currency_code),
            }
            for item in breakdown
        ],
        width="stretch",
        hide_index=True,
    )


def _render_inventory_page() -> None:
    limit = st.sidebar.slider("Items per list", 5, 50, 10)
    low_stock, most_stocked = _load_stock_rankings(limit)
    left, right = st.columns(2)
    with left:
        _render_stock_chart(low_stock, "Low stock")
    with right:
        _render_stock_chart(most_stocked, "Most stocked")

    within_days = st.sidebar.slider("Expiry window (days)", 1, 90, 30)
    batches = _load_expiring_soon(within_days)
    st.subheader("Expiring soon")
    if not batches:
        st.info("No expiring items.")
        return
    st.dataframe(
        [
            {
                "Item": batch.item_name,
                "Quantity": _format_quantity(batch.quantity),
                "Expires": batch.expiry_date.isoformat(),
                "Days Left": batch.days_left,
            }
            for batch in batches
        ],
        width="stretch",
        hide_index=True,
    )


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Retail Ledger", layout="wide")
    st.title("Retail Ledger")

    page = st.sidebar.selectbox("Page", ["Cash", "Inventory"])
    if page == "Cash":
        _render_cash_page(time_utils.today())
    else:
        _render_inventory_page()


if __name__ == "__main__":  # pragma: no cover
    main()
