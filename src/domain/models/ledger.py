"""Domain models for derived ledger aggregates."""

from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal

from .movements import PartitionKey


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of business dates."""

    start: date
    end: date

    @classmethod
    def day(cls, value: date) -> "DateRange":
        """Return a range collapsed to a single day."""
        return cls(start=value, end=value)

    @property
    def is_valid(self) -> bool:
        return self.start <= self.end

    def contains(self, value: date) -> bool:
        return self.start <= value <= self.end

    def days(self) -> list[date]:
        """Return every calendar day of the range in order."""
        span = (self.end - self.start).days
        return [self.start + timedelta(days=offset) for offset in range(span + 1)]


@dataclass(frozen=True)
class BalanceSummary:
    """Balance of one partition over a date range.

    Attributes:
        partition_key: Category or item the balance belongs to.
        start: First day of the range.
        end: Last day of the range.
        forwarded: Net of every movement strictly before ``start``.
        period_in: Inbound magnitudes inside the range.
        period_out: Outbound magnitudes inside the range.
    """

    partition_key: PartitionKey
    start: date
    end: date
    forwarded: Decimal
    period_in: Decimal
    period_out: Decimal

    @property
    def balance(self) -> Decimal:
        """Return forwarded plus inflows minus outflows."""
        return self.forwarded + self.period_in - self.period_out


@dataclass(frozen=True)
class DailyLedgerEntry:
    """One row of the daily cash-flow ledger."""

    category: str
    date: date
    forwarded: Decimal
    cash_in: Decimal
    cash_out: Decimal

    @property
    def balance(self) -> Decimal:
        return self.forwarded + self.cash_in - self.cash_out


@dataclass(frozen=True)
class StockSnapshot:
    """Query-time stock position of an item.

    Attributes:
        item_id: Item identifier.
        item_name: Display name, used as ordering tie-breaker.
        quantity_in: Sum of stock-in quantities.
        quantity_out: Sum of stock-out quantities.
        quantity_sold: Sum of sold quantities.
        threshold: Effective low-stock threshold.
    """

    item_id: str
    item_name: str
    quantity_in: Decimal
    quantity_out: Decimal
    quantity_sold: Decimal
    threshold: Decimal

    @property
    def current_stock(self) -> Decimal:
        return self.quantity_in - self.quantity_out - self.quantity_sold

    @property
    def is_low(self) -> bool:
        return self.current_stock <= self.threshold


@dataclass(frozen=True)
class DrawerBalance:
    """Closing cash balance of a drawer category."""

    category_id: str
    category: str
    balance: Decimal


@dataclass(frozen=True)
class CashOnHand:
    """Cash held across drawers on a given day."""

    as_of: date
    currency_code: str
    drawers: list[DrawerBalance] = field(default_factory=list)

    @property
    def total_net_balance(self) -> Decimal:
        return sum(
            (drawer.balance for drawer in self.drawers),
            start=Decimal("0"),
        )


@dataclass(frozen=True)
class ExpenseBreakdownItem:
    """Cash-out total for a source category and classification."""

    source: str
    classification: str
    amount: Decimal


@dataclass(frozen=True)
class ExpiringBatch:
    """Stock-in batch whose expiry date falls inside an alert window.

    Attributes:
        movement_id: Stock-in movement that received the batch.
        item_id: Item identifier.
        item_name: Display name, used as ordering tie-breaker.
        quantity: Quantity received with the batch.
        expiry_date: Last day the batch may be sold.
        days_left: Days from the evaluation date to ``expiry_date``.
    """

    movement_id: str
    item_id: str
    item_name: str
    quantity: Decimal
    expiry_date: date
    days_left: int


__all__ = [
    "DateRange",
    "BalanceSummary",
    "DailyLedgerEntry",
    "StockSnapshot",
    "DrawerBalance",
    "CashOnHand",
    "ExpenseBreakdownItem",
    "ExpiringBatch",
]
