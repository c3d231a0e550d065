"""Domain models for immutable ledger movements."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum


class LedgerKind(str, Enum):
    """Ledger a movement or partition belongs to."""

    CASH = "cash"
    STOCK = "stock"


class MovementKind(str, Enum):
    """Kind of movement; the sign of its magnitude follows from the kind."""

    CASH_IN = "CASH_IN"
    CASH_OUT = "CASH_OUT"
    STOCK_IN = "STOCK_IN"
    STOCK_OUT = "STOCK_OUT"
    STOCK_SOLD = "STOCK_SOLD"

    @property
    def ledger(self) -> LedgerKind:
        if self in (MovementKind.CASH_IN, MovementKind.CASH_OUT):
            return LedgerKind.CASH
        return LedgerKind.STOCK

    @property
    def is_inbound(self) -> bool:
        return self in (MovementKind.CASH_IN, MovementKind.STOCK_IN)


CASH_KINDS = (MovementKind.CASH_IN, MovementKind.CASH_OUT)

STOCK_KINDS = (
    MovementKind.STOCK_IN,
    MovementKind.STOCK_OUT,
    MovementKind.STOCK_SOLD,
)


@dataclass(frozen=True)
class PartitionKey:
    """Dimension balances are grouped by.

    Attributes:
        ledger: Cash ledger (key is a category id) or stock ledger (item id).
        key: Category or item identifier.
    """

    ledger: LedgerKind
    key: str

    @classmethod
    def cash(cls, category_id: str) -> "PartitionKey":
        return cls(LedgerKind.CASH, category_id)

    @classmethod
    def stock(cls, item_id: str) -> "PartitionKey":
        return cls(LedgerKind.STOCK, item_id)


@dataclass(frozen=True)
class CashMovement:
    """Cash entering or leaving a category (drawer).

    Attributes:
        id: Opaque unique identifier.
        kind: CASH_IN or CASH_OUT.
        category_id: Category the cash is attributed to.
        amount: Non-negative magnitude.
        occurred_at: Business date; may be backdated.
        created_at: Insertion time, tie-breaker within a day.
        classification_id: Optional expense classification.
        cashout_type: COGS, OPEX or REMITTANCE for cash-outs.
        notes: Free text.
        receipt_no: Optional receipt reference.
    """

    id: str
    kind: MovementKind
    category_id: str
    amount: Decimal
    occurred_at: date
    created_at: datetime
    classification_id: str | None = None
    cashout_type: str | None = None
    notes: str = ""
    receipt_no: str | None = None

    @property
    def partition_key(self) -> PartitionKey:
        return PartitionKey.cash(self.category_id)

    @property
    def magnitude(self) -> Decimal:
        return self.amount

    @property
    def is_inbound(self) -> bool:
        return self.kind.is_inbound

    @property
    def signed_magnitude(self) -> Decimal:
        return self.amount if self.is_inbound else -self.amount


@dataclass(frozen=True)
class StockMovement:
    """Quantity of an item entering or leaving stock.

    Attributes:
        id: Opaque unique identifier.
        kind: STOCK_IN, STOCK_OUT or STOCK_SOLD.
        item_id: Item the quantity belongs to.
        quantity: Non-negative magnitude.
        occurred_at: Business date; may be backdated.
        created_at: Insertion time, tie-breaker within a day.
        unit_price: Capital price per unit for stock-ins.
        notes: Free text.
        expiry_date: Optional batch expiry.
    """

    id: str
    kind: MovementKind
    item_id: str
    quantity: Decimal
    occurred_at: date
    created_at: datetime
    unit_price: Decimal | None = None
    notes: str = ""
    expiry_date: date | None = None

    @property
    def partition_key(self) -> PartitionKey:
        return PartitionKey.stock(self.item_id)

    @property
    def magnitude(self) -> Decimal:
        return self.quantity

    @property
    def is_inbound(self) -> bool:
        return self.kind.is_inbound

    @property
    def signed_magnitude(self) -> Decimal:
        return self.quantity if self.is_inbound else -self.quantity


Movement = CashMovement | StockMovement


__all__ = [
    "LedgerKind",
    "MovementKind",
    "CASH_KINDS",
    "STOCK_KINDS",
    "PartitionKey",
    "CashMovement",
    "StockMovement",
    "Movement",
]
