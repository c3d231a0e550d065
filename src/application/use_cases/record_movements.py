"""Use cases appending cash and stock movements."""

from collections.abc import Callable
from datetime import date, datetime
from uuid import uuid4

from src.application.ports.ledger_store import LedgerScope, LedgerStorePort
from src.domain.constants import CASHOUT_TYPES
from src.domain.exceptions import FieldError, NotFound, ValidationError
from src.domain.models import (
    STOCK_KINDS,
    CashMovement,
    Item,
    MovementKind,
    StockMovement,
)
from src.domain.services.normalization import normalize_reference
from src.domain.services.validation import require_magnitude
from src.infrastructure.logging.logger import get_app_logger, get_usage_logger
from src.utils.decimal_utils import quantize_money
from src.utils.time_utils import utcnow


def new_movement_id() -> str:
    """Return a fresh opaque movement id."""
    return uuid4().hex


def resolve_item(scope: LedgerScope, item_ref: str | None) -> Item | None:
    """Find an item by id first, then by exact name."""
    reference = normalize_reference(item_ref)
    if reference is None:
        return None
    return scope.items.get(reference) or scope.items.find_by_name(reference)


class RecordCashMovementUseCase:
    """Record cashouts (COGS, OPEX, remittance) and cash-ins."""

    def __init__(
        self,
        store: LedgerStorePort,
        logger=None,
        clock: Callable[[], datetime] = utcnow,
        id_factory: Callable[[], str] = new_movement_id,
    ) -> None:
        """Initialize the use case.

        Args:
            store: Port opening atomic scopes on the movement store.
            logger: Optional logger compatible with logging.Logger-like API.
            clock: Source of insertion timestamps.
            id_factory: Source of movement ids.
        """
        self._store = store
        self._logger = logger or get_app_logger()
        self._usage_logger = get_usage_logger()
        self._clock = clock
        self._id_factory = id_factory

    def record_cashout(
        self,
        category_id: str,
        amount,
        cashout_type: str,
        occurred_at: date | None = None,
        classification_id: str | None = None,
        notes: str = "",
        receipt_no: str | None = None,
    ) -> CashMovement:
        """Withdraw cash from a drawer.

        Args:
            category_id: Drawer the cash is taken from.
            amount: Non-negative amount; rounded to the cent.
            cashout_type: One of COGS, OPEX or REMITTANCE.
            occurred_at: Business date, defaults to today.
            classification_id: Optional expense classification.
            notes: Free text.
            receipt_no: Optional receipt reference.

        Returns:
            CashMovement: The appended movement.

        Raises:
            ValidationError: On malformed amount or cashout type.
            NotFound: When the category or classification is missing.
        """
        if cashout_type not in CASHOUT_TYPES:
            raise ValidationError(
                f"Unsupported cashout type: {cashout_type}",
                [
                    FieldError(
                        "cashout",
                        "cashout_type",
                        f"expected one of {', '.join(CASHOUT_TYPES)}",
                    )
                ],
            )
        return self._record(
            MovementKind.CASH_OUT,
            category_id,
            amount,
            occurred_at=occurred_at,
            classification_id=classification_id,
            cashout_type=cashout_type,
            notes=notes,
            receipt_no=receipt_no,
        )

    def record_cash_in(
        self,
        category_id: str,
        amount,
        occurred_at: date | None = None,
        notes: str = "",
        receipt_no: str | None = None,
    ) -> CashMovement:
        """Record cash received into a category, e.g. a sale."""
        return self._record(
            MovementKind.CASH_IN,
            category_id,
            amount,
            occurred_at=occurred_at,
            notes=notes,
            receipt_no=receipt_no,
        )

    def _record(
        self,
        kind: MovementKind,
        category_id: str,
        amount,
        occurred_at: date | None,
        classification_id: str | None = None,
        cashout_type: str | None = None,
        notes: str = "",
        receipt_no: str | None = None,
    ) -> CashMovement:
        parsed = quantize_money(require_magnitude("cash", "amount", amount))
        created_at = self._clock()
        with self._store.atomic() as scope:
            if scope.categories.get(category_id) is None:
                raise NotFound("category", category_id)
            if (
                classification_id is not None
                and scope.classifications.get(classification_id) is None
            ):
                raise NotFound("classification", classification_id)
            movement = CashMovement(
                id=self._id_factory(),
                kind=kind,
                category_id=category_id,
                amount=parsed,
                occurred_at=occurred_at or created_at.date(),
                created_at=created_at,
                classification_id=classification_id,
                cashout_type=cashout_type,
                notes=notes or "",
                receipt_no=receipt_no,
            )
            scope.movements.append(movement)
        self._usage_logger.info(
            f"Recorded {kind.value} of {parsed} in category {category_id} "
            f"for {movement.occurred_at}"
        )
        return movement


class RecordStockMovementUseCase:
    """Record stock-in, stock-out and sold quantities for an item."""

    def __init__(
        self,
        store: LedgerStorePort,
        logger=None,
        clock: Callable[[], datetime] = utcnow,
        id_factory: Callable[[], str] = new_movement_id,
    ) -> None:
        self._store = store
        self._logger = logger or get_app_logger()
        self._usage_logger = get_usage_logger()
        self._clock = clock
        self._id_factory = id_factory

    def record(
        self,
        item_ref: str,
        kind: MovementKind,
        quantity,
        unit_price=None,
        occurred_at: date | None = None,
        notes: str = "",
        expiry_date: date | None = None,
    ) -> StockMovement:
        """Append a stock movement for a registered item.

        Args:
            item_ref: Item id or exact item name.
            kind: STOCK_IN, STOCK_OUT or STOCK_SOLD.
            quantity: Non-negative quantity.
            unit_price: Optional non-negative capital price per unit.
            occurred_at: Business date, defaults to today.
            notes: Free text.
            expiry_date: Optional batch expiry.

        Returns:
            StockMovement: The appended movement.

        Raises:
            ValidationError: On malformed quantity, price or kind.
            NotFound: When the item is not registered.
        """
        if kind not in STOCK_KINDS:
            raise ValidationError(
                f"{kind} is not a stock movement",
                [FieldError("stock", "kind", "expected a stock movement")],
            )
        parsed_quantity = require_magnitude("stock", "quantity", quantity)
        parsed_price = None
        if unit_price is not None and unit_price != "":
            parsed_price = require_magnitude("stock", "unit_price", unit_price)
        created_at = self._clock()
        with self._store.atomic() as scope:
            item = resolve_item(scope, item_ref)
            if item is None:
                raise NotFound("item", str(item_ref))
            movement = StockMovement(
                id=self._id_factory(),
                kind=kind,
                item_id=item.id,
                quantity=parsed_quantity,
                occurred_at=occurred_at or created_at.date(),
                created_at=created_at,
                unit_price=parsed_price,
                notes=notes or "",
                expiry_date=expiry_date,
            )
            scope.movements.append(movement)
        self._usage_logger.info(
            f"Recorded {kind.value} of {parsed_quantity} for item {item.name}"
        )
        return movement


__all__ = [
    "RecordCashMovementUseCase",
    "RecordStockMovementUseCase",
    "new_movement_id",
    "resolve_item",
]
