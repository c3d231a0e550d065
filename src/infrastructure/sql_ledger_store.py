"""SQLAlchemy implementation of the ledger store and its repositories."""

from contextlib import contextmanager
from datetime import date, datetime
from decimal import Decimal
from typing import Iterator
from uuid import uuid4

from sqlalchemy import text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import OperationalError

from src.application.ports.category_repository import CategoryRepositoryPort
from src.application.ports.classification_repository import (
    ClassificationRepositoryPort,
)
from src.application.ports.database import DatabaseEnginePort
from src.application.ports.item_repository import ItemRepositoryPort
from src.application.ports.ledger_store import LedgerStorePort
from src.application.ports.movement_repository import MovementRepositoryPort
from src.domain.exceptions import AtomicityViolation
from src.domain.models import (
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
)
from src.domain.services.ledger import order_movements
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal

CASH_COLUMNS = (
    "id, kind, category_id, amount, occurred_at, created_at, "
    "classification_id, cashout_type, notes, receipt_no"
)
STOCK_COLUMNS = (
    "id, kind, item_id, quantity, occurred_at, created_at, "
    "unit_price, notes, expiry_date"
)
ORDER_CLAUSE = " ORDER BY occurred_at, created_at, id"

INSERT_CASH_MOVEMENT_SQL = text(
    """
    INSERT INTO cash_movements (
        id, kind, category_id, amount, occurred_at, created_at,
        classification_id, cashout_type, notes, receipt_no
    )
    VALUES (
        :id, :kind, :category_id, :amount, :occurred_at, :created_at,
        :classification_id, :cashout_type, :notes, :receipt_no
    )
    """
)

INSERT_STOCK_MOVEMENT_SQL = text(
    """
    INSERT INTO stock_movements (
        id, kind, item_id, quantity, occurred_at, created_at,
        unit_price, notes, expiry_date
    )
    VALUES (
        :id, :kind, :item_id, :quantity, :occurred_at, :created_at,
        :unit_price, :notes, :expiry_date
    )
    """
)


def _as_date(value) -> date | None:
    """Convert a DATE column value, which SQLite returns as text."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _as_datetime(value) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def _as_optional_decimal(value) -> Decimal | None:
    if value is None:
        return None
    return coerce_decimal(value)


def _param_decimal(value: Decimal | None) -> str | None:
    """Bind Decimals as text; the sqlite3 driver has no Decimal adapter."""
    if value is None:
        return None
    return str(value)


def _param_date(value: date | datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat()


class SqlMovementRepository(MovementRepositoryPort):
    """Movement log stored in ``cash_movements`` and ``stock_movements``."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def append(self, movement: Movement) -> str:
        if isinstance(movement, CashMovement):
            self._conn.execute(
                INSERT_CASH_MOVEMENT_SQL,
                {
                    "id": movement.id,
                    "kind": movement.kind.value,
                    "category_id": movement.category_id,
                    "amount": _param_decimal(movement.amount),
                    "occurred_at": _param_date(movement.occurred_at),
                    "created_at": _param_date(movement.created_at),
                    "classification_id": movement.classification_id,
                    "cashout_type": movement.cashout_type,
                    "notes": movement.notes,
                    "receipt_no": movement.receipt_no,
                },
            )
        else:
            self._conn.execute(
                INSERT_STOCK_MOVEMENT_SQL,
                {
                    "id": movement.id,
                    "kind": movement.kind.value,
                    "item_id": movement.item_id,
                    "quantity": _param_decimal(movement.quantity),
                    "occurred_at": _param_date(movement.occurred_at),
                    "created_at": _param_date(movement.created_at),
                    "unit_price": _param_decimal(movement.unit_price),
                    "notes": movement.notes,
                    "expiry_date": _param_date(movement.expiry_date),
                },
            )
        return movement.id

    def query(
        self,
        partition_key: PartitionKey,
        date_range: DateRange | None = None,
    ) -> list[Movement]:
        conditions, params = self._partition_filter(partition_key)
        if date_range is not None:
            conditions.append("occurred_at >= :start_date")
            conditions.append("occurred_at <= :end_date")
            params["start_date"] = _param_date(date_range.start)
            params["end_date"] = _param_date(date_range.end)
        return self._select(partition_key.ledger, conditions, params)

    def query_before(
        self,
        partition_key: PartitionKey,
        before: date,
    ) -> list[Movement]:
        conditions, params = self._partition_filter(partition_key)
        conditions.append("occurred_at < :before")
        params["before"] = _param_date(before)
        return self._select(partition_key.ledger, conditions, params)

    def query_ledger(
        self,
        ledger: LedgerKind,
        date_range: DateRange | None = None,
    ) -> list[Movement]:
        conditions: list[str] = []
        params: dict = {}
        if date_range is not None:
            conditions.append("occurred_at >= :start_date")
            conditions.append("occurred_at <= :end_date")
            params["start_date"] = _param_date(date_range.start)
            params["end_date"] = _param_date(date_range.end)
        return self._select(ledger, conditions, params)

    def count_by_classification(self, classification_id: str) -> int:
        query = text(
            """
            SELECT COUNT(*) AS usage_count
            FROM cash_movements
            WHERE classification_id = :classification_id
            """
        )
        result = self._conn.execute(
            query,
            {"classification_id": classification_id},
        ).first()
        return int(result.usage_count) if result else 0

    def reassign_classification(self, from_id: str, to_id: str) -> int:
        query = text(
            """
            UPDATE cash_movements
            SET classification_id = :to_id
            WHERE classification_id = :from_id
            """
        )
        result = self._conn.execute(query, {"from_id": from_id, "to_id": to_id})
        return int(result.rowcount)

    @staticmethod
    def _partition_filter(partition_key: PartitionKey) -> tuple[list, dict]:
        column = (
            "category_id"
            if partition_key.ledger == LedgerKind.CASH
            else "item_id"
        )
        return [f"{column} = :partition"], {"partition": partition_key.key}

    def _select(
        self,
        ledger: LedgerKind,
        conditions: list[str],
        params: dict,
    ) -> list[Movement]:
        if ledger == LedgerKind.CASH:
            base_sql = f"SELECT {CASH_COLUMNS} FROM cash_movements"
            build = self._cash_from_row
        else:
            base_sql = f"SELECT {STOCK_COLUMNS} FROM stock_movements"
            build = self._stock_from_row
        if conditions:
            base_sql += " WHERE " + " AND ".join(conditions)
        rows = self._conn.execute(text(base_sql + ORDER_CLAUSE), params).all()
        # SQLite compares timestamps as text.
        return order_movements(build(row) for row in rows)

    @staticmethod
    def _cash_from_row(row) -> CashMovement:
        return CashMovement(
            id=row.id,
            kind=MovementKind(row.kind),
            category_id=row.category_id,
            amount=coerce_decimal(row.amount),
            occurred_at=_as_date(row.occurred_at),
            created_at=_as_datetime(row.created_at),
            classification_id=row.classification_id,
            cashout_type=row.cashout_type,
            notes=row.notes or "",
            receipt_no=row.receipt_no,
        )

    @staticmethod
    def _stock_from_row(row) -> StockMovement:
        return StockMovement(
            id=row.id,
            kind=MovementKind(row.kind),
            item_id=row.item_id,
            quantity=coerce_decimal(row.quantity),
            occurred_at=_as_date(row.occurred_at),
            created_at=_as_datetime(row.created_at),
            unit_price=_as_optional_decimal(row.unit_price),
            notes=row.notes or "",
            expiry_date=_as_date(row.expiry_date),
        )


class SqlClassificationRepository(ClassificationRepositoryPort):
    """Classifications stored in the ``classifications`` table."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def list(self) -> list[Classification]:
        query = text(
            """
            SELECT id, name, store_id, icon
            FROM classifications
            ORDER BY name, id
            """
        )
        rows = self._conn.execute(query).all()
        return [self._from_row(row) for row in rows]

    def get(self, classification_id: str) -> Classification | None:
        query = text(
            """
            SELECT id, name, store_id, icon
            FROM classifications
            WHERE id = :id
            """
        )
        row = self._conn.execute(query, {"id": classification_id}).first()
        return self._from_row(row) if row else None

    def create(
        self,
        name: str,
        icon: str | None = None,
        store_id: str | None = None,
    ) -> Classification:
        classification = Classification(
            id=uuid4().hex,
            name=name,
            store_id=store_id,
            icon=icon,
        )
        query = text(
            """
            INSERT INTO classifications (id, name, store_id, icon)
            VALUES (:id, :name, :store_id, :icon)
            """
        )
        self._conn.execute(
            query,
            {
                "id": classification.id,
                "name": classification.name,
                "store_id": classification.store_id,
                "icon": classification.icon,
            },
        )
        return classification

    def rename(self, classification_id: str, name: str) -> None:
        query = text("UPDATE classifications SET name = :name WHERE id = :id")
        self._conn.execute(query, {"id": classification_id, "name": name})

    def delete(self, classification_id: str) -> None:
        query = text("DELETE FROM classifications WHERE id = :id")
        self._conn.execute(query, {"id": classification_id})

    @staticmethod
    def _from_row(row) -> Classification:
        return Classification(
            id=row.id,
            name=row.name,
            store_id=row.store_id,
            icon=row.icon,
        )


class SqlItemRepository(ItemRepositoryPort):
    """Items stored in the ``items`` table."""

    SELECT_SQL = (
        "SELECT id, name, sku, category, cost_price, low_stock_threshold "
        "FROM items"
    )

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def list(self) -> list[Item]:
        rows = self._conn.execute(
            text(self.SELECT_SQL + " ORDER BY name, id")
        ).all()
        return [self._from_row(row) for row in rows]

    def get(self, item_id: str) -> Item | None:
        row = self._conn.execute(
            text(self.SELECT_SQL + " WHERE id = :id"),
            {"id": item_id},
        ).first()
        return self._from_row(row) if row else None

    def find_by_name(self, name: str) -> Item | None:
        row = self._conn.execute(
            text(self.SELECT_SQL + " WHERE name = :name"),
            {"name": name},
        ).first()
        return self._from_row(row) if row else None

    def threshold_for(self, item_id: str) -> Decimal | None:
        item = self.get(item_id)
        return item.low_stock_threshold if item else None

    def add(self, item: Item) -> None:
        """Register an item; the registry itself is managed elsewhere."""
        query = text(
            """
            INSERT INTO items (
                id, name, sku, category, cost_price, low_stock_threshold
            )
            VALUES (
                :id, :name, :sku, :category, :cost_price, :low_stock_threshold
            )
            """
        )
        self._conn.execute(
            query,
            {
                "id": item.id,
                "name": item.name,
                "sku": item.sku,
                "category": item.category,
                "cost_price": _param_decimal(item.cost_price),
                "low_stock_threshold": _param_decimal(
                    item.low_stock_threshold
                ),
            },
        )

    @staticmethod
    def _from_row(row) -> Item:
        return Item(
            id=row.id,
            name=row.name,
            sku=row.sku or "",
            category=row.category,
            cost_price=coerce_decimal(row.cost_price),
            low_stock_threshold=_as_optional_decimal(row.low_stock_threshold),
        )


class SqlCategoryRepository(CategoryRepositoryPort):
    """Cash categories stored in the ``cash_categories`` table."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def list(self) -> list[CashCategory]:
        query = text(
            "SELECT id, name, is_drawer FROM cash_categories ORDER BY name, id"
        )
        return [self._from_row(row) for row in self._conn.execute(query).all()]

    def get(self, category_id: str) -> CashCategory | None:
        query = text(
            "SELECT id, name, is_drawer FROM cash_categories WHERE id = :id"
        )
        row = self._conn.execute(query, {"id": category_id}).first()
        return self._from_row(row) if row else None

    def add(self, category: CashCategory) -> None:
        """Register a cash category."""
        query = text(
            """
            INSERT INTO cash_categories (id, name, is_drawer)
            VALUES (:id, :name, :is_drawer)
            """
        )
        self._conn.execute(
            query,
            {
                "id": category.id,
                "name": category.name,
                "is_drawer": category.is_drawer,
            },
        )

    @staticmethod
    def _from_row(row) -> CashCategory:
        return CashCategory(
            id=row.id,
            name=row.name,
            is_drawer=bool(row.is_drawer),
        )


class SqlLedgerScope:
    """Repositories sharing one connection and transaction."""

    def __init__(self, conn: Connection) -> None:
        self.movements = SqlMovementRepository(conn)
        self.classifications = SqlClassificationRepository(conn)
        self.items = SqlItemRepository(conn)
        self.categories = SqlCategoryRepository(conn)


class SqlAlchemyLedgerStore(LedgerStorePort):
    """Ledger store whose atomic scopes are database transactions."""

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the store.

        Args:
            db_port: Port providing access to the ledger engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    @contextmanager
    def atomic(self) -> Iterator[SqlLedgerScope]:
        """Yield a scope bound to one transaction.

        The transaction commits when the block exits normally and rolls back
        on any exception.

        Raises:
            AtomicityViolation: If the database could not run or commit the
                transaction (``OperationalError``).
        """
        engine = self._db_port.get_ledger_engine()
        try:
            with engine.begin() as conn:
                yield SqlLedgerScope(conn)
        except OperationalError as exc:
            self._logger.error(f"Ledger transaction rolled back: {exc}")
            raise AtomicityViolation(
                f"Ledger transaction could not be completed: {exc.orig}"
            ) from exc


__all__ = [
    "SqlAlchemyLedgerStore",
    "SqlCategoryRepository",
    "SqlClassificationRepository",
    "SqlItemRepository",
    "SqlLedgerScope",
    "SqlMovementRepository",
]
