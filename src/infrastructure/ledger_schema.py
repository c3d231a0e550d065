"""DDL for the ledger tables.

Statements are portable between PostgreSQL and SQLite. Amounts use
``NUMERIC(18, 4)`` and every read converts them back to ``Decimal``.
"""

from sqlalchemy.engine import Engine

CREATE_CASH_CATEGORIES_SQL = """
CREATE TABLE IF NOT EXISTS cash_categories (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    is_drawer BOOLEAN NOT NULL DEFAULT TRUE
)
"""

CREATE_CLASSIFICATIONS_SQL = """
CREATE TABLE IF NOT EXISTS classifications (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    store_id TEXT,
    icon TEXT
)
"""

CREATE_ITEMS_SQL = """
CREATE TABLE IF NOT EXISTS items (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL UNIQUE,
    sku TEXT NOT NULL DEFAULT '',
    category TEXT,
    cost_price NUMERIC(18, 4) NOT NULL DEFAULT 0,
    low_stock_threshold NUMERIC(18, 4)
)
"""

CREATE_CASH_MOVEMENTS_SQL = """
CREATE TABLE IF NOT EXISTS cash_movements (
    id TEXT PRIMARY KEY,
    kind TEXT NOT NULL,
    category_id TEXT NOT NULL REFERENCES cash_categories (id),
    amount NUMERIC(18, 4) NOT NULL CHECK (amount >= 0),
    occurred_at DATE NOT NULL,
    created_at TIMESTAMP NOT NULL,
    classification_id TEXT REFERENCES classifications (id),
    cashout_type TEXT,
    notes TEXT NOT NULL DEFAULT '',
    receipt_no TEXT
)
"""

CREATE_STOCK_MOVEMENTS_SQL = """
CREATE TABLE IF NOT EXISTS stock_movements (
    id TEXT PRIMARY KEY,
    kind TEXT NOT NULL,
    item_id TEXT NOT NULL REFERENCES items (id),
    quantity NUMERIC(18, 4) NOT NULL CHECK (quantity >= 0),
    occurred_at DATE NOT NULL,
    created_at TIMESTAMP NOT NULL,
    unit_price NUMERIC(18, 4),
    notes TEXT NOT NULL DEFAULT '',
    expiry_date DATE
)
"""

CREATE_INDEXES_SQL = (
    "CREATE INDEX IF NOT EXISTS ix_cash_movements_partition "
    "ON cash_movements (category_id, occurred_at, created_at)",
    "CREATE INDEX IF NOT EXISTS ix_cash_movements_classification "
    "ON cash_movements (classification_id)",
    "CREATE INDEX IF NOT EXISTS ix_stock_movements_partition "
    "ON stock_movements (item_id, occurred_at, created_at)",
)

LEDGER_TABLES = (
    "cash_categories",
    "classifications",
    "items",
    "cash_movements",
    "stock_movements",
)


def prepare_schema(engine: Engine) -> None:
    """Create the ledger tables and indexes when missing.

    Args:
        engine: Engine connected to the ledger database.
    """
    with engine.begin() as conn:
        for statement in (
            CREATE_CASH_CATEGORIES_SQL,
            CREATE_CLASSIFICATIONS_SQL,
            CREATE_ITEMS_SQL,
            CREATE_CASH_MOVEMENTS_SQL,
            CREATE_STOCK_MOVEMENTS_SQL,
            *CREATE_INDEXES_SQL,
        ):
            conn.exec_driver_sql(statement)


__all__ = ["LEDGER_TABLES", "prepare_schema"]
