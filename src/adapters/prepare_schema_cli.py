"""CLI adapter to create the ledger tables.

This module wires the schema helper and the classification registry to the
concrete database adapter. Running it twice is harmless.
"""

from src.application.use_cases.classification_registry import (
    ClassificationRegistry,
)
from src.infrastructure.container import build_database_adapter
from src.infrastructure.ledger_schema import LEDGER_TABLES, prepare_schema
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.sql_ledger_store import SqlAlchemyLedgerStore


def main() -> None:
    """Create missing ledger tables and seed default classifications."""
    logger = get_app_logger()
    db_adapter = build_database_adapter()
    engine = db_adapter.get_ledger_engine()

    prepare_schema(engine)
    logger.info(f"Ledger schema ready on {engine.url}")

    store = SqlAlchemyLedgerStore(db_adapter, logger=logger)
    registry = ClassificationRegistry(store, logger=logger)
    classifications = registry.list()

    print(
        f"Prepared {len(LEDGER_TABLES)} ledger tables with "
        f"{len(classifications)} classifications."
    )


if __name__ == "__main__":  # pragma: no cover
    main()
