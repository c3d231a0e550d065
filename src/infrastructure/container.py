"""Composition root for wiring infrastructure adapters."""

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.ledger_store import LedgerStorePort
from src.application.use_cases.batch_apply import BatchApplyPipeline
from src.application.use_cases.classification_registry import (
    ClassificationRegistry,
)
from src.application.use_cases.compute_balance import ComputeBalanceUseCase
from src.application.use_cases.get_cash_flow_ledger import (
    GetCashFlowLedgerUseCase,
)
from src.application.use_cases.get_cash_on_hand import GetCashOnHandUseCase
from src.application.use_cases.get_expense_breakdown import (
    GetExpenseBreakdownUseCase,
)
from src.application.use_cases.threshold_monitor import ThresholdMonitor
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import LedgerSettings
from src.infrastructure.sql_ledger_store import SqlAlchemyLedgerStore


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_ledger_store(
    db_port: DatabaseEnginePort | None = None,
) -> LedgerStorePort:
    """Return the SQL-backed ledger store."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyLedgerStore(resolved_db, logger=get_app_logger())


def build_compute_balance(
    store: LedgerStorePort | None = None,
) -> ComputeBalanceUseCase:
    """Return the balance aggregator use case."""
    return ComputeBalanceUseCase(store or build_ledger_store())


def build_cash_flow_ledger(
    store: LedgerStorePort | None = None,
) -> GetCashFlowLedgerUseCase:
    """Return the daily cash-flow ledger use case."""
    return GetCashFlowLedgerUseCase(store or build_ledger_store())


def build_cash_on_hand(
    store: LedgerStorePort | None = None,
    settings: LedgerSettings | None = None,
) -> GetCashOnHandUseCase:
    """Return the cash on hand use case in the configured currency."""
    resolved_settings = settings or LedgerSettings.from_env()
    return GetCashOnHandUseCase(
        store or build_ledger_store(),
        currency_code=resolved_settings.currency_code,
    )


def build_expense_breakdown(
    store: LedgerStorePort | None = None,
) -> GetExpenseBreakdownUseCase:
    """Return the expense breakdown use case."""
    return GetExpenseBreakdownUseCase(store or build_ledger_store())


def build_classification_registry(
    store: LedgerStorePort | None = None,
) -> ClassificationRegistry:
    """Return the classification registry."""
    return ClassificationRegistry(store or build_ledger_store())


def build_batch_pipeline(
    store: LedgerStorePort | None = None,
) -> BatchApplyPipeline:
    """Return a fresh batch stock-in pipeline."""
    return BatchApplyPipeline(store or build_ledger_store())


def build_threshold_monitor(
    store: LedgerStorePort | None = None,
    settings: LedgerSettings | None = None,
) -> ThresholdMonitor:
    """Return the threshold monitor configured from the environment."""
    resolved_settings = settings or LedgerSettings.from_env()
    return ThresholdMonitor(
        store or build_ledger_store(),
        low_stock_threshold=resolved_settings.global_low_stock_threshold,
        cash_risk_ceiling=resolved_settings.cash_risk_ceiling,
    )


__all__ = [
    "build_database_adapter",
    "build_ledger_store",
    "build_compute_balance",
    "build_cash_flow_ledger",
    "build_cash_on_hand",
    "build_expense_breakdown",
    "build_classification_registry",
    "build_batch_pipeline",
    "build_threshold_monitor",
]
