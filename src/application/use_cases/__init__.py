"""Application use cases package."""

from .compute_balance import ComputeBalanceUseCase
from .get_cash_flow_ledger import GetCashFlowLedgerUseCase
from .get_cash_on_hand import GetCashOnHandUseCase
from .get_expense_breakdown import GetExpenseBreakdownUseCase
from .record_movements import (
    RecordCashMovementUseCase,
    RecordStockMovementUseCase,
)
from .classification_registry import ClassificationRegistry
from .batch_apply import BatchApplyPipeline, BatchStep, BatchTotals, Candidate
from .threshold_monitor import ThresholdMonitor

__all__ = [
    "ComputeBalanceUseCase",
    "GetCashFlowLedgerUseCase",
    "GetCashOnHandUseCase",
    "GetExpenseBreakdownUseCase",
    "RecordCashMovementUseCase",
    "RecordStockMovementUseCase",
    "ClassificationRegistry",
    "BatchApplyPipeline",
    "BatchStep",
    "BatchTotals",
    "Candidate",
    "ThresholdMonitor",
]
