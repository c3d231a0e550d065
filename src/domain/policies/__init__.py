"""Domain policies package."""

from .ledger_policies import can_delete_classification, is_cash_at_risk

__all__ = ["can_delete_classification", "is_cash_at_risk"]
