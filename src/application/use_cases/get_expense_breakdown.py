"""Use case to break cash-outs down by source and classification."""

from src.application.ports.ledger_store import LedgerStorePort
from src.domain.models import (
    CashMovement,
    DateRange,
    ExpenseBreakdownItem,
    LedgerKind,
)
from src.domain.services.ledger import compute_expense_breakdown
from src.domain.services.validation import validate_date_range
from src.infrastructure.logging.logger import get_app_logger


class GetExpenseBreakdownUseCase:
    """Aggregate classified cash-outs over a period."""

    def __init__(self, store: LedgerStorePort, logger=None) -> None:
        self._store = store
        self._logger = logger or get_app_logger()

    def execute(self, date_range: DateRange) -> list[ExpenseBreakdownItem]:
        """Return totals grouped by source category then classification.

        Args:
            date_range: Inclusive business date range.

        Returns:
            list[ExpenseBreakdownItem]: Sorted by source and classification.
        """
        validate_date_range(date_range)
        with self._store.atomic() as scope:
            movements = [
                movement
                for movement in scope.movements.query_ledger(
                    LedgerKind.CASH,
                    date_range,
                )
                if isinstance(movement, CashMovement)
            ]
            category_names = {
                category.id: category.name
                for category in scope.categories.list()
            }
            classification_names = {
                classification.id: classification.name
                for classification in scope.classifications.list()
            }
        items = compute_expense_breakdown(
            movements,
            category_names,
            classification_names,
        )
        self._logger.info(
            f"Expense breakdown {date_range.start}..{date_range.end}: "
            f"{len(items)} groups"
        )
        return items


__all__ = ["GetExpenseBreakdownUseCase", "ExpenseBreakdownItem"]
