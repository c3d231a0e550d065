"""Use case to build the daily cash-flow ledger of a category."""

from src.application.ports.ledger_store import LedgerStorePort
from src.application.use_cases.compute_balance import prior_range
from src.domain.constants import OVERALL_CATEGORY
from src.domain.exceptions import NotFound
from src.domain.models import (
    DailyLedgerEntry,
    DateRange,
    LedgerKind,
    PartitionKey,
)
from src.domain.services.ledger import compute_daily_ledger
from src.domain.services.validation import validate_date_range
from src.infrastructure.logging.logger import get_app_logger


class GetCashFlowLedgerUseCase:
    """Return per-day forwarded, cash in, cash out and balance rows."""

    def __init__(self, store: LedgerStorePort, logger=None) -> None:
        """Initialize the use case.

        Args:
            store: Port opening atomic scopes on the movement store.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._store = store
        self._logger = logger or get_app_logger()

    def categories(self) -> list[str]:
        """Return selectable ledger names, "Overall" first."""
        with self._store.atomic() as scope:
            names = [category.name for category in scope.categories.list()]
        return [OVERALL_CATEGORY, *names]

    def execute(
        self,
        category: str,
        date_range: DateRange,
    ) -> list[DailyLedgerEntry]:
        """Return the daily ledger of a category or of all categories.

        Args:
            category: Category id or name, or "Overall" for every category
                combined.
            date_range: Inclusive business date range.

        Returns:
            list[DailyLedgerEntry]: One row per day in the range.

        Raises:
            ValidationError: If the range ends before it starts.
            NotFound: If the category is not registered.
        """
        validate_date_range(date_range)
        before = prior_range(date_range.start)
        with self._store.atomic() as scope:
            if category == OVERALL_CATEGORY:
                label = OVERALL_CATEGORY
                prior = (
                    scope.movements.query_ledger(LedgerKind.CASH, before)
                    if before is not None
                    else []
                )
                period = scope.movements.query_ledger(
                    LedgerKind.CASH,
                    date_range,
                )
            else:
                found = scope.categories.get(category) or next(
                    (
                        candidate
                        for candidate in scope.categories.list()
                        if candidate.name == category
                    ),
                    None,
                )
                if found is None:
                    raise NotFound("category", category)
                label = found.name
                partition_key = PartitionKey.cash(found.id)
                prior = scope.movements.query_before(
                    partition_key,
                    date_range.start,
                )
                period = scope.movements.query(partition_key, date_range)

        entries = compute_daily_ledger(label, prior, period, date_range)
        self._logger.info(
            f"Built {len(entries)} ledger rows for {label} "
            f"from {len(period)} movements"
        )
        return entries


__all__ = ["GetCashFlowLedgerUseCase", "DailyLedgerEntry"]
