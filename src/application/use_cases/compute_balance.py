"""Use case to compute forwarded balances and range totals."""

from datetime import date, timedelta

from src.application.ports.ledger_store import LedgerScope, LedgerStorePort
from src.domain.models import (
    BalanceSummary,
    DateRange,
    LedgerKind,
    PartitionKey,
)
from src.domain.services.ledger import ZERO, compute_balance
from src.domain.services.validation import validate_date_range
from src.infrastructure.logging.logger import get_app_logger


def partition_exists(scope: LedgerScope, partition_key: PartitionKey) -> bool:
    """Return True when the category or item behind a key is registered."""
    if partition_key.ledger == LedgerKind.CASH:
        return scope.categories.get(partition_key.key) is not None
    return scope.items.get(partition_key.key) is not None


def read_balance(
    scope: LedgerScope,
    partition_key: PartitionKey,
    date_range: DateRange,
) -> BalanceSummary:
    """Compute a balance from the movement log visible in ``scope``.

    Args:
        scope: Open ledger scope.
        partition_key: Category or item to aggregate.
        date_range: Inclusive business date range.

    Returns:
        BalanceSummary: Forwarded balance and period totals.
    """
    prior = scope.movements.query_before(partition_key, date_range.start)
    period = scope.movements.query(partition_key, date_range)
    return compute_balance(partition_key, date_range, prior, period)


def zero_balance(
    partition_key: PartitionKey,
    date_range: DateRange,
) -> BalanceSummary:
    """Return an all-zero balance for a partition without movements."""
    return BalanceSummary(
        partition_key=partition_key,
        start=date_range.start,
        end=date_range.end,
        forwarded=ZERO,
        period_in=ZERO,
        period_out=ZERO,
    )


def prior_range(start: date) -> DateRange | None:
    """Return the open-ended range of days before ``start``."""
    if start == date.min:
        return None
    return DateRange(start=date.min, end=start - timedelta(days=1))


class ComputeBalanceUseCase:
    """Compute the balance of a cash category or stock item."""

    def __init__(self, store: LedgerStorePort, logger=None) -> None:
        """Initialize the use case.

        Args:
            store: Port opening atomic scopes on the movement store.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._store = store
        self._logger = logger or get_app_logger()

    def execute(
        self,
        partition_key: PartitionKey,
        date_range: DateRange,
    ) -> BalanceSummary:
        """Return forwarded, inflow, outflow and balance for a range.

        Args:
            partition_key: Category (cash) or item (stock) to aggregate.
            date_range: Inclusive business date range.

        Returns:
            BalanceSummary: Zero-filled when the partition is unknown.

        Raises:
            ValidationError: If the range ends before it starts.
        """
        validate_date_range(date_range)
        with self._store.atomic() as scope:
            if not partition_exists(scope, partition_key):
                self._logger.warning(
                    f"Unknown {partition_key.ledger.value} partition "
                    f"{partition_key.key}; returning zero balance"
                )
                return zero_balance(partition_key, date_range)
            summary = read_balance(scope, partition_key, date_range)
        self._logger.info(
            f"Balance {partition_key.ledger.value}:{partition_key.key} "
            f"{date_range.start}..{date_range.end}: "
            f"forwarded={summary.forwarded}, in={summary.period_in}, "
            f"out={summary.period_out}, balance={summary.balance}"
        )
        return summary

    def execute_day(
        self,
        partition_key: PartitionKey,
        day: date,
    ) -> BalanceSummary:
        """Return the single-day balance used by dashboards."""
        return self.execute(partition_key, DateRange.day(day))


__all__ = [
    "ComputeBalanceUseCase",
    "partition_exists",
    "prior_range",
    "read_balance",
    "zero_balance",
]
