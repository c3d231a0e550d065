"""Read-only alert views over stock and cash aggregates."""

from collections.abc import Callable
from dataclasses import replace
from datetime import date
from decimal import Decimal

from src.application.ports.ledger_store import LedgerScope, LedgerStorePort
from src.application.use_cases.compute_balance import read_balance
from src.domain.constants import (
    DEFAULT_CASH_RISK_CEILING,
    DEFAULT_EXPIRY_WINDOW_DAYS,
    DEFAULT_LOW_STOCK_THRESHOLD,
)
from src.domain.exceptions import NotFound
from src.domain.models import (
    DateRange,
    ExpiringBatch,
    Item,
    LedgerKind,
    PartitionKey,
    StockSnapshot,
)
from src.domain.policies.ledger_policies import is_cash_at_risk
from src.domain.services.ledger import compute_stock_snapshot
from src.domain.services.thresholds import (
    rank_expiring_soon,
    rank_low_stock,
    rank_most_stocked,
)
from src.infrastructure.logging.logger import get_app_logger
from src.utils.time_utils import today


class ThresholdMonitor:
    """Derive stock, expiry and cash-risk alert views."""

    def __init__(
        self,
        store: LedgerStorePort,
        low_stock_threshold: Decimal = DEFAULT_LOW_STOCK_THRESHOLD,
        cash_risk_ceiling: Decimal = DEFAULT_CASH_RISK_CEILING,
        logger=None,
        clock: Callable[[], date] = today,
    ) -> None:
        """Initialize the monitor.

        Args:
            store: Port opening atomic scopes on the movement store.
            low_stock_threshold: Global threshold for items without their own.
            cash_risk_ceiling: Maximum cash a drawer may hold.
            logger: Optional logger compatible with logging.Logger-like API.
            clock: Source of the current business date.
        """
        self._store = store
        self._low_stock_threshold = low_stock_threshold
        self._cash_risk_ceiling = cash_risk_ceiling
        self._logger = logger or get_app_logger()
        self._clock = clock

    def snapshots(self) -> list[StockSnapshot]:
        """Return the stock position of every registered item."""
        with self._store.atomic() as scope:
            items = scope.items.list()
            by_item: dict[str, list] = {item.id: [] for item in items}
            for movement in scope.movements.query_ledger(LedgerKind.STOCK):
                if movement.item_id in by_item:
                    by_item[movement.item_id].append(movement)
            snapshots = [
                compute_stock_snapshot(
                    self._with_threshold(scope, item),
                    by_item[item.id],
                    self._low_stock_threshold,
                )
                for item in items
            ]
        for snapshot in snapshots:
            if snapshot.current_stock < 0:
                self._logger.warning(
                    f"Item {snapshot.item_name} has negative stock "
                    f"{snapshot.current_stock}"
                )
        return snapshots

    def snapshot(self, item_id: str) -> StockSnapshot:
        """Return the stock position of one item.

        Raises:
            NotFound: When the item is not registered.
        """
        with self._store.atomic() as scope:
            item = scope.items.get(item_id)
            if item is None:
                raise NotFound("item", item_id)
            movements = scope.movements.query(PartitionKey.stock(item_id))
            return compute_stock_snapshot(
                self._with_threshold(scope, item),
                movements,
                self._low_stock_threshold,
            )

    def low_stock(self, limit: int, offset: int = 0) -> list[StockSnapshot]:
        """Return items at or below their threshold, lowest stock first."""
        ranked = rank_low_stock(self.snapshots(), limit, offset)
        self._logger.info(f"{len(ranked)} low-stock items (limit {limit})")
        return ranked

    def most_stocked(
        self,
        limit: int,
        offset: int = 0,
    ) -> list[StockSnapshot]:
        """Return items with the highest stock first."""
        return rank_most_stocked(self.snapshots(), limit, offset)

    def expiring_soon(
        self,
        within_days: int = DEFAULT_EXPIRY_WINDOW_DAYS,
        limit: int = 10,
        offset: int = 0,
    ) -> list[ExpiringBatch]:
        """Return stock-in batches expiring within ``within_days`` of today.

        Args:
            within_days: Length of the alert window in days.
            limit: Maximum number of batches returned.
            offset: Number of ranked batches to skip, for paging.

        Returns:
            list[ExpiringBatch]: Soonest expiry first, ties by item name.
        """
        as_of = self._clock()
        with self._store.atomic() as scope:
            items = {item.id: item for item in scope.items.list()}
            movements = scope.movements.query_ledger(LedgerKind.STOCK)
        batches = rank_expiring_soon(
            movements,
            items,
            as_of,
            within_days,
            limit,
            offset,
        )
        self._logger.info(
            f"{len(batches)} batches expiring within {within_days} days"
        )
        return batches

    def cash_risk(
        self,
        category_id: str,
        ceiling: Decimal | None = None,
    ) -> bool:
        """Return True when a drawer currently holds more than the ceiling.

        Args:
            category_id: Cash category to evaluate.
            ceiling: Optional override of the configured ceiling.

        Returns:
            bool: False for categories that are not drawers.

        Raises:
            NotFound: When the category is not registered.
        """
        limit = self._cash_risk_ceiling if ceiling is None else ceiling
        with self._store.atomic() as scope:
            category = scope.categories.get(category_id)
            if category is None:
                raise NotFound("category", category_id)
            summary = read_balance(
                scope,
                PartitionKey.cash(category_id),
                DateRange.day(self._clock()),
            )
        at_risk = is_cash_at_risk(category, summary.balance, limit)
        if at_risk:
            self._logger.warning(
                f"Drawer {category.name} holds {summary.balance}, "
                f"above ceiling {limit}"
            )
        return at_risk

    @staticmethod
    def _with_threshold(scope: LedgerScope, item: Item) -> Item:
        return replace(
            item,
            low_stock_threshold=scope.items.threshold_for(item.id),
        )


__all__ = ["ThresholdMonitor"]
