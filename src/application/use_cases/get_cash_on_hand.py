"""Use case to report cash held in every drawer."""

from datetime import date

from src.application.ports.ledger_store import LedgerStorePort
from src.application.use_cases.compute_balance import read_balance
from src.domain.constants import DEFAULT_CURRENCY_CODE
from src.domain.models import (
    CashOnHand,
    DateRange,
    DrawerBalance,
    PartitionKey,
)
from src.infrastructure.logging.logger import get_app_logger


class GetCashOnHandUseCase:
    """Compute closing balances of drawer categories for a day."""

    def __init__(
        self,
        store: LedgerStorePort,
        logger=None,
        currency_code: str = DEFAULT_CURRENCY_CODE,
    ) -> None:
        """Initialize the use case.

        Args:
            store: Port opening atomic scopes on the movement store.
            logger: Optional logger compatible with logging.Logger-like API.
            currency_code: Currency label attached to the result.
        """
        self._store = store
        self._logger = logger or get_app_logger()
        self._currency_code = currency_code

    def execute(self, as_of: date) -> CashOnHand:
        """Return each drawer's closing balance on ``as_of``.

        Args:
            as_of: Business date the balances are closed at.

        Returns:
            CashOnHand: Drawer balances and their total.
        """
        day = DateRange.day(as_of)
        drawers = []
        with self._store.atomic() as scope:
            for category in scope.categories.list():
                if not category.is_drawer:
                    continue
                summary = read_balance(
                    scope,
                    PartitionKey.cash(category.id),
                    day,
                )
                drawers.append(
                    DrawerBalance(
                        category_id=category.id,
                        category=category.name,
                        balance=summary.balance,
                    )
                )
        result = CashOnHand(
            as_of=as_of,
            currency_code=self._currency_code,
            drawers=drawers,
        )
        self._logger.info(
            f"Cash on hand {as_of}: {len(drawers)} drawers, "
            f"total={result.total_net_balance} {self._currency_code}"
        )
        return result


__all__ = ["GetCashOnHandUseCase", "CashOnHand"]
