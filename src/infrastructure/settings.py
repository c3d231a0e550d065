"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
from decimal import Decimal
import os

import dotenv

from src.domain.constants import (
    DEFAULT_CASH_RISK_CEILING,
    DEFAULT_CURRENCY_CODE,
    DEFAULT_LOW_STOCK_THRESHOLD,
)
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import parse_decimal


@dataclass(frozen=True)
class LedgerSettings:
    """Configuration consumed by the ledger core.

    Attributes:
        global_low_stock_threshold: Threshold for items without their own.
        cash_risk_ceiling: Maximum cash a drawer should hold.
        currency_code: Currency used when displaying cash amounts.
    """

    global_low_stock_threshold: Decimal = DEFAULT_LOW_STOCK_THRESHOLD
    cash_risk_ceiling: Decimal = DEFAULT_CASH_RISK_CEILING
    currency_code: str = DEFAULT_CURRENCY_CODE

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        threshold = cls._read_amount(
            "LOW_STOCK_THRESHOLD",
            DEFAULT_LOW_STOCK_THRESHOLD,
            logger=logger,
        )
        ceiling = cls._read_amount(
            "CASH_RISK_CEILING",
            DEFAULT_CASH_RISK_CEILING,
            logger=logger,
        )
        currency = os.getenv("LEDGER_CURRENCY", "").strip().upper()
        return cls(
            global_low_stock_threshold=threshold,
            cash_risk_ceiling=ceiling,
            currency_code=currency or DEFAULT_CURRENCY_CODE,
        )

    @staticmethod
    def _read_amount(name: str, default: Decimal, logger) -> Decimal:
        """Read a non-negative number, falling back to ``default``.

        Args:
            name: Environment variable name.
            default: Value used when the variable is unset or invalid.
            logger: Logger used for warnings.

        Returns:
            Decimal: Parsed value or the default.
        """
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        parsed = parse_decimal(raw)
        if parsed is None or parsed < 0:
            logger.warning(
                f"Invalid {name}={raw!r}; using default {default}"
            )
            return default
        return parsed


__all__ = ["LedgerSettings"]
