"""CLI adapter printing the balance of a cash category or stock item."""

import argparse
from datetime import date

from src.application.use_cases.compute_balance import ComputeBalanceUseCase
from src.domain.exceptions import LedgerError
from src.domain.models import DateRange, LedgerKind, PartitionKey
from src.infrastructure.container import build_ledger_store
from src.infrastructure.logging.logger import get_app_logger
from src.utils.time_utils import today


def _parse_date(value: str | None, logger) -> date | None:
    """Parse an ISO date string into a date.

    Args:
        value: Date string in YYYY-MM-DD format.
        logger: Logger used for warnings.

    Returns:
        date | None: Parsed date or None when invalid.
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        logger.warning(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        )
        return None


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the report command."""
    parser = argparse.ArgumentParser(
        description="Print forwarded, in, out and closing balance.",
    )
    parser.add_argument(
        "ledger",
        choices=[kind.value for kind in LedgerKind],
        help="cash for a category id, stock for an item id",
    )
    parser.add_argument("key", help="category or item identifier")
    parser.add_argument("--start", help="first day, YYYY-MM-DD")
    parser.add_argument("--end", help="last day, YYYY-MM-DD (default today)")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the balance report.

    Args:
        argv: Command line arguments, defaults to ``sys.argv``.

    Returns:
        int: Process exit code.
    """
    args = build_parser().parse_args(argv)
    logger = get_app_logger()
    end = _parse_date(args.end, logger) or today()
    start = _parse_date(args.start, logger) or end
    partition_key = PartitionKey(LedgerKind(args.ledger), args.key)

    use_case = ComputeBalanceUseCase(build_ledger_store(), logger=logger)
    try:
        summary = use_case.execute(partition_key, DateRange(start, end))
    except LedgerError as exc:
        logger.error(str(exc))
        print(f"Error [{exc.code}]: {exc}")
        return 1

    print(f"Balance of {args.ledger}:{args.key} from {start} to {end}")
    print(
        f"forwarded={summary.forwarded}, in={summary.period_in}, "
        f"out={summary.period_out}, balance={summary.balance}"
    )
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
