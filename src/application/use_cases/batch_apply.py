"""Two-phase batch stock replenishment.

Candidates are staged and edited while ``SELECTING``, reviewed, then
committed as one atomic unit:

    SELECTING -> REVIEWING -> COMMITTING -> COMMITTED
                     ^             |
                     +-------------+  (commit failed, nothing persisted)
    REVIEWING -> SELECTING           (back)
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from src.application.ports.ledger_store import LedgerStorePort
from src.application.use_cases.record_movements import (
    new_movement_id,
    resolve_item,
)
from src.domain.constants import BATCH_DEFAULT_NOTE
from src.domain.exceptions import (
    FieldError,
    NotFound,
    PartialFailureForbidden,
    ValidationError,
)
from src.domain.models import MovementKind, StockMovement
from src.domain.services.validation import parse_magnitude
from src.infrastructure.logging.logger import get_app_logger, get_usage_logger
from src.utils.decimal_utils import parse_decimal
from src.utils.time_utils import utcnow

EDITABLE_FIELDS = ("item_ref", "quantity", "unit_price", "note")


class BatchStep(str, Enum):
    """Pipeline states."""

    SELECTING = "selecting"
    REVIEWING = "reviewing"
    COMMITTING = "committing"
    COMMITTED = "committed"


@dataclass(frozen=True)
class Candidate:
    """A staged stock-in line, holding raw user input until commit."""

    key: str
    item_ref: str
    quantity: object
    unit_price: object
    note: str = ""
    confirmed: bool = False


@dataclass(frozen=True)
class BatchTotals:
    """Review totals over confirmed candidates."""

    count: int
    quantity: Decimal
    cost: Decimal


class BatchApplyPipeline:
    """Stage, validate and atomically commit a batch of stock-ins."""

    def __init__(
        self,
        store: LedgerStorePort,
        logger=None,
        clock: Callable[[], datetime] = utcnow,
        id_factory: Callable[[], str] = new_movement_id,
    ) -> None:
        """Initialize an empty pipeline in the SELECTING step.

        Args:
            store: Port opening atomic scopes on the movement store.
            logger: Optional logger compatible with logging.Logger-like API.
            clock: Source of insertion timestamps.
            id_factory: Source of movement ids.
        """
        self._store = store
        self._logger = logger or get_app_logger()
        self._usage_logger = get_usage_logger()
        self._clock = clock
        self._id_factory = id_factory
        self._candidates: dict[str, Candidate] = {}
        self._sequence = 0
        self._errors: list[FieldError] = []
        self.step = BatchStep.SELECTING

    @property
    def candidates(self) -> list[Candidate]:
        return list(self._candidates.values())

    @property
    def errors(self) -> list[FieldError]:
        """Validation errors as of the latest edit."""
        return list(self._errors)

    def add_candidate(
        self,
        item_ref: str,
        quantity,
        unit_price,
        note: str = "",
    ) -> str:
        """Stage a candidate and return its key."""
        self._require_step(BatchStep.SELECTING, "add candidates")
        self._sequence += 1
        key = f"candidate-{self._sequence}"
        self._candidates[key] = Candidate(
            key=key,
            item_ref=item_ref,
            quantity=quantity,
            unit_price=unit_price,
            note=note,
        )
        self.validate()
        return key

    def update_field(self, key: str, field: str, value) -> None:
        """Edit one field of a staged candidate and re-validate."""
        self._require_step(BatchStep.SELECTING, "edit candidates")
        if field not in EDITABLE_FIELDS:
            raise ValidationError(
                f"Unknown candidate field: {field}",
                [FieldError(key, field, "field cannot be edited")],
            )
        candidate = self._get(key)
        self._candidates[key] = replace(candidate, **{field: value})
        self.validate()

    def confirm(self, key: str) -> None:
        """Mark a candidate for commit; its quantity must be above zero."""
        self._require_step(BatchStep.SELECTING, "confirm candidates")
        candidate = self._get(key)
        quantity = parse_decimal(candidate.quantity)
        if quantity is None or quantity <= 0:
            raise ValidationError(
                "Quantity must be greater than 0 to select this item.",
                [FieldError(key, "quantity", "must be greater than 0")],
            )
        self._candidates[key] = replace(candidate, confirmed=True)

    def cancel(self, key: str) -> None:
        """Drop a staged candidate."""
        self._require_step(BatchStep.SELECTING, "cancel candidates")
        self._get(key)
        del self._candidates[key]
        self.validate()

    def confirmed(self) -> list[Candidate]:
        return [c for c in self._candidates.values() if c.confirmed]

    def validate(self) -> list[FieldError]:
        """Check every staged candidate.

        Returns:
            list[FieldError]: Errors keyed by candidate, empty when valid.
        """
        errors: list[FieldError] = []
        if self._candidates:
            with self._store.atomic() as scope:
                for candidate in self._candidates.values():
                    if not str(candidate.item_ref or "").strip():
                        errors.append(
                            FieldError(
                                candidate.key,
                                "item_ref",
                                "Item name is required",
                            )
                        )
                    elif resolve_item(scope, candidate.item_ref) is None:
                        errors.append(
                            FieldError(
                                candidate.key,
                                "item_ref",
                                f'Item "{candidate.item_ref}" is not '
                                "registered",
                            )
                        )
                    for field in ("quantity", "unit_price"):
                        _, error = parse_magnitude(
                            candidate.key,
                            field,
                            getattr(candidate, field),
                        )
                        if error is not None:
                            errors.append(error)
        self._errors = errors
        return list(errors)

    def totals(self) -> BatchTotals:
        """Return count, quantity and cost of confirmed candidates."""
        quantity = Decimal("0")
        cost = Decimal("0")
        confirmed = self.confirmed()
        for candidate in confirmed:
            line_quantity = parse_decimal(candidate.quantity) or Decimal("0")
            line_price = parse_decimal(candidate.unit_price) or Decimal("0")
            quantity += line_quantity
            cost += line_quantity * line_price
        return BatchTotals(count=len(confirmed), quantity=quantity, cost=cost)

    def proceed_to_review(self) -> None:
        """Move to REVIEWING; at least one candidate must be confirmed."""
        self._require_step(BatchStep.SELECTING, "review")
        if not self.confirmed():
            raise ValidationError(
                "Please select at least one item to update.",
                [FieldError("batch", "candidates", "no confirmed candidate")],
            )
        self.step = BatchStep.REVIEWING

    def back_to_selection(self) -> None:
        self._require_step(BatchStep.REVIEWING, "go back to selection")
        self.step = BatchStep.SELECTING

    def reset(self) -> None:
        """Start a new batch after a successful commit."""
        self._candidates.clear()
        self._errors = []
        self.step = BatchStep.SELECTING

    def commit(
        self,
        candidates: Iterable[str] | None = None,
        occurred_at: date | None = None,
    ) -> list[StockMovement]:
        """Append one STOCK_IN per confirmed candidate, all or nothing.

        Args:
            candidates: Keys of confirmed candidates to apply, defaults to
                every confirmed candidate.
            occurred_at: Business date of the batch, defaults to today.

        Returns:
            list[StockMovement]: Movements appended by the batch.

        Raises:
            ValidationError: If not reviewing or any candidate is invalid.
            PartialFailureForbidden: If the store rejected the batch; no
                movement was persisted.
        """
        self._require_step(BatchStep.REVIEWING, "commit")
        errors = self.validate()
        if errors:
            raise ValidationError(
                f"Batch has {len(errors)} invalid fields",
                errors,
            )
        batch = self._select_batch(candidates)
        self.step = BatchStep.COMMITTING
        created_at = self._clock()
        business_date = occurred_at or created_at.date()
        try:
            with self._store.atomic() as scope:
                movements = []
                for candidate in batch:
                    item = resolve_item(scope, candidate.item_ref)
                    if item is None:
                        raise NotFound("item", str(candidate.item_ref))
                    movement = StockMovement(
                        id=self._id_factory(),
                        kind=MovementKind.STOCK_IN,
                        item_id=item.id,
                        quantity=parse_decimal(candidate.quantity),
                        occurred_at=business_date,
                        created_at=created_at,
                        unit_price=parse_decimal(candidate.unit_price),
                        notes=candidate.note or BATCH_DEFAULT_NOTE,
                    )
                    scope.movements.append(movement)
                    movements.append(movement)
        except Exception as exc:
            self.step = BatchStep.REVIEWING
            self._logger.error(
                f"Batch of {len(batch)} stock-ins rolled back: {exc}"
            )
            raise PartialFailureForbidden(
                f"Batch of {len(batch)} candidates was not applied: {exc}"
            ) from exc

        for candidate in batch:
            del self._candidates[candidate.key]
        self.validate()
        # Candidates left out of the batch stay staged for the next one.
        self.step = (
            BatchStep.SELECTING if self._candidates else BatchStep.COMMITTED
        )
        self._usage_logger.info(
            f"Committed batch of {len(movements)} stock-ins"
        )
        return movements

    def _select_batch(self, keys: Iterable[str] | None) -> list[Candidate]:
        if keys is None:
            return self.confirmed()
        batch = []
        for key in keys:
            candidate = self._get(key)
            if not candidate.confirmed:
                raise ValidationError(
                    f"Candidate {key} is not confirmed",
                    [FieldError(key, "confirmed", "must be confirmed")],
                )
            batch.append(candidate)
        if not batch:
            raise ValidationError(
                "Please select at least one item to update.",
                [FieldError("batch", "candidates", "no confirmed candidate")],
            )
        return batch

    def _get(self, key: str) -> Candidate:
        candidate = self._candidates.get(key)
        if candidate is None:
            raise NotFound("candidate", key)
        return candidate

    def _require_step(self, step: BatchStep, action: str) -> None:
        if self.step != step:
            raise ValidationError(
                f"Cannot {action} while {self.step.value}",
                [FieldError("batch", "step", f"expected {step.value}")],
            )


__all__ = [
    "BatchApplyPipeline",
    "BatchStep",
    "BatchTotals",
    "Candidate",
    "EDITABLE_FIELDS",
]
