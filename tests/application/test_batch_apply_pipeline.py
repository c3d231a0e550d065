"""Tests for the BatchApplyPipeline use case."""

from datetime import date, datetime
from decimal import Decimal
from itertools import count
from unittest.mock import MagicMock

import pytest

from src.application.use_cases.batch_apply import (
    BatchApplyPipeline,
    BatchStep,
)
from src.domain.exceptions import (
    AtomicityViolation,
    FieldError,
    PartialFailureForbidden,
    ValidationError,
)
from src.domain.models import MovementKind
from tests.fakes import InMemoryLedgerStore


def _store() -> InMemoryLedgerStore:
    store = InMemoryLedgerStore()
    store.add_item("sku-1", "Rice 5kg")
    store.add_item("sku-2", "Cooking Oil")
    store.add_item("sku-3", "Sugar 1kg")
    return store


def _pipeline(store: InMemoryLedgerStore, logger=None) -> BatchApplyPipeline:
    ids = count(1)
    return BatchApplyPipeline(
        store,
        logger=logger or MagicMock(),
        clock=lambda: datetime(2024, 6, 1, 9, 30),
        id_factory=lambda: f"batch-{next(ids)}",
    )


def _staged(pipeline: BatchApplyPipeline) -> list[str]:
    keys = [
        pipeline.add_candidate("Rice 5kg", "10", "250.00", ""),
        pipeline.add_candidate("sku-2", "4", "95.50", "Supplier B"),
        pipeline.add_candidate("Sugar 1kg", "6", "60", ""),
    ]
    for key in keys:
        pipeline.confirm(key)
    return keys


def test_commit_appends_one_stock_in_per_confirmed_candidate() -> None:
    store = _store()
    pipeline = _pipeline(store)
    _staged(pipeline)
    pipeline.proceed_to_review()

    movements = pipeline.commit(occurred_at=date(2024, 5, 31))

    assert [m.item_id for m in store.movements] == ["sku-1", "sku-2", "sku-3"]
    assert {m.kind for m in movements} == {MovementKind.STOCK_IN}
    assert movements[0].notes == "Batch Update"
    assert movements[1].notes == "Supplier B"
    assert movements[1].unit_price == Decimal("95.50")
    assert {m.occurred_at for m in movements} == {date(2024, 5, 31)}
    assert pipeline.step == BatchStep.COMMITTED
    assert pipeline.candidates == []


def test_commit_is_all_or_nothing() -> None:
    """A write failing on the second candidate persists nothing."""
    store = _store()
    store.fail_on_append = 2
    logger = MagicMock()
    pipeline = _pipeline(store, logger=logger)
    keys = _staged(pipeline)
    pipeline.proceed_to_review()

    with pytest.raises(PartialFailureForbidden) as exc_info:
        pipeline.commit()

    assert isinstance(exc_info.value, AtomicityViolation)
    assert store.movements == []
    assert pipeline.step == BatchStep.REVIEWING
    assert [c.key for c in pipeline.candidates] == keys
    logger.error.assert_called_once()


def test_commit_can_be_retried_after_failure() -> None:
    store = _store()
    store.fail_on_append = 1
    pipeline = _pipeline(store)
    _staged(pipeline)
    pipeline.proceed_to_review()
    with pytest.raises(PartialFailureForbidden):
        pipeline.commit()

    store.fail_on_append = None
    movements = pipeline.commit()

    assert len(movements) == 3
    assert len(store.movements) == 3


def test_review_requires_a_confirmed_candidate() -> None:
    pipeline = _pipeline(_store())
    pipeline.add_candidate("Rice 5kg", "3", "10", "")

    with pytest.raises(ValidationError):
        pipeline.proceed_to_review()

    assert pipeline.step == BatchStep.SELECTING


def test_confirm_requires_positive_quantity() -> None:
    pipeline = _pipeline(_store())
    key = pipeline.add_candidate("Rice 5kg", "0", "10", "")

    with pytest.raises(ValidationError):
        pipeline.confirm(key)

    assert pipeline.confirmed() == []


def test_validation_reruns_on_every_field_edit() -> None:
    pipeline = _pipeline(_store())
    key = pipeline.add_candidate("Rice 5kg", "3", "abc", "")

    assert pipeline.errors == [
        FieldError(key, "unit_price", "unit_price must be a number"),
    ]

    pipeline.update_field(key, "unit_price", "-2")
    assert pipeline.errors == [
        FieldError(key, "unit_price", "unit_price must not be negative"),
    ]

    pipeline.update_field(key, "unit_price", "12.75")
    assert pipeline.errors == []


def test_validation_reports_unknown_and_missing_items() -> None:
    pipeline = _pipeline(_store())
    unknown = pipeline.add_candidate("Flour", "1", "1", "")
    missing = pipeline.add_candidate("  ", "NaN", "1", "")

    errors = pipeline.validate()

    assert [(e.key, e.field) for e in errors] == [
        (unknown, "item_ref"),
        (missing, "item_ref"),
        (missing, "quantity"),
    ]


def test_commit_is_blocked_while_errors_exist() -> None:
    store = _store()
    pipeline = _pipeline(store)
    keys = _staged(pipeline)
    pipeline.add_candidate("Flour", "1", "1", "")
    pipeline.proceed_to_review()

    with pytest.raises(ValidationError) as exc_info:
        pipeline.commit()

    assert exc_info.value.field_errors[0].field == "item_ref"
    assert store.movements == []
    assert pipeline.step == BatchStep.REVIEWING
    assert len(pipeline.confirmed()) == len(keys)


def test_back_to_selection_allows_edits_and_cancel() -> None:
    pipeline = _pipeline(_store())
    keys = _staged(pipeline)
    pipeline.proceed_to_review()

    with pytest.raises(ValidationError):
        pipeline.update_field(keys[0], "quantity", "1")

    pipeline.back_to_selection()
    pipeline.cancel(keys[2])
    pipeline.update_field(keys[0], "quantity", "12")

    totals = pipeline.totals()
    assert totals.count == 2
    assert totals.quantity == Decimal("16")
    assert totals.cost == Decimal("12") * Decimal("250.00") + Decimal(
        "4"
    ) * Decimal("95.50")


def test_commit_selected_keys_only() -> None:
    store = _store()
    pipeline = _pipeline(store)
    keys = _staged(pipeline)
    pipeline.proceed_to_review()

    pipeline.commit(candidates=[keys[1]])

    assert [m.item_id for m in store.movements] == ["sku-2"]
    assert [c.key for c in pipeline.candidates] == [keys[0], keys[2]]
    assert pipeline.step == BatchStep.SELECTING


def test_remaining_candidates_commit_after_a_partial_batch() -> None:
    store = _store()
    pipeline = _pipeline(store)
    keys = _staged(pipeline)
    pipeline.proceed_to_review()
    pipeline.commit(candidates=[keys[0]])

    extra = pipeline.add_candidate("sku-2", "0", "95.50", "")
    pipeline.proceed_to_review()
    pipeline.commit()

    assert [m.item_id for m in store.movements] == ["sku-1", "sku-2", "sku-3"]
    assert [c.key for c in pipeline.candidates] == [extra]
    assert pipeline.step == BatchStep.SELECTING


def test_reset_clears_candidates() -> None:
    pipeline = _pipeline(_store())
    _staged(pipeline)
    pipeline.proceed_to_review()

    pipeline.reset()

    assert pipeline.step == BatchStep.SELECTING
    assert pipeline.candidates == []
