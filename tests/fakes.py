"""In-memory ledger store used by the use case tests.

Each ``atomic()`` scope works on a copy of the committed state and swaps it in
only when the block exits without an exception.
"""

from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal
from itertools import count

from src.domain.models import (
    CashCategory,
    CashMovement,
    Classification,
    Item,
    LedgerKind,
    Movement,
    MovementKind,
    PartitionKey,
    StockMovement,
)
from src.domain.services.ledger import order_movements


@dataclass
class _State:
    categories: dict[str, CashCategory] = field(default_factory=dict)
    items: dict[str, Item] = field(default_factory=dict)
    classifications: dict[str, Classification] = field(default_factory=dict)
    movements: list[Movement] = field(default_factory=list)

    def copy(self) -> "_State":
        return _State(
            categories=dict(self.categories),
            items=dict(self.items),
            classifications=dict(self.classifications),
            movements=list(self.movements),
        )


class _Movements:
    def __init__(self, store: "InMemoryLedgerStore", state: _State) -> None:
        self._store = store
        self._state = state

    def append(self, movement: Movement) -> str:
        self._store.append_calls += 1
        if self._store.fail_on_append == self._store.append_calls:
            raise RuntimeError("store rejected the write")
        self._state.movements.append(movement)
        return movement.id

    def query(self, partition_key: PartitionKey, date_range=None):
        return order_movements(
            movement
            for movement in self._state.movements
            if movement.partition_key == partition_key
            and (date_range is None or date_range.contains(movement.occurred_at))
        )

    def query_before(self, partition_key: PartitionKey, before: date):
        return order_movements(
            movement
            for movement in self._state.movements
            if movement.partition_key == partition_key
            and movement.occurred_at < before
        )

    def query_ledger(self, ledger: LedgerKind, date_range=None):
        return order_movements(
            movement
            for movement in self._state.movements
            if movement.kind.ledger == ledger
            and (date_range is None or date_range.contains(movement.occurred_at))
        )

    def count_by_classification(self, classification_id: str) -> int:
        return sum(
            1
            for movement in self._state.movements
            if isinstance(movement, CashMovement)
            and movement.classification_id == classification_id
        )

    def reassign_classification(self, from_id: str, to_id: str) -> int:
        moved = 0
        for index, movement in enumerate(self._state.movements):
            if (
                isinstance(movement, CashMovement)
                and movement.classification_id == from_id
            ):
                self._state.movements[index] = replace(
                    movement,
                    classification_id=to_id,
                )
                moved += 1
        if self._store.reassign_shortfall:
            return moved - self._store.reassign_shortfall
        return moved


class _Classifications:
    def __init__(self, store: "InMemoryLedgerStore", state: _State) -> None:
        self._store = store
        self._state = state

    def list(self):
        return sorted(
            self._state.classifications.values(),
            key=lambda item: (item.name, item.id),
        )

    def get(self, classification_id: str):
        return self._state.classifications.get(classification_id)

    def create(self, name: str, icon=None, store_id=None):
        classification = Classification(
            id=f"cls-{next(self._store.ids)}",
            name=name,
            store_id=store_id,
            icon=icon,
        )
        self._state.classifications[classification.id] = classification
        return classification

    def rename(self, classification_id: str, name: str) -> None:
        current = self._state.classifications[classification_id]
        self._state.classifications[classification_id] = replace(
            current,
            name=name,
        )

    def delete(self, classification_id: str) -> None:
        if self._store.fail_on_delete:
            raise RuntimeError("delete failed")
        self._state.classifications.pop(classification_id, None)


class _Items:
    def __init__(self, state: _State) -> None:
        self._state = state

    def list(self):
        return sorted(
            self._state.items.values(),
            key=lambda item: (item.name, item.id),
        )

    def get(self, item_id: str):
        return self._state.items.get(item_id)

    def find_by_name(self, name: str):
        for item in self._state.items.values():
            if item.name == name:
                return item
        return None

    def threshold_for(self, item_id: str):
        item = self._state.items.get(item_id)
        return item.low_stock_threshold if item else None


class _Categories:
    def __init__(self, state: _State) -> None:
        self._state = state

    def list(self):
        return sorted(
            self._state.categories.values(),
            key=lambda item: (item.name, item.id),
        )

    def get(self, category_id: str):
        return self._state.categories.get(category_id)


class _Scope:
    def __init__(self, store: "InMemoryLedgerStore", state: _State) -> None:
        self.movements = _Movements(store, state)
        self.classifications = _Classifications(store, state)
        self.items = _Items(state)
        self.categories = _Categories(state)


class InMemoryLedgerStore:
    """LedgerStorePort implementation with failure injection.

    Attributes:
        fail_on_append: 1-based append call number that raises.
        fail_on_delete: Make classification deletes raise.
        reassign_shortfall: Under-report reassigned movements by this many.
    """

    def __init__(self) -> None:
        self._state = _State()
        self.ids = count(1)
        self.atomic_calls = 0
        self.append_calls = 0
        self.fail_on_append: int | None = None
        self.fail_on_delete = False
        self.reassign_shortfall = 0

    @contextmanager
    def atomic(self):
        self.atomic_calls += 1
        working = self._state.copy()
        yield _Scope(self, working)
        self._state = working

    @property
    def movements(self) -> list[Movement]:
        return list(self._state.movements)

    @property
    def classifications(self) -> dict[str, Classification]:
        return dict(self._state.classifications)

    def add_category(
        self,
        category_id: str,
        name: str,
        is_drawer: bool = True,
    ) -> CashCategory:
        category = CashCategory(category_id, name, is_drawer)
        self._state.categories[category_id] = category
        return category

    def add_item(
        self,
        item_id: str,
        name: str,
        threshold: Decimal | None = None,
    ) -> Item:
        item = Item(id=item_id, name=name, low_stock_threshold=threshold)
        self._state.items[item_id] = item
        return item

    def add_classification(self, classification_id: str, name: str):
        classification = Classification(classification_id, name)
        self._state.classifications[classification_id] = classification
        return classification

    def add_cash(
        self,
        category_id: str,
        kind: MovementKind,
        amount: str,
        occurred_at: date,
        classification_id: str | None = None,
        created_at: datetime | None = None,
    ) -> CashMovement:
        movement = CashMovement(
            id=f"cash-{next(self.ids)}",
            kind=kind,
            category_id=category_id,
            amount=Decimal(amount),
            occurred_at=occurred_at,
            created_at=created_at or datetime(2024, 1, 1, 12, 0),
            classification_id=classification_id,
            cashout_type="OPEX" if kind == MovementKind.CASH_OUT else None,
        )
        self._state.movements.append(movement)
        return movement

    def add_stock(
        self,
        item_id: str,
        kind: MovementKind,
        quantity: str,
        occurred_at: date,
        created_at: datetime | None = None,
        expiry_date: date | None = None,
    ) -> StockMovement:
        movement = StockMovement(
            id=f"stock-{next(self.ids)}",
            kind=kind,
            item_id=item_id,
            quantity=Decimal(quantity),
            occurred_at=occurred_at,
            created_at=created_at or datetime(2024, 1, 1, 12, 0),
            expiry_date=expiry_date,
        )
        self._state.movements.append(movement)
        return movement


__all__ = ["InMemoryLedgerStore"]
