"""Port for atomic units of work against the ledger store.

A use case opens one scope per command and performs every read and write of
that command through the repositories the scope exposes. Leaving the ``with``
block normally commits; an exception rolls everything back.
"""

from contextlib import AbstractContextManager
from typing import Protocol

from src.application.ports.category_repository import CategoryRepositoryPort
from src.application.ports.classification_repository import (
    ClassificationRepositoryPort,
)
from src.application.ports.item_repository import ItemRepositoryPort
from src.application.ports.movement_repository import MovementRepositoryPort


class LedgerScope(Protocol):
    """Repositories bound to one transaction."""

    movements: MovementRepositoryPort
    classifications: ClassificationRepositoryPort
    items: ItemRepositoryPort
    categories: CategoryRepositoryPort


class LedgerStorePort(Protocol):
    """Port opening atomic scopes on the movement store."""

    def atomic(self) -> AbstractContextManager[LedgerScope]:
        """Return a context manager yielding a transactional scope."""


__all__ = ["LedgerScope", "LedgerStorePort"]
