"""Port for reading cash categories (drawers)."""

from typing import Protocol

from src.domain.models import CashCategory


class CategoryRepositoryPort(Protocol):
    """Port exposing read access to cash categories."""

    def list(self) -> list[CashCategory]:
        """Return categories ordered by name."""

    def get(self, category_id: str) -> CashCategory | None:
        """Return a category by id or None."""


__all__ = ["CategoryRepositoryPort"]
