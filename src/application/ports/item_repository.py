"""Port for reading registered items."""

from decimal import Decimal
from typing import Protocol

from src.domain.models import Item


class ItemRepositoryPort(Protocol):
    """Port exposing read access to the item registry."""

    def list(self) -> list[Item]:
        """Return every item ordered by name."""

    def get(self, item_id: str) -> Item | None:
        """Return an item by id or None."""

    def find_by_name(self, name: str) -> Item | None:
        """Return an item by exact name or None."""

    def threshold_for(self, item_id: str) -> Decimal | None:
        """Return the item's own low-stock threshold, None for the default."""


__all__ = ["ItemRepositoryPort"]
