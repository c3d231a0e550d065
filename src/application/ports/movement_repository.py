"""Port for the append-only movement store."""

from datetime import date
from typing import Protocol

from src.domain.models import DateRange, LedgerKind, Movement, PartitionKey


class MovementRepositoryPort(Protocol):
    """Port exposing append and ordered reads over the movement log.

    Every read returns movements ordered by (occurred_at, created_at, id).
    """

    def append(self, movement: Movement) -> str:
        """Persist a new movement and return its id."""

    def query(
        self,
        partition_key: PartitionKey,
        date_range: DateRange | None = None,
    ) -> list[Movement]:
        """Return movements of a partition, optionally within a range."""

    def query_before(
        self,
        partition_key: PartitionKey,
        before: date,
    ) -> list[Movement]:
        """Return movements of a partition strictly before a date."""

    def query_ledger(
        self,
        ledger: LedgerKind,
        date_range: DateRange | None = None,
    ) -> list[Movement]:
        """Return movements of every partition of a ledger."""

    def count_by_classification(self, classification_id: str) -> int:
        """Return how many cash movements reference a classification."""

    def reassign_classification(self, from_id: str, to_id: str) -> int:
        """Point every movement of ``from_id`` at ``to_id``; return count."""


__all__ = ["MovementRepositoryPort"]
