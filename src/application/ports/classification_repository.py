"""Port for the classification registry storage."""

from typing import Protocol

from src.domain.models import Classification


class ClassificationRepositoryPort(Protocol):
    """Port exposing CRUD access to classifications."""

    def list(self) -> list[Classification]:
        """Return classifications ordered by name."""

    def get(self, classification_id: str) -> Classification | None:
        """Return a classification or None when missing."""

    def create(
        self,
        name: str,
        icon: str | None = None,
        store_id: str | None = None,
    ) -> Classification:
        """Insert a classification and return it."""

    def rename(self, classification_id: str, name: str) -> None:
        """Change the name of a classification."""

    def delete(self, classification_id: str) -> None:
        """Remove a classification row."""


__all__ = ["ClassificationRepositoryPort"]
