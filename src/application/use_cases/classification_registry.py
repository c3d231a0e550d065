"""Use case managing expense classifications with guarded deletes."""

from src.application.ports.ledger_store import LedgerScope, LedgerStorePort
from src.domain.constants import (
    DEFAULT_CLASSIFICATION_ICON,
    DEFAULT_CLASSIFICATIONS,
)
from src.domain.exceptions import (
    AtomicityViolation,
    ClassificationInUse,
    FieldError,
    NotFound,
    ValidationError,
)
from src.domain.models import Classification
from src.domain.policies import can_delete_classification
from src.domain.services.normalization import normalize_name
from src.infrastructure.logging.logger import get_app_logger, get_usage_logger


class ClassificationRegistry:
    """Create, rename and delete classifications without losing history.

    A classification referenced by movements can only disappear through
    ``transfer_and_delete``, which reassigns and deletes in one atomic scope.
    """

    def __init__(
        self,
        store: LedgerStorePort,
        logger=None,
        store_id: str | None = None,
    ) -> None:
        """Initialize the registry.

        Args:
            store: Port opening atomic scopes on the movement store.
            logger: Optional logger compatible with logging.Logger-like API.
            store_id: Owning store stamped on created classifications.
        """
        self._store = store
        self._logger = logger or get_app_logger()
        self._usage_logger = get_usage_logger()
        self._store_id = store_id

    def list(self) -> list[Classification]:
        """Return classifications, seeding the defaults into an empty registry.

        Returns:
            list[Classification]: Classifications ordered by name.
        """
        with self._store.atomic() as scope:
            classifications = scope.classifications.list()
            if classifications:
                return classifications
            for name, icon in DEFAULT_CLASSIFICATIONS:
                scope.classifications.create(
                    name,
                    icon=icon,
                    store_id=self._store_id,
                )
            seeded = scope.classifications.list()
        self._logger.info(f"Seeded {len(seeded)} default classifications")
        return seeded

    def create(
        self,
        name: str,
        icon: str = DEFAULT_CLASSIFICATION_ICON,
    ) -> Classification:
        """Create a classification with a non-empty name."""
        cleaned = self._require_name(name)
        with self._store.atomic() as scope:
            created = scope.classifications.create(
                cleaned,
                icon=icon,
                store_id=self._store_id,
            )
        self._usage_logger.info(f"Created classification {created.name}")
        return created

    def rename(self, classification_id: str, name: str) -> None:
        """Rename a classification.

        Raises:
            ValidationError: If the new name is empty.
            NotFound: If the classification does not exist.
        """
        cleaned = self._require_name(name)
        with self._store.atomic() as scope:
            self._require(scope, classification_id)
            scope.classifications.rename(classification_id, cleaned)
        self._usage_logger.info(
            f"Renamed classification {classification_id} to {cleaned}"
        )

    def usage_count(self, classification_id: str) -> int:
        """Return how many movements reference a classification.

        Raises:
            NotFound: If the classification does not exist.
        """
        with self._store.atomic() as scope:
            self._require(scope, classification_id)
            return scope.movements.count_by_classification(classification_id)

    def delete(self, classification_id: str) -> None:
        """Delete an unused classification.

        Raises:
            NotFound: If the classification does not exist.
            ClassificationInUse: If any movement still references it.
        """
        with self._store.atomic() as scope:
            self._require(scope, classification_id)
            usage = scope.movements.count_by_classification(classification_id)
            if not can_delete_classification(usage):
                raise ClassificationInUse(classification_id, usage)
            scope.classifications.delete(classification_id)
        self._usage_logger.info(f"Deleted classification {classification_id}")

    def transfer_and_delete(self, from_id: str, to_id: str) -> int:
        """Reassign every movement of ``from_id`` to ``to_id``, then delete it.

        Both steps run in one atomic scope; a failure in either leaves the
        classification and every movement untouched.

        Args:
            from_id: Classification being removed.
            to_id: Classification receiving the movements.

        Returns:
            int: Number of reassigned movements.

        Raises:
            ValidationError: If both ids are the same.
            NotFound: If either classification does not exist.
            AtomicityViolation: If the store could not apply the unit.
        """
        if from_id == to_id:
            raise ValidationError(
                "Cannot transfer a classification onto itself",
                [FieldError("transfer", "to_id", "choose another target")],
            )
        try:
            with self._store.atomic() as scope:
                self._require(scope, from_id)
                self._require(scope, to_id)
                expected = scope.movements.count_by_classification(from_id)
                moved = scope.movements.reassign_classification(from_id, to_id)
                if moved != expected:
                    raise AtomicityViolation(
                        f"Reassigned {moved} movements, expected {expected}"
                    )
                scope.classifications.delete(from_id)
        except AtomicityViolation:
            self._logger.error(
                f"Transfer of classification {from_id} to {to_id} "
                "rolled back"
            )
            raise
        self._usage_logger.info(
            f"Transferred {moved} movements from classification {from_id} "
            f"to {to_id} and deleted {from_id}"
        )
        return moved

    @staticmethod
    def _require(scope: LedgerScope, classification_id: str) -> Classification:
        found = scope.classifications.get(classification_id)
        if found is None:
            raise NotFound("classification", classification_id)
        return found

    @staticmethod
    def _require_name(name: str) -> str:
        cleaned = normalize_name(name)
        if cleaned is None:
            raise ValidationError(
                "Classification name is required",
                [FieldError("classification", "name", "name is required")],
            )
        return cleaned


__all__ = ["ClassificationRegistry"]
