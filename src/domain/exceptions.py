"""Typed error taxonomy for ledger operations.

Callers distinguish failures by class, never by message:

    LedgerError
    +-- ValidationError          malformed input, never partially applied
    +-- ClassificationInUse      delete blocked by referencing movements
    +-- AtomicityViolation       the store could not guarantee the unit
    |   +-- PartialFailureForbidden   a batch commit was rolled back
    +-- NotFound                 referenced entity no longer exists
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """Validation message attached to one field of one input row.

    Attributes:
        key: Identifier of the row (candidate key or form name).
        field: Field name the message applies to.
        message: Human readable explanation.
    """

    key: str
    field: str
    message: str


class LedgerError(Exception):
    """Base class for every ledger failure."""

    code = "LEDGER_ERROR"


class ValidationError(LedgerError):
    """Input could not be accepted."""

    code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str,
        field_errors: list[FieldError] | None = None,
    ) -> None:
        super().__init__(message)
        self.field_errors = list(field_errors or [])


class ClassificationInUse(LedgerError):
    """A classification still referenced by movements cannot be deleted."""

    code = "CLASSIFICATION_IN_USE"

    def __init__(self, classification_id: str, usage_count: int) -> None:
        super().__init__(
            f"Classification {classification_id} is used by "
            f"{usage_count} movements; transfer them before deleting"
        )
        self.classification_id = classification_id
        self.usage_count = usage_count


class AtomicityViolation(LedgerError):
    """The store could not apply an atomic unit; nothing was persisted."""

    code = "ATOMICITY_VIOLATION"


class PartialFailureForbidden(AtomicityViolation):
    """A batch commit failed and was rolled back as a whole."""

    code = "PARTIAL_FAILURE_FORBIDDEN"


class NotFound(LedgerError):
    """A referenced partition, item or classification does not exist."""

    code = "NOT_FOUND"

    def __init__(self, entity: str, entity_id: str) -> None:
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


__all__ = [
    "FieldError",
    "LedgerError",
    "ValidationError",
    "ClassificationInUse",
    "AtomicityViolation",
    "PartialFailureForbidden",
    "NotFound",
]
