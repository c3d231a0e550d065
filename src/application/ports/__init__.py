"""Application ports package."""

from .category_repository import CategoryRepositoryPort
from .classification_repository import ClassificationRepositoryPort
from .database import DatabaseEnginePort
from .item_repository import ItemRepositoryPort
from .ledger_store import LedgerScope, LedgerStorePort
from .movement_repository import MovementRepositoryPort

__all__ = [
    "CategoryRepositoryPort",
    "ClassificationRepositoryPort",
    "DatabaseEnginePort",
    "ItemRepositoryPort",
    "LedgerScope",
    "LedgerStorePort",
    "MovementRepositoryPort",
]
