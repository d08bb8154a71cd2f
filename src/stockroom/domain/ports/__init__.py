"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import ChangeLogRepository, ProductRepository
from .unit_of_work import (
    CatalogRepositories,
    CatalogUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "CatalogRepositories",
    "CatalogUnitOfWork",
    "ChangeLogRepository",
    "ProductRepository",
    "RepositoryCollection",
    "UnitOfWork",
]
