"""Ports for persisting the catalog and its change log."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from uuid import UUID

    from stockroom.domain.model import Catalog, ProductChange


@runtime_checkable
class ProductRepository(Protocol):
    """Snapshot-oriented store for the product catalog."""

    def load_catalog(self) -> Catalog: ...

    def save_catalog(self, catalog: Catalog) -> None: ...


@runtime_checkable
class ChangeLogRepository(Protocol):
    """Append-only store for product audit records."""

    def add(self, change: ProductChange) -> None: ...

    def for_product(self, product_id: UUID) -> tuple[ProductChange, ...]: ...

    def for_sku(self, sku: str) -> tuple[ProductChange, ...]: ...
