"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import delete, select, update

from stockroom.adapters.sqlalchemy.mappings import product_change_table, product_table
from stockroom.domain.model import Product, ProductChange

if TYPE_CHECKING:
    import uuid
    from collections.abc import Mapping

    from sqlalchemy import Select
    from sqlalchemy.orm import Session

    from stockroom.domain.model import Catalog

log = logging.getLogger(__name__)

_PRODUCT_COLUMNS = (
    "sku",
    "name",
    "quantity",
    "min_stock_level",
    "location",
    "vendor_number",
    "weight",
    "length",
    "width",
    "height",
    "unit_cbm",
    "unit_of_measurement",
    "created_at",
    "updated_at",
)


class SqlAlchemyProductRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def load_catalog(self) -> Catalog:
        stmt = select(product_table).order_by(product_table.c.position)
        rows = self.session.execute(stmt).mappings().all()
        return tuple(self._to_product(row) for row in rows)

    def save_catalog(self, catalog: Catalog) -> None:
        """Synchronise stored rows with ``catalog``: delete, then update, then insert."""

        stored_ids = set(self.session.execute(select(product_table.c.id)).scalars().all())
        wanted_ids: set[uuid.UUID] = set()
        for product in catalog:
            if product.id is None:
                raise ValueError(f"Product {product.sku!r} has no id; create it before saving")
            wanted_ids.add(product.id)

        removed = stored_ids - wanted_ids
        if removed:
            self.session.execute(
                delete(product_table).where(product_table.c.id.in_(list(removed)))
            )

        for position, product in enumerate(catalog):
            if product.id in stored_ids:
                self.session.execute(
                    update(product_table)
                    .where(product_table.c.id == product.id)
                    .values(self._to_row(product, position))
                )
        for position, product in enumerate(catalog):
            if product.id not in stored_ids:
                self.session.execute(
                    product_table.insert().values(id=product.id, **self._to_row(product, position))
                )
        log.debug(
            "Saved catalog: %s rows, %s removed, %s inserted",
            len(catalog),
            len(removed),
            len(wanted_ids - stored_ids),
        )

    @staticmethod
    def _to_row(product: Product, position: int) -> dict[str, object]:
        row: dict[str, object] = {name: getattr(product, name) for name in _PRODUCT_COLUMNS}
        row["position"] = position
        row["cbm"] = product.cbm
        return row

    @staticmethod
    def _to_product(row: Mapping[str, Any]) -> Product:
        values = {name: row[name] for name in _PRODUCT_COLUMNS}
        return Product(id=row["id"], **values)


class SqlAlchemyChangeLogRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, change: ProductChange) -> None:
        self.session.execute(
            product_change_table.insert().values(
                id=change.id,
                product_id=change.product_id,
                sku=change.sku,
                action=change.action,
                changes=change.changes,
                changed_at=change.changed_at,
                changed_by=change.changed_by,
            )
        )

    def for_product(self, product_id: uuid.UUID) -> tuple[ProductChange, ...]:
        return self._fetch(
            select(product_change_table).where(product_change_table.c.product_id == product_id)
        )

    def for_sku(self, sku: str) -> tuple[ProductChange, ...]:
        return self._fetch(select(product_change_table).where(product_change_table.c.sku == sku))

    def _fetch(self, stmt: Select[Any]) -> tuple[ProductChange, ...]:
        ordered = stmt.order_by(product_change_table.c.changed_at)
        rows = self.session.execute(ordered).mappings().all()
        return tuple(
            ProductChange(
                id=row["id"],
                product_id=row["product_id"],
                sku=row["sku"],
                action=row["action"],
                changes=cast(tuple[Any, ...], row["changes"]),
                changed_at=row["changed_at"],
                changed_by=row["changed_by"],
            )
            for row in rows
        )


if TYPE_CHECKING:
    from stockroom.domain.ports.persistence import ChangeLogRepository, ProductRepository

    _session_stub = cast("Session", object())
    _product_repo: ProductRepository = SqlAlchemyProductRepository(_session_stub)
    _change_repo: ChangeLogRepository = SqlAlchemyChangeLogRepository(_session_stub)
