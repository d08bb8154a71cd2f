"""Apply approved creates, updates and deletes to a catalog snapshot.

Every function takes a catalog tuple and returns a new one; the input is never
modified. Lifecycle stamps (``id``, ``created_at``, ``updated_at``) are set here
and nowhere else.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Protocol

from stockroom.domain.errors import ProductNotFoundError
from stockroom.domain.model import Classification, new_id

if TYPE_CHECKING:
    from uuid import UUID

    from stockroom.domain.model import Catalog, Product
    from stockroom.domain.reconciliation import ReconciliationReport

log = logging.getLogger(__name__)

type IdFactory = Callable[[], UUID]


class Clock(Protocol):
    def __call__(self) -> datetime: ...


def utcnow() -> datetime:
    return datetime.now(UTC)


def apply_create(
    catalog: Catalog,
    record: Product,
    *,
    clock: Clock = utcnow,
    id_factory: IdFactory = new_id,
) -> Catalog:
    """Append ``record`` under a freshly generated id."""

    taken = {product.id for product in catalog}
    product_id = id_factory()
    while product_id in taken:
        product_id = id_factory()
    now = clock()
    created = replace(record, id=product_id, created_at=now, updated_at=now)
    return (*catalog, created)


def apply_update(catalog: Catalog, record: Product, *, clock: Clock = utcnow) -> Catalog:
    """Replace the record sharing ``record.id`` in place.

    ``sku`` and ``created_at`` are kept from the stored record.
    """

    position = _position_of(catalog, record.id)
    existing = catalog[position]
    updated = replace(
        record,
        id=existing.id,
        sku=existing.sku,
        created_at=existing.created_at,
        updated_at=clock(),
    )
    return (*catalog[:position], updated, *catalog[position + 1 :])


def apply_delete(catalog: Catalog, product_id: UUID) -> Catalog:
    position = _position_of(catalog, product_id)
    return (*catalog[:position], *catalog[position + 1 :])


def apply_report(
    catalog: Catalog,
    report: ReconciliationReport,
    *,
    clock: Clock = utcnow,
    id_factory: IdFactory = new_id,
) -> Catalog:
    """Commit every accepted entry of ``report`` in input order, stamped with one time."""

    now = clock()

    def batch_clock() -> datetime:
        return now

    result = catalog
    for entry in report.accepted:
        if entry.record is None:
            continue
        if entry.classification is Classification.INSERT:
            result = apply_create(result, entry.record, clock=batch_clock, id_factory=id_factory)
        else:
            result = apply_update(result, entry.record, clock=batch_clock)
    log.debug(
        "Applied %s accepted import rows; catalog size %s -> %s",
        len(report.accepted),
        len(catalog),
        len(result),
    )
    return result


def find_product(catalog: Catalog, product_id: UUID) -> Product:
    return catalog[_position_of(catalog, product_id)]


def _position_of(catalog: Catalog, product_id: UUID | None) -> int:
    if product_id is not None:
        for position, product in enumerate(catalog):
            if product.id == product_id:
                return position
    raise ProductNotFoundError(product_id)
