"""Change tracking between catalog snapshots."""

from __future__ import annotations

from typing import TYPE_CHECKING

from stockroom.domain.model import EDITABLE_FIELDS, ChangeAction, FieldChange, ProductChange
from stockroom.domain.mutations import utcnow

if TYPE_CHECKING:
    from stockroom.domain.model import Catalog, Product
    from stockroom.domain.mutations import Clock

_TRACKED_FIELDS = (*EDITABLE_FIELDS, "cbm")


def diff_products(before: Product | None, after: Product | None) -> tuple[FieldChange, ...]:
    """Field-level differences; a missing side renders as ``None``."""

    changes: list[FieldChange] = []
    for name in _TRACKED_FIELDS:
        old = _render(before, name)
        new = _render(after, name)
        if old != new:
            changes.append(FieldChange(name, old, new))
    return tuple(changes)


def record_changes(
    before: Catalog,
    after: Catalog,
    *,
    changed_by: str | None = None,
    clock: Clock = utcnow,
) -> tuple[ProductChange, ...]:
    """Audit records turning ``before`` into ``after``, matched by id.

    Creations and updates follow ``after`` order; deletions come last.
    """

    now = clock()
    before_by_id = {product.id: product for product in before if product.id is not None}
    after_ids = {product.id for product in after}
    records: list[ProductChange] = []

    for product in after:
        if product.id is None:
            continue
        previous = before_by_id.get(product.id)
        changes = diff_products(previous, product)
        if previous is not None and not changes:
            continue
        records.append(
            ProductChange(
                product_id=product.id,
                sku=product.sku,
                action=ChangeAction.CREATED if previous is None else ChangeAction.UPDATED,
                changes=changes,
                changed_at=now,
                changed_by=changed_by,
            )
        )

    for product_id, product in before_by_id.items():
        if product_id in after_ids:
            continue
        records.append(
            ProductChange(
                product_id=product_id,
                sku=product.sku,
                action=ChangeAction.DELETED,
                changes=diff_products(product, None),
                changed_at=now,
                changed_by=changed_by,
            )
        )
    return tuple(records)


def _render(product: Product | None, name: str) -> str | None:
    if product is None:
        return None
    return str(getattr(product, name))
