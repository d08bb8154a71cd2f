"""Application orchestration entry points.

Each operation loads the catalog snapshot inside one unit of work, runs the pure
core over it and, for mutations, saves the new snapshot together with its change
log before committing.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING

from stockroom.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    is_started,
    startup,
)
from stockroom.domain.access import ensure_can_mutate, search_products, visible_to
from stockroom.domain.errors import RejectedError, ValidationFailedError
from stockroom.domain.history import record_changes
from stockroom.domain.model import ProductCandidate, new_id, scope_allows
from stockroom.domain.model import rejection as rejections
from stockroom.domain.mutations import (
    apply_create,
    apply_delete,
    apply_report,
    apply_update,
    find_product,
    utcnow,
)
from stockroom.domain.ports.unit_of_work import CatalogUnitOfWork
from stockroom.domain.reconciliation import reconcile
from stockroom.domain.validation import validate

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from stockroom.domain.model import (
        CallerIdentity,
        Catalog,
        ImportMode,
        Product,
        ProductChange,
    )
    from stockroom.domain.mutations import Clock, IdFactory
    from stockroom.domain.reconciliation import ReconciliationReport

UnitOfWorkFactory = Callable[[], CatalogUnitOfWork]


log = getLogger(__name__)


def list_products(
    caller: CallerIdentity,
    *,
    search: str | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Catalog:
    """Return the products ``caller`` may see, optionally narrowed by a search term."""

    with _resolve_factory(unit_of_work_factory)() as uow:
        catalog = uow.repositories.products.load_catalog()
    return search_products(visible_to(caller, catalog), search)


def create_product(
    caller: CallerIdentity,
    candidate: ProductCandidate,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    clock: Clock = utcnow,
    id_factory: IdFactory = new_id,
) -> Product:
    ensure_can_mutate(caller)
    with _resolve_factory(unit_of_work_factory)() as uow:
        catalog = uow.repositories.products.load_catalog()
        result = validate(candidate, catalog, scope=caller.scope)
        if result.reason is not None:
            raise ValidationFailedError(result.reason, sku=candidate.sku)
        updated = apply_create(catalog, candidate.to_product(), clock=clock, id_factory=id_factory)
        _commit(uow, catalog, updated, caller=caller, clock=clock)

    created = updated[-1]
    log.info("Product added successfully: sku=%s, id=%s", created.sku, created.id)
    return created


def update_product(
    caller: CallerIdentity,
    product_id: UUID,
    candidate: ProductCandidate,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    clock: Clock = utcnow,
) -> Product:
    """Apply the supplied fields of ``candidate`` to the product with ``product_id``.

    A blank ``candidate.sku`` keeps the stored SKU; any other differing SKU is
    rejected because stock codes are immutable.
    """

    ensure_can_mutate(caller)
    with _resolve_factory(unit_of_work_factory)() as uow:
        catalog = uow.repositories.products.load_catalog()
        existing = find_product(catalog, product_id)
        if not scope_allows(caller.scope, existing.vendor_number):
            raise RejectedError(rejections.unauthorized_vendor(existing.vendor_number))
        if candidate.sku and candidate.sku != existing.sku:
            raise ValidationFailedError(rejections.invalid_field("sku"), sku=candidate.sku)
        merged = ProductCandidate.from_product(existing).overlay(
            replace(candidate, sku=existing.sku)
        )
        result = validate(merged, catalog, scope=caller.scope, excluded_id=existing.id)
        if result.reason is not None:
            raise ValidationFailedError(result.reason, sku=existing.sku)
        record = merged.to_product(id=existing.id, created_at=existing.created_at)
        updated = apply_update(catalog, record, clock=clock)
        _commit(uow, catalog, updated, caller=caller, clock=clock)

    stored = find_product(updated, product_id)
    log.info("Product updated successfully: sku=%s, id=%s", stored.sku, stored.id)
    return stored


def delete_product(
    caller: CallerIdentity,
    product_id: UUID,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    clock: Clock = utcnow,
) -> None:
    ensure_can_mutate(caller)
    with _resolve_factory(unit_of_work_factory)() as uow:
        catalog = uow.repositories.products.load_catalog()
        existing = find_product(catalog, product_id)
        if not scope_allows(caller.scope, existing.vendor_number):
            raise RejectedError(rejections.unauthorized_vendor(existing.vendor_number))
        updated = apply_delete(catalog, product_id)
        _commit(uow, catalog, updated, caller=caller, clock=clock)
    log.info("Product deleted successfully: sku=%s, id=%s", existing.sku, product_id)


def import_products(
    caller: CallerIdentity,
    candidates: Sequence[ProductCandidate],
    *,
    mode: ImportMode,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    clock: Clock = utcnow,
    id_factory: IdFactory = new_id,
) -> ReconciliationReport:
    """Reconcile ``candidates`` and commit every accepted record in one transaction.

    Conflicts never abort the import; they are returned in the report.
    """

    ensure_can_mutate(caller)
    log.info("Starting bulk import: mode=%s, candidates=%s", mode.value, len(candidates))
    with _resolve_factory(unit_of_work_factory)() as uow:
        catalog = uow.repositories.products.load_catalog()
        report = reconcile(catalog, candidates, mode=mode, scope=caller.scope)
        if report.accepted:
            updated = apply_report(catalog, report, clock=clock, id_factory=id_factory)
            _commit(uow, catalog, updated, caller=caller, clock=clock)

    log.info(report.summary())
    return report


def product_history(
    caller: CallerIdentity,
    sku: str,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> tuple[ProductChange, ...]:
    """Change log for ``sku``; restricted callers only see products currently visible to them."""

    with _resolve_factory(unit_of_work_factory)() as uow:
        if caller.is_restricted:
            visible = visible_to(caller, uow.repositories.products.load_catalog())
            if all(product.sku != sku for product in visible):
                return ()
        return uow.repositories.changes.for_sku(sku)


def _commit(
    uow: CatalogUnitOfWork,
    before: Catalog,
    after: Catalog,
    *,
    caller: CallerIdentity,
    clock: Clock,
) -> None:
    uow.repositories.products.save_catalog(after)
    for change in record_changes(before, after, changed_by=caller.name, clock=clock):
        uow.repositories.changes.add(change)
    uow.commit()


def _resolve_factory(unit_of_work_factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if unit_of_work_factory is not None:
        return unit_of_work_factory
    if not is_started():
        startup()
    return SqlAlchemyCatalogUnitOfWork
