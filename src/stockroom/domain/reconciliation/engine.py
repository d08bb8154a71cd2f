"""Bulk reconciliation of a candidate batch against the existing catalog.

Flow per batch:
1) find in-batch duplicates (first occurrence wins)
2) index the catalog by exact SKU
3) classify each candidate as insert, update or conflict for the import mode
4) emit accepted records with ``cbm`` recomputed

The engine is decision-only. Accepted records are committed afterwards by
``stockroom.domain.mutations.apply_report``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from stockroom.domain.model import Classification, ImportMode, ProductCandidate, scope_allows
from stockroom.domain.model import rejection as rejections
from stockroom.domain.validation import ValidationResult, validate

from .contracts import ReconciliationEntry, ReconciliationReport
from .deduplicate import DeduplicationResult, first_occurrences

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from uuid import UUID

    from stockroom.domain.model import Product, Rejection, VendorScope

log = logging.getLogger(__name__)


class DeduplicateBatch(Protocol):
    def __call__(self, batch: Sequence[ProductCandidate]) -> DeduplicationResult: ...


class ValidateCandidate(Protocol):
    def __call__(
        self,
        candidate: ProductCandidate,
        catalog: Iterable[Product],
        *,
        scope: VendorScope,
        excluded_id: UUID | None = None,
    ) -> ValidationResult: ...


@dataclass(slots=True)
class ReconciliationEngine:
    """Classify candidate batches; stages are swappable for tests and variants."""

    deduplicate: DeduplicateBatch = first_occurrences
    validate_candidate: ValidateCandidate = validate

    def reconcile(
        self,
        catalog: Sequence[Product],
        batch: Sequence[ProductCandidate],
        *,
        mode: ImportMode,
        scope: VendorScope,
    ) -> ReconciliationReport:
        duplicates = self.deduplicate(batch)
        existing_by_sku = {product.sku: product for product in catalog}

        entries: list[ReconciliationEntry] = []
        for index, candidate in enumerate(batch):
            if duplicates.is_duplicate(index):
                entry = _conflict(index, candidate, rejections.duplicate_in_batch(candidate.sku))
            elif mode is ImportMode.INSERT_ONLY:
                entry = self._classify_insert(
                    index,
                    candidate,
                    catalog=catalog,
                    existing=existing_by_sku.get(candidate.sku),
                    scope=scope,
                )
            else:
                entry = self._classify_update(
                    index,
                    candidate,
                    catalog=catalog,
                    existing=existing_by_sku.get(candidate.sku),
                    scope=scope,
                )
            if entry.rejection is not None:
                log.debug(
                    "Rejected import row %s (sku=%r): %s",
                    index,
                    candidate.sku,
                    entry.rejection.message,
                )
            entries.append(entry)

        report = ReconciliationReport(mode=mode, entries=tuple(entries))
        log.info(
            "Reconciled %s candidates (%s): accepted=%s, conflicts=%s",
            len(batch),
            mode.value,
            len(report.accepted),
            len(report.conflicts),
        )
        return report

    def _classify_insert(
        self,
        index: int,
        candidate: ProductCandidate,
        *,
        catalog: Sequence[Product],
        existing: Product | None,
        scope: VendorScope,
    ) -> ReconciliationEntry:
        if existing is not None:
            return _conflict(index, candidate, rejections.duplicate_sku(candidate.sku))
        result = self.validate_candidate(candidate, catalog, scope=scope)
        if result.reason is not None:
            return _conflict(index, candidate, result.reason)
        return ReconciliationEntry(
            index=index,
            sku=candidate.sku,
            classification=Classification.INSERT,
            record=candidate.to_product(),
        )

    def _classify_update(
        self,
        index: int,
        candidate: ProductCandidate,
        *,
        catalog: Sequence[Product],
        existing: Product | None,
        scope: VendorScope,
    ) -> ReconciliationEntry:
        if existing is None:
            return _conflict(index, candidate, rejections.not_found(candidate.sku))
        if not scope_allows(scope, existing.vendor_number):
            return _conflict(
                index, candidate, rejections.unauthorized_vendor(existing.vendor_number)
            )
        merged = ProductCandidate.from_product(existing).overlay(candidate)
        result = self.validate_candidate(merged, catalog, scope=scope, excluded_id=existing.id)
        if result.reason is not None:
            return _conflict(index, candidate, result.reason)
        return ReconciliationEntry(
            index=index,
            sku=candidate.sku,
            classification=Classification.UPDATE,
            record=merged.to_product(
                id=existing.id,
                created_at=existing.created_at,
                updated_at=existing.updated_at,
            ),
        )


def _conflict(
    index: int,
    candidate: ProductCandidate,
    rejection: Rejection,
) -> ReconciliationEntry:
    return ReconciliationEntry(
        index=index,
        sku=candidate.sku,
        classification=Classification.CONFLICT,
        rejection=rejection,
    )


_DEFAULT_ENGINE = ReconciliationEngine()


def reconcile(
    catalog: Sequence[Product],
    batch: Sequence[ProductCandidate],
    *,
    mode: ImportMode,
    scope: VendorScope,
) -> ReconciliationReport:
    """Classify every candidate of ``batch`` against ``catalog`` for ``mode``."""

    return _DEFAULT_ENGINE.reconcile(catalog, batch, mode=mode, scope=scope)
