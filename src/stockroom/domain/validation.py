"""Catalog-wide and per-field checks for candidate records.

SKUs compare case-sensitively and exactly: ``"A1"`` and ``"a1"`` are different
stock codes, and surrounding whitespace is significant. A blank SKU is invalid.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from stockroom.domain.model import COUNT_FIELDS, MEASURE_FIELDS, scope_allows
from stockroom.domain.model import rejection as rejections

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from stockroom.domain.model import Product, ProductCandidate, Rejection, VendorScope


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """All rejections for one candidate, in check order."""

    rejections: tuple[Rejection, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.rejections

    @property
    def reason(self) -> Rejection | None:
        """First failing reason, or ``None`` when the candidate is valid."""
        return self.rejections[0] if self.rejections else None

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(item.field for item in self.rejections if item.field is not None)


def validate(
    candidate: ProductCandidate,
    catalog: Iterable[Product],
    *,
    scope: VendorScope,
    excluded_id: UUID | None = None,
) -> ValidationResult:
    """Check ``candidate`` against ``catalog`` without mutating either.

    ``excluded_id`` names the record being edited so it does not collide with itself.
    """

    found: list[Rejection] = []
    found.extend(_check_sku(candidate, catalog, excluded_id=excluded_id))
    found.extend(_check_counts(candidate))
    found.extend(_check_measures(candidate))
    found.extend(_check_vendor(candidate, scope=scope))
    return ValidationResult(tuple(found))


def sku_taken(sku: str, catalog: Iterable[Product], *, excluded_id: UUID | None = None) -> bool:
    return any(
        product.sku == sku and (excluded_id is None or product.id != excluded_id)
        for product in catalog
    )


def _check_sku(
    candidate: ProductCandidate,
    catalog: Iterable[Product],
    *,
    excluded_id: UUID | None,
) -> list[Rejection]:
    if not isinstance(candidate.sku, str) or not candidate.sku.strip():
        return [rejections.invalid_field("sku")]
    if sku_taken(candidate.sku, catalog, excluded_id=excluded_id):
        return [rejections.duplicate_sku(candidate.sku)]
    return []


def _check_counts(candidate: ProductCandidate) -> list[Rejection]:
    found: list[Rejection] = []
    for name in COUNT_FIELDS:
        value = getattr(candidate, name)
        # bool is an int subclass but never a valid count
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            found.append(rejections.invalid_field(name))
    return found


def _check_measures(candidate: ProductCandidate) -> list[Rejection]:
    found: list[Rejection] = []
    for name in MEASURE_FIELDS:
        value = getattr(candidate, name)
        if not isinstance(value, Decimal) or not value.is_finite() or value < 0:
            found.append(rejections.invalid_field(name))
    return found


def _check_vendor(candidate: ProductCandidate, *, scope: VendorScope) -> list[Rejection]:
    vendor_number = candidate.vendor_number
    if vendor_number is None or not vendor_number.strip():
        return [rejections.invalid_field("vendor_number")]
    if not scope_allows(scope, vendor_number):
        return [rejections.unauthorized_vendor(vendor_number)]
    return []
