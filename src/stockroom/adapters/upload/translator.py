"""Translate uploaded rows into domain candidates."""

from __future__ import annotations

from typing import TYPE_CHECKING

from stockroom.domain.model import ProductCandidate

if TYPE_CHECKING:
    from .schema import ProductRow


def row_to_candidate(row: ProductRow) -> ProductCandidate:
    return ProductCandidate(
        sku=row.sku or "",
        name=row.name,
        quantity=row.quantity,
        min_stock_level=row.min_stock_level,
        location=row.location,
        vendor_number=row.vendor_number,
        weight=row.weight,
        length=row.length,
        width=row.width,
        height=row.height,
        unit_cbm=row.unit_cbm,
        unit_of_measurement=row.unit_of_measurement,
    )
