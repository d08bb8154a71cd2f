"""Candidate records proposed for insertion or update."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING

from .product import COUNT_FIELDS, DEFAULT_UNIT_OF_MEASUREMENT, MEASURE_FIELDS, Product

if TYPE_CHECKING:
    from datetime import datetime
    from decimal import Decimal
    from uuid import UUID


@dataclass(frozen=True, slots=True, kw_only=True)
class ProductCandidate:
    """A not-yet-validated record. ``None`` means the field was not supplied."""

    sku: str
    name: str | None = None
    quantity: int | None = None
    min_stock_level: int | None = None
    location: str | None = None
    vendor_number: str | None = None
    weight: Decimal | None = None
    length: Decimal | None = None
    width: Decimal | None = None
    height: Decimal | None = None
    unit_cbm: Decimal | None = None
    unit_of_measurement: str | None = None

    @classmethod
    def from_product(cls, product: Product) -> ProductCandidate:
        return cls(
            sku=product.sku,
            name=product.name,
            quantity=product.quantity,
            min_stock_level=product.min_stock_level,
            location=product.location,
            vendor_number=product.vendor_number,
            weight=product.weight,
            length=product.length,
            width=product.width,
            height=product.height,
            unit_cbm=product.unit_cbm,
            unit_of_measurement=product.unit_of_measurement,
        )

    def supplied(self) -> dict[str, object]:
        """Fields that carry a value (``sku`` included)."""

        return {
            item.name: getattr(self, item.name)
            for item in fields(self)
            if getattr(self, item.name) is not None
        }

    def overlay(self, other: ProductCandidate) -> ProductCandidate:
        """Return a copy where every supplied field of ``other`` overrides this one."""

        return replace(self, **other.supplied())

    def to_product(
        self,
        *,
        id: UUID | None = None,  # noqa: A002
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> Product:
        missing = [
            name
            for name in (*COUNT_FIELDS, *MEASURE_FIELDS, "vendor_number")
            if getattr(self, name) is None
        ]
        if missing:
            missing_list = ", ".join(missing)
            raise ValueError(f"Candidate {self.sku!r} is missing required fields: {missing_list}")
        return Product(  # pyright: ignore[reportArgumentType]
            id=id,
            sku=self.sku,
            name=self.name or "",
            quantity=self.quantity,
            min_stock_level=self.min_stock_level,
            location=self.location or "",
            vendor_number=self.vendor_number,
            weight=self.weight,
            length=self.length,
            width=self.width,
            height=self.height,
            unit_cbm=self.unit_cbm,
            unit_of_measurement=self.unit_of_measurement or DEFAULT_UNIT_OF_MEASUREMENT,
            created_at=created_at,
            updated_at=updated_at,
        )
