"""The product record and the catalog snapshot type."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, Final
from uuid import UUID, uuid4

from stockroom.domain.metrics import derive_cbm

if TYPE_CHECKING:
    from datetime import datetime

DEFAULT_UNIT_OF_MEASUREMENT: Final[str] = "units"

# Caller-settable fields, in display order. ``id``, ``cbm`` and timestamps are excluded.
EDITABLE_FIELDS: Final[tuple[str, ...]] = (
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
)
COUNT_FIELDS: Final[tuple[str, ...]] = ("quantity", "min_stock_level")
MEASURE_FIELDS: Final[tuple[str, ...]] = ("weight", "length", "width", "height", "unit_cbm")


def new_id() -> UUID:
    return uuid4()


@dataclass(frozen=True, slots=True, kw_only=True)
class Product:
    """One catalog record.

    ``id`` stays ``None`` until the mutation applier creates the record; ``cbm`` is
    always derived from ``unit_cbm`` and ``quantity`` and cannot be passed in.
    """

    sku: str
    vendor_number: str
    name: str = ""
    quantity: int = 0
    min_stock_level: int = 0
    location: str = ""
    weight: Decimal = Decimal(0)
    length: Decimal = Decimal(0)
    width: Decimal = Decimal(0)
    height: Decimal = Decimal(0)
    unit_cbm: Decimal = Decimal(0)
    unit_of_measurement: str = DEFAULT_UNIT_OF_MEASUREMENT

    id: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    cbm: Decimal = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "cbm", derive_cbm(self.unit_cbm, self.quantity))

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.min_stock_level


type Catalog = tuple[Product, ...]
