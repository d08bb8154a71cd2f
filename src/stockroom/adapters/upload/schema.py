"""Pydantic models describing uploaded product rows."""

from __future__ import annotations

from decimal import Decimal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class UploadBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class ProductRow(UploadBaseModel):
    """One spreadsheet row.

    Column headers may use the spreadsheet's camelCase names (``minStockLevel``) or
    snake_case. Blank cells are treated as not supplied; a blank SKU is kept so
    validation can reject that row on its own. Range checks are left to
    the validation engine so every row can still be reported individually.
    """

    sku: str | None = None
    name: str | None = None
    quantity: int | None = None
    min_stock_level: int | None = Field(
        default=None,
        validation_alias=AliasChoices("minStockLevel", "min_stock_level"),
    )
    location: str | None = None
    vendor_number: str | None = Field(
        default=None,
        validation_alias=AliasChoices("vendorNumber", "vendor_number"),
    )
    weight: Decimal | None = None
    length: Decimal | None = None
    width: Decimal | None = None
    height: Decimal | None = None
    unit_cbm: Decimal | None = Field(
        default=None,
        validation_alias=AliasChoices("unitCbm", "unit_cbm"),
    )
    unit_of_measurement: str | None = Field(
        default=None,
        validation_alias=AliasChoices("unitOfMeasurement", "unit_of_measurement"),
    )

    _normalize_blanks = field_validator("*", mode="before")(_blank_to_none)
