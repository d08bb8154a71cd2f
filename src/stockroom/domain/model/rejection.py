"""Rejection values shared by validation, reconciliation and the mutation applier."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import RejectionCode


@dataclass(frozen=True, slots=True, kw_only=True)
class Rejection:
    """Why a candidate or mutation was refused.

    ``field`` names the offending attribute for ``INVALID_FIELD``; ``detail`` holds the
    offending value (SKU, vendor number, id) when one is useful for rendering.
    """

    code: RejectionCode
    field: str | None = None
    detail: str | None = None

    @property
    def message(self) -> str:
        match self.code:
            case RejectionCode.DUPLICATE_SKU:
                return f"SKU {self.detail!r} already exists"
            case RejectionCode.DUPLICATE_IN_BATCH:
                return f"SKU {self.detail!r} appears more than once in the import"
            case RejectionCode.INVALID_FIELD:
                return f"Invalid value for {self.field}"
            case RejectionCode.UNAUTHORIZED_VENDOR:
                return "Invalid vendor number for your account"
            case RejectionCode.NOT_FOUND:
                return f"Product {self.detail!r} not found"

    def __str__(self) -> str:
        return self.message


def duplicate_sku(sku: str) -> Rejection:
    return Rejection(code=RejectionCode.DUPLICATE_SKU, detail=sku)


def duplicate_in_batch(sku: str) -> Rejection:
    return Rejection(code=RejectionCode.DUPLICATE_IN_BATCH, detail=sku)


def invalid_field(name: str) -> Rejection:
    return Rejection(code=RejectionCode.INVALID_FIELD, field=name)


def unauthorized_vendor(vendor_number: str) -> Rejection:
    return Rejection(code=RejectionCode.UNAUTHORIZED_VENDOR, detail=vendor_number)


def not_found(reference: object) -> Rejection:
    return Rejection(code=RejectionCode.NOT_FOUND, detail=str(reference))
