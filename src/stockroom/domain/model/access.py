"""Caller identity and vendor scope."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from .enums import Role

if TYPE_CHECKING:
    from collections.abc import Iterable

ALL_VENDORS_SENTINEL: Final[str] = "ALL"


@dataclass(frozen=True, slots=True)
class AllVendors:
    """Unrestricted scope: every vendor partition is allowed."""


@dataclass(frozen=True, slots=True)
class RestrictedVendors:
    """Scope limited to an explicit set of vendor numbers."""

    vendor_numbers: frozenset[str]

    def __post_init__(self) -> None:
        if isinstance(self.vendor_numbers, str):
            raise TypeError("vendor_numbers must be a collection of strings, not a string")
        object.__setattr__(self, "vendor_numbers", frozenset(self.vendor_numbers))


type VendorScope = AllVendors | RestrictedVendors


def scope_allows(scope: VendorScope, vendor_number: str) -> bool:
    match scope:
        case AllVendors():
            return True
        case RestrictedVendors(vendor_numbers=vendor_numbers):
            return vendor_number in vendor_numbers


def scope_from_values(values: Iterable[str]) -> VendorScope:
    """Translate a legacy list of allowed vendor numbers (``"ALL"`` sentinel) into a scope."""

    cleaned = [value.strip() for value in values]
    if ALL_VENDORS_SENTINEL in cleaned:
        return AllVendors()
    return RestrictedVendors(frozenset(value for value in cleaned if value))


@dataclass(frozen=True, slots=True, kw_only=True)
class CallerIdentity:
    role: Role
    scope: VendorScope
    name: str | None = None

    @property
    def is_restricted(self) -> bool:
        return self.role is Role.VENDOR
