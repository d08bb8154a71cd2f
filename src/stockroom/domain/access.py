"""Visibility and mutation rights per caller identity."""

from __future__ import annotations

from typing import TYPE_CHECKING

from stockroom.domain.errors import ReadOnlyAccessError
from stockroom.domain.model import RestrictedVendors, Role

if TYPE_CHECKING:
    from collections.abc import Iterable

    from stockroom.domain.model import Catalog, CallerIdentity, Product, VendorScope

_SEARCHABLE_FIELDS = ("sku", "name", "location", "vendor_number")


def visible_products(catalog: Iterable[Product], *, role: Role, scope: VendorScope) -> Catalog:
    """Return the records ``role`` may see, in catalog order.

    Only the restricted role with a restricted scope is filtered; every other caller
    sees the full catalog.
    """

    if role is Role.VENDOR and isinstance(scope, RestrictedVendors):
        allowed = scope.vendor_numbers
        return tuple(product for product in catalog if product.vendor_number in allowed)
    return tuple(catalog)


def visible_to(caller: CallerIdentity, catalog: Iterable[Product]) -> Catalog:
    return visible_products(catalog, role=caller.role, scope=caller.scope)


def can_mutate(role: Role) -> bool:
    return role is not Role.VENDOR


def ensure_can_mutate(caller: CallerIdentity) -> None:
    if not can_mutate(caller.role):
        raise ReadOnlyAccessError(caller.role)


def search_products(products: Iterable[Product], term: str | None) -> Catalog:
    """Case-insensitive substring search over SKU, name, location and vendor number."""

    needle = (term or "").strip().lower()
    if not needle:
        return tuple(products)
    return tuple(product for product in products if needle in _search_text(product))


def _search_text(product: Product) -> str:
    return " ".join(str(getattr(product, name)) for name in _SEARCHABLE_FIELDS).lower()
