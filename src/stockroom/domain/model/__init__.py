"""Public domain model surface."""

from __future__ import annotations

from stockroom.domain.model.access import (
    ALL_VENDORS_SENTINEL,
    AllVendors,
    CallerIdentity,
    RestrictedVendors,
    VendorScope,
    scope_allows,
    scope_from_values,
)
from stockroom.domain.model.candidate import ProductCandidate
from stockroom.domain.model.enums import (
    ChangeAction,
    Classification,
    ImportMode,
    RejectionCode,
    Role,
)
from stockroom.domain.model.history import FieldChange, ProductChange
from stockroom.domain.model.product import (
    COUNT_FIELDS,
    DEFAULT_UNIT_OF_MEASUREMENT,
    EDITABLE_FIELDS,
    MEASURE_FIELDS,
    Catalog,
    Product,
    new_id,
)
from stockroom.domain.model.rejection import Rejection

__all__ = [  # noqa: RUF022
    # product
    "Catalog",
    "Product",
    "ProductCandidate",
    "new_id",
    "COUNT_FIELDS",
    "DEFAULT_UNIT_OF_MEASUREMENT",
    "EDITABLE_FIELDS",
    "MEASURE_FIELDS",
    # access
    "ALL_VENDORS_SENTINEL",
    "AllVendors",
    "CallerIdentity",
    "RestrictedVendors",
    "VendorScope",
    "scope_allows",
    "scope_from_values",
    # history
    "FieldChange",
    "ProductChange",
    # rejections
    "Rejection",
    # enums
    "ChangeAction",
    "Classification",
    "ImportMode",
    "RejectionCode",
    "Role",
]
