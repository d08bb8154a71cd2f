from __future__ import annotations

import pytest

from stockroom.domain.errors import ProductNotFoundError, RejectedError, ValidationFailedError
from stockroom.domain.model import (
    AllVendors,
    RejectionCode,
    RestrictedVendors,
    scope_allows,
    scope_from_values,
)
from stockroom.domain.model import rejection as rejections


@pytest.mark.parametrize(
    ("rejection", "message"),
    [
        (rejections.duplicate_sku("A1"), "SKU 'A1' already exists"),
        (rejections.duplicate_in_batch("A1"), "SKU 'A1' appears more than once in the import"),
        (rejections.invalid_field("quantity"), "Invalid value for quantity"),
        (rejections.unauthorized_vendor("V2"), "Invalid vendor number for your account"),
        (rejections.not_found("A1"), "Product 'A1' not found"),
    ],
)
def test_rejection_messages(rejection: rejections.Rejection, message: str) -> None:
    assert rejection.message == message
    assert str(rejection) == message


def test_errors_carry_rejection_values() -> None:
    error = ValidationFailedError(rejections.invalid_field("weight"), sku="A1")

    assert isinstance(error, RejectedError)
    assert error.rejection.code is RejectionCode.INVALID_FIELD
    assert error.sku == "A1"
    assert str(error) == "Invalid value for weight"


def test_not_found_error_message() -> None:
    error = ProductNotFoundError(None)

    assert error.rejection.code is RejectionCode.NOT_FOUND


def test_scope_from_values_handles_all_sentinel() -> None:
    assert scope_from_values(["V1", " ALL "]) == AllVendors()
    assert scope_from_values([" V1", "V2 ", ""]) == RestrictedVendors(frozenset({"V1", "V2"}))


def test_scope_allows() -> None:
    restricted = RestrictedVendors(frozenset({"V1"}))

    assert scope_allows(AllVendors(), "anything")
    assert scope_allows(restricted, "V1")
    assert not scope_allows(restricted, "v1")


def test_restricted_vendors_rejects_plain_string() -> None:
    with pytest.raises(TypeError):
        RestrictedVendors("V1")  # pyright: ignore[reportArgumentType]
