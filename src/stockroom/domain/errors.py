"""Typed failures raised by single-record catalog operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from stockroom.domain.model import rejection as rejections

if TYPE_CHECKING:
    from uuid import UUID

    from stockroom.domain.model import Rejection, Role


class CatalogError(RuntimeError):
    """Base class for catalog operation failures."""


class RejectedError(CatalogError):
    """A single-record operation was refused; ``rejection`` says why."""

    def __init__(self, rejection: Rejection) -> None:
        self.rejection = rejection
        super().__init__(rejection.message)


class ValidationFailedError(RejectedError):
    """Raised when a candidate fails validation on the single-record path."""

    def __init__(self, rejection: Rejection, *, sku: str | None = None) -> None:
        self.sku = sku
        super().__init__(rejection)


class ProductNotFoundError(RejectedError):
    """Raised when an update or delete references an id absent from the catalog."""

    def __init__(self, product_id: UUID | None) -> None:
        self.product_id = product_id
        super().__init__(rejections.not_found(product_id))


class ReadOnlyAccessError(CatalogError):
    """Raised when a read-only role attempts a mutation."""

    def __init__(self, role: Role) -> None:
        self.role = role
        super().__init__(f"Role {role.value!r} may not modify the catalog")
