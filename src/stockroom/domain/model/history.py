"""Audit records for catalog mutations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

if TYPE_CHECKING:
    from .enums import ChangeAction


@dataclass(frozen=True, slots=True)
class FieldChange:
    """One field transition rendered as text (``None`` for absent values)."""

    field: str
    old: str | None
    new: str | None


@dataclass(frozen=True, slots=True, kw_only=True)
class ProductChange:
    """Audit record for one applied create/update/delete."""

    product_id: UUID
    sku: str
    action: ChangeAction
    changes: tuple[FieldChange, ...] = ()
    changed_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
    changed_by: str | None = None
    id: UUID = field(default_factory=uuid4)
