"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class Role(StrEnum):
    """Caller roles. Only ``VENDOR`` is restricted to read-only, vendor-scoped access."""

    ADMIN = "admin"
    MANAGER = "manager"
    STAFF = "staff"
    VENDOR = "vendor"


class ImportMode(StrEnum):
    """The two supported bulk-import flows."""

    INSERT_ONLY = "insert_only"
    UPDATE_ONLY = "update_only"


class Classification(StrEnum):
    """Per-candidate outcome of bulk reconciliation."""

    INSERT = "insert"
    UPDATE = "update"
    CONFLICT = "conflict"


class RejectionCode(StrEnum):
    DUPLICATE_SKU = "duplicate_sku"
    DUPLICATE_IN_BATCH = "duplicate_in_batch"
    INVALID_FIELD = "invalid_field"
    UNAUTHORIZED_VENDOR = "unauthorized_vendor"
    NOT_FOUND = "not_found"


class ChangeAction(StrEnum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
