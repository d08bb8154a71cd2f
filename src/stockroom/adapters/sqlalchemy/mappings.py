"""SQLAlchemy table metadata for the Stockroom catalog.

Products are frozen dataclasses, so they are persisted through Core tables and
translated by the repositories rather than mapped imperatively.
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import (
    Column,
    DateTime,
    Dialect,
    Enum,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
)

from stockroom.domain.model import ChangeAction, FieldChange

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


class DecimalText(TypeDecorator[Decimal]):
    """Exact decimal storage as text; SQLite has no native decimal type."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value: Decimal | None, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        return str(value)

    def process_result_value(self, value: str | None, dialect: Dialect) -> Decimal | None:
        _ = dialect
        if value is None:
            return None
        try:
            return Decimal(value)
        except InvalidOperation as exc:
            raise ValueError(f"Stored decimal is malformed: {value!r}") from exc


class FieldChangesType(TypeDecorator[tuple[FieldChange, ...]]):
    impl = Text
    cache_ok = True

    def process_bind_param(
        self, value: tuple[FieldChange, ...] | None, dialect: Dialect
    ) -> str | None:
        _ = dialect
        if value is None:
            return None
        payload = [[change.field, change.old, change.new] for change in value]
        return json.dumps(payload)

    def process_result_value(self, value: str | None, dialect: Dialect) -> tuple[FieldChange, ...]:
        _ = dialect
        if value is None:
            return ()
        loaded = json.loads(value)
        if not isinstance(loaded, list):
            return ()
        items = cast(list[Any], loaded)
        changes: list[FieldChange] = []
        for item in items:
            if isinstance(item, list) and len(item) == 3:  # noqa: PLR2004
                name, old, new = cast(list[Any], item)
                changes.append(FieldChange(str(name), old, new))
        return tuple(changes)


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

# Core tables -----------------------------------------------------------------

product_table = Table(
    "product",
    metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("position", Integer, nullable=False),
    Column("sku", String, nullable=False),
    Column("name", String, nullable=False, default=""),
    Column("quantity", Integer, nullable=False),
    Column("min_stock_level", Integer, nullable=False),
    Column("location", String, nullable=False, default=""),
    Column("vendor_number", String, nullable=False),
    Column("weight", DecimalText, nullable=False),
    Column("length", DecimalText, nullable=False),
    Column("width", DecimalText, nullable=False),
    Column("height", DecimalText, nullable=False),
    Column("unit_cbm", DecimalText, nullable=False),
    Column("cbm", DecimalText, nullable=False),
    Column("unit_of_measurement", String, nullable=False),
    Column("created_at", UTCDateTime, nullable=True),
    Column("updated_at", UTCDateTime, nullable=True),
    UniqueConstraint("sku", name="uq_product_sku"),
    Index("ix_product_vendor_number", "vendor_number"),
)

product_change_table = Table(
    "product_change",
    metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("product_id", UUIDColumnType, nullable=False),
    Column("sku", String, nullable=False),
    Column("action", Enum(ChangeAction, native_enum=False), nullable=False),
    Column("changes", FieldChangesType, nullable=False),
    Column("changed_at", UTCDateTime, nullable=False),
    Column("changed_by", String, nullable=True),
    Index("ix_product_change_product_id", "product_id"),
    Index("ix_product_change_sku", "sku"),
)


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the catalog metadata."""

    log.info("Creating all tables")
    metadata.create_all(engine)
