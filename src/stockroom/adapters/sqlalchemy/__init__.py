"""SQLAlchemy adapter package for Stockroom."""

from __future__ import annotations

from .mappings import (
    DecimalText,
    UTCDateTime,
    create_all_tables,
    metadata,
    product_change_table,
    product_table,
)
from .repositories import SqlAlchemyChangeLogRepository, SqlAlchemyProductRepository
from .unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "DecimalText",
    "SqlAlchemyCatalogUnitOfWork",
    "SqlAlchemyChangeLogRepository",
    "SqlAlchemyProductRepository",
    "StartupError",
    "UTCDateTime",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "metadata",
    "product_change_table",
    "product_table",
    "shutdown",
    "startup",
]
