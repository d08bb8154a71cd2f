from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import uuid4

import pytest

from stockroom.adapters.sqlalchemy import (
    SqlAlchemyChangeLogRepository,
    SqlAlchemyProductRepository,
)
from stockroom.domain.model import ChangeAction, FieldChange, ProductChange
from tests.helpers.products import make_candidate, make_product

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


def test_save_and_load_round_trips_catalog_order(sqlite_session: Session) -> None:
    repo = SqlAlchemyProductRepository(sqlite_session)
    catalog = (
        make_product("B1", unit_cbm=Decimal("0.123456789")),
        make_product("A1"),
        make_product("C1", quantity=0),
    )

    repo.save_catalog(catalog)
    sqlite_session.commit()
    loaded = repo.load_catalog()

    assert loaded == catalog
    assert loaded[0].unit_cbm == Decimal("0.123456789")
    assert loaded[0].created_at is not None
    assert loaded[0].created_at.tzinfo is not None


def test_save_catalog_applies_updates_and_deletes(sqlite_session: Session) -> None:
    repo = SqlAlchemyProductRepository(sqlite_session)
    first, second, third = make_product("A1"), make_product("B1"), make_product("C1")
    repo.save_catalog((first, second, third))
    sqlite_session.commit()

    edited = replace(second, quantity=42)
    added = make_product("D1")
    repo.save_catalog((first, edited, added))
    sqlite_session.commit()

    loaded = repo.load_catalog()
    assert [product.sku for product in loaded] == ["A1", "B1", "D1"]
    assert loaded[1].quantity == 42
    assert loaded[1].cbm == edited.cbm


def test_save_catalog_rejects_unsaved_products(sqlite_session: Session) -> None:
    repo = SqlAlchemyProductRepository(sqlite_session)

    with pytest.raises(ValueError, match="has no id"):
        repo.save_catalog((make_candidate("A1").to_product(),))


def test_change_log_round_trip(sqlite_session: Session) -> None:
    repo = SqlAlchemyChangeLogRepository(sqlite_session)
    product_id = uuid4()
    earlier = datetime(2025, 1, 1, tzinfo=UTC)
    created = ProductChange(
        product_id=product_id,
        sku="A1",
        action=ChangeAction.CREATED,
        changes=(FieldChange("sku", None, "A1"),),
        changed_at=earlier,
        changed_by="alice",
    )
    updated = ProductChange(
        product_id=product_id,
        sku="A1",
        action=ChangeAction.UPDATED,
        changes=(FieldChange("quantity", "1", "2"),),
        changed_at=earlier + timedelta(days=1),
    )
    other = ProductChange(product_id=uuid4(), sku="B1", action=ChangeAction.DELETED)

    repo.add(updated)
    repo.add(created)
    repo.add(other)
    sqlite_session.commit()

    assert repo.for_sku("A1") == (created, updated)
    assert repo.for_product(product_id) == (created, updated)
    assert repo.for_sku("missing") == ()
