from __future__ import annotations

from dataclasses import replace

from stockroom.domain.history import diff_products, record_changes
from stockroom.domain.model import ChangeAction, FieldChange
from tests.helpers.products import FIXED_NOW, fixed_clock, make_product


def test_diff_reports_changed_fields_including_cbm() -> None:
    before = make_product("A1", quantity=4)
    after = replace(before, quantity=6, location="Z-9")

    changes = diff_products(before, after)

    assert changes == (
        FieldChange("quantity", "4", "6"),
        FieldChange("location", "A-01", "Z-9"),
        FieldChange("cbm", "1.00", "1.50"),
    )


def test_diff_against_missing_side_renders_none() -> None:
    product = make_product("A1")

    created = diff_products(None, product)
    deleted = diff_products(product, None)

    assert created[0] == FieldChange("sku", None, "A1")
    assert all(change.old is None for change in created)
    assert all(change.new is None for change in deleted)


def test_record_changes_covers_create_update_and_delete() -> None:
    kept = make_product("A1")
    edited = make_product("B1", quantity=1)
    removed = make_product("C1")
    added = make_product("D1")
    before = (kept, edited, removed)
    after = (kept, replace(edited, quantity=2), added)

    records = record_changes(before, after, changed_by="alice", clock=fixed_clock())

    assert [(r.sku, r.action) for r in records] == [
        ("B1", ChangeAction.UPDATED),
        ("D1", ChangeAction.CREATED),
        ("C1", ChangeAction.DELETED),
    ]
    assert all(r.changed_by == "alice" for r in records)
    assert all(r.changed_at == FIXED_NOW for r in records)
    assert records[0].changes[0] == FieldChange("quantity", "1", "2")


def test_record_changes_skips_unchanged_products() -> None:
    catalog = (make_product("A1"), make_product("B1"))

    assert record_changes(catalog, catalog) == ()
