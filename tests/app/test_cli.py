from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID

import pytest

from stockroom.domain.errors import ProductNotFoundError
from stockroom.domain.model import (
    AllVendors,
    CallerIdentity,
    ChangeAction,
    FieldChange,
    ImportMode,
    ProductChange,
    RestrictedVendors,
    Role,
)
from stockroom.domain.reconciliation import reconcile
from stockroom.ui import cli as cli_module
from tests.helpers.products import make_candidate, make_product

if TYPE_CHECKING:
    from pathlib import Path

    from stockroom.domain.model import ProductCandidate


@pytest.fixture(autouse=True)
def clean_caller_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("STOCKROOM_ROLE", "STOCKROOM_VENDOR_NUMBERS", "STOCKROOM_USER"):
        monkeypatch.delenv(name, raising=False)


def test_list_prints_visible_products(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    captured: dict[str, object] = {}

    def fake_list(caller: CallerIdentity, **kwargs: object) -> tuple:
        captured["caller"] = caller
        captured.update(kwargs)
        return (make_product("A1", quantity=2, min_stock_level=5),)

    monkeypatch.setattr(cli_module, "list_products", fake_list)

    cli_module.main(
        ["--role", "vendor", "--vendor", "V1", "--vendor", "V2", "list", "--search", "bolt"]
    )

    caller = captured["caller"]
    assert isinstance(caller, CallerIdentity)
    assert caller.role is Role.VENDOR
    assert caller.scope == RestrictedVendors(frozenset({"V1", "V2"}))
    assert captured["search"] == "bolt"
    output = capsys.readouterr().out
    assert "A1" in output
    assert "0.500" in output
    assert "LOW" in output


def test_caller_defaults_to_staff_with_all_vendors(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, CallerIdentity] = {}

    def fake_list(caller: CallerIdentity, **_: object) -> tuple:
        captured["caller"] = caller
        return ()

    monkeypatch.setattr(cli_module, "list_products", fake_list)

    cli_module.main(["list"])

    assert captured["caller"].role is Role.STAFF
    assert captured["caller"].scope == AllVendors()


def test_add_builds_candidate_from_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, ProductCandidate] = {}

    def fake_create(caller: CallerIdentity, candidate: ProductCandidate) -> object:
        _ = caller
        captured["candidate"] = candidate
        return candidate.to_product(id=UUID(int=1))

    monkeypatch.setattr(cli_module, "create_product", fake_create)

    cli_module.main(
        [
            "add",
            "--sku",
            "A1",
            "--quantity",
            "4",
            "--min-stock-level",
            "1",
            "--vendor-number",
            "V1",
            "--weight",
            "1.5",
            "--length",
            "2",
            "--width",
            "3",
            "--height",
            "4",
            "--unit-cbm",
            "0.125",
        ]
    )

    candidate = captured["candidate"]
    assert candidate.sku == "A1"
    assert candidate.quantity == 4
    assert candidate.unit_cbm == Decimal("0.125")
    assert candidate.name is None


def test_update_passes_id_and_supplied_fields(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}
    product_id = UUID(int=5)

    def fake_update(
        caller: CallerIdentity, target: UUID, candidate: ProductCandidate
    ) -> object:
        _ = caller
        captured["id"] = target
        captured["candidate"] = candidate
        return make_product("A1", id=target)

    monkeypatch.setattr(cli_module, "update_product", fake_update)

    cli_module.main(["update", "--id", str(product_id), "--quantity", "7"])

    assert captured["id"] == product_id
    assert captured["candidate"] == make_candidate(
        "",
        name=None,
        quantity=7,
        min_stock_level=None,
        location=None,
        vendor_number=None,
        weight=None,
        length=None,
        width=None,
        height=None,
        unit_cbm=None,
        unit_of_measurement=None,
    )


def test_import_prints_conflicts_and_summary(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], tmp_path: Path
) -> None:
    path = tmp_path / "upload.csv"
    path.write_text("sku,quantity\nA1,3\nA1,4\n", encoding="utf-8")
    captured: dict[str, object] = {}

    def fake_import(
        caller: CallerIdentity,
        candidates: tuple[ProductCandidate, ...],
        *,
        mode: ImportMode,
    ) -> object:
        _ = caller
        captured["mode"] = mode
        captured["skus"] = [candidate.sku for candidate in candidates]
        return reconcile(
            (make_product("A1"),),
            candidates,
            mode=mode,
            scope=AllVendors(),
        )

    monkeypatch.setattr(cli_module, "import_products", fake_import)

    cli_module.main(["import", str(path), "--mode", "update"])

    assert captured["mode"] is ImportMode.UPDATE_ONLY
    assert captured["skus"] == ["A1", "A1"]
    output = capsys.readouterr().out
    assert "row 3 (A1): SKU 'A1' appears more than once in the import" in output
    assert "Successfully updated 1 products (1 rejected)" in output


def test_invalid_role_exits_with_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["--role", "superuser", "list"])

    assert excinfo.value.code == 2


def test_invalid_decimal_exits_with_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["add", "--sku", "A1", "--weight", "heavy"])

    assert excinfo.value.code == 2


def test_invalid_uuid_exits_with_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["delete", "--id", "not-a-uuid"])

    assert excinfo.value.code == 2


def test_catalog_errors_exit_with_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_delete(caller: CallerIdentity, product_id: UUID) -> None:
        _ = caller
        raise ProductNotFoundError(product_id)

    monkeypatch.setattr(cli_module, "delete_product", fake_delete)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["delete", "--id", str(UUID(int=9))])

    assert excinfo.value.code == 1


def test_unparseable_upload_exits_with_usage_error(tmp_path: Path) -> None:
    path = tmp_path / "broken.csv"
    path.write_text("sku,quantity\nA1,lots\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["import", str(path)])

    assert excinfo.value.code == 2


def test_history_prints_field_changes(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    change = ProductChange(
        product_id=UUID(int=3),
        sku="A1",
        action=ChangeAction.UPDATED,
        changes=(FieldChange("quantity", "1", "2"),),
        changed_by="alice",
    )

    def fake_history(caller: CallerIdentity, sku: str) -> tuple[ProductChange, ...]:
        _ = caller
        assert sku == "A1"
        return (change,)

    monkeypatch.setattr(cli_module, "product_history", fake_history)

    cli_module.main(["history", "--sku", "A1"])

    output = capsys.readouterr().out
    assert "updated by alice: quantity: 1 -> 2" in output
