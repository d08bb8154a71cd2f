# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from decimal import Decimal, InvalidOperation
from signal import SIGINT, signal
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv

from stockroom.adapters.upload import RowParseError, read_candidates
from stockroom.app import (
    create_product,
    delete_product,
    import_products,
    list_products,
    product_history,
    update_product,
)
from stockroom.config import ConfigurationError, configure_logging, get_caller_config
from stockroom.domain.errors import CatalogError
from stockroom.domain.metrics import format_cbm
from stockroom.domain.model import ImportMode, ProductCandidate

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from stockroom.domain.model import CallerIdentity

log = logging.getLogger(__name__)

_IMPORT_MODES = {"insert": ImportMode.INSERT_ONLY, "update": ImportMode.UPDATE_ONLY}
_NAME_WIDTH = 30


def _parse_decimal(value: str) -> Decimal:
    try:
        return Decimal(value.strip())
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError(f"Invalid decimal: {value}") from exc


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid UUID: {value}") from exc


def _add_field_arguments(parser: argparse.ArgumentParser, *, sku_required: bool) -> None:
    parser.add_argument("--sku", type=str, required=sku_required, help="Stock code")
    parser.add_argument("--name", type=str, help="Product name")
    parser.add_argument("--quantity", type=int, help="Units in stock")
    parser.add_argument("--min-stock-level", type=int, help="Low-stock threshold")
    parser.add_argument("--location", type=str, help="Warehouse location")
    parser.add_argument("--vendor-number", type=str, help="Owning vendor number")
    parser.add_argument("--weight", type=_parse_decimal, help="Weight (lbs)")
    parser.add_argument("--length", type=_parse_decimal, help="Length (in)")
    parser.add_argument("--width", type=_parse_decimal, help="Width (in)")
    parser.add_argument("--height", type=_parse_decimal, help="Height (in)")
    parser.add_argument("--unit-cbm", type=_parse_decimal, help="Volume per unit (m3)")
    parser.add_argument("--unit-of-measurement", type=str, help="Unit label (default: units)")


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage the Stockroom inventory catalog")
    parser.add_argument(
        "--role",
        type=str,
        help="Caller role (admin, manager, staff, vendor); defaults to STOCKROOM_ROLE",
    )
    parser.add_argument(
        "--vendor",
        action="append",
        dest="vendors",
        help="Allowed vendor number, repeatable; ALL grants every vendor",
    )
    parser.add_argument("--user", type=str, help="Name recorded in the change log")
    subparsers = parser.add_subparsers(dest="command", required=True)

    listing = subparsers.add_parser("list", help="List visible products")
    listing.add_argument(
        "--search",
        type=str,
        help="Filter by SKU, name, location or vendor number",
    )

    add = subparsers.add_parser("add", help="Add a product")
    _add_field_arguments(add, sku_required=True)

    update = subparsers.add_parser("update", help="Update a product")
    update.add_argument("--id", type=_parse_uuid, required=True, help="Product id")
    _add_field_arguments(update, sku_required=False)

    remove = subparsers.add_parser("delete", help="Delete a product")
    remove.add_argument("--id", type=_parse_uuid, required=True, help="Product id")

    bulk = subparsers.add_parser("import", help="Bulk import products from a CSV file")
    bulk.add_argument("file", type=str, help="CSV file with a header row")
    bulk.add_argument(
        "--mode",
        choices=sorted(_IMPORT_MODES),
        default="insert",
        help="insert new products or update existing ones (default: %(default)s)",
    )

    history = subparsers.add_parser("history", help="Show the change log of a product")
    history.add_argument("--sku", type=str, required=True, help="Stock code")

    return parser.parse_args(list(argv))


def _candidate_from_args(args: argparse.Namespace) -> ProductCandidate:
    return ProductCandidate(
        sku=args.sku or "",
        name=args.name,
        quantity=args.quantity,
        min_stock_level=args.min_stock_level,
        location=args.location,
        vendor_number=args.vendor_number,
        weight=args.weight,
        length=args.length,
        width=args.width,
        height=args.height,
        unit_cbm=args.unit_cbm,
        unit_of_measurement=args.unit_of_measurement,
    )


def _truncate(name: str) -> str:
    return name if len(name) <= _NAME_WIDTH else f"{name[:_NAME_WIDTH]}..."


def _run(args: argparse.Namespace, caller: CallerIdentity) -> None:
    if args.command == "list":
        products = list_products(caller, search=args.search)
        if not products:
            print("No products found.")
        for product in products:
            flag = " LOW" if product.is_low_stock else ""
            print(
                f"{product.sku}\t{_truncate(product.name)}\t{product.quantity}\t"
                f"{product.location}\t{product.vendor_number}\t"
                f"{format_cbm(product.cbm)}\t{product.id}{flag}"
            )
    elif args.command == "add":
        created = create_product(caller, _candidate_from_args(args))
        print(f"Product added successfully: {created.sku} ({created.id})")
    elif args.command == "update":
        updated = update_product(caller, args.id, _candidate_from_args(args))
        print(f"Product updated successfully: {updated.sku} ({updated.id})")
    elif args.command == "delete":
        delete_product(caller, args.id)
        print("Product deleted successfully")
    elif args.command == "import":
        candidates = read_candidates(args.file)
        report = import_products(caller, candidates, mode=_IMPORT_MODES[args.mode])
        for entry in report.conflicts:
            message = entry.rejection.message if entry.rejection else "rejected"
            print(f"row {entry.index + 2} ({entry.sku}): {message}")
        print(report.summary())
    elif args.command == "history":
        for change in product_history(caller, args.sku):
            fields = ", ".join(f"{item.field}: {item.old} -> {item.new}" for item in change.changes)
            who = f" by {change.changed_by}" if change.changed_by else ""
            print(f"{change.changed_at.isoformat()} {change.action.value}{who}: {fields}")
    else:
        raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        configure_logging()
        parsed_args = _parse_args(args_list)
        caller = get_caller_config(
            role=parsed_args.role,
            vendor_numbers=parsed_args.vendors,
            name=parsed_args.user,
        ).identity()
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        _run(parsed_args, caller)
    except RowParseError as exc:
        log.error("Upload rejected: %s", exc)  # noqa: TRY400
        sys.exit(2)
    except CatalogError as exc:
        log.error("%s", exc)  # noqa: TRY400
        sys.exit(1)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console-script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
