"""Upload adapter: spreadsheet rows to product candidates."""

from __future__ import annotations

from .reader import RowParseError, parse_rows, read_candidates
from .schema import ProductRow
from .translator import row_to_candidate

__all__ = [
    "ProductRow",
    "RowParseError",
    "parse_rows",
    "read_candidates",
    "row_to_candidate",
]
