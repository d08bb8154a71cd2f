"""Read product candidates from CSV uploads."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from pydantic import ValidationError

from .schema import ProductRow
from .translator import row_to_candidate

if TYPE_CHECKING:
    from collections.abc import Iterable

    from stockroom.domain.model import ProductCandidate

log = logging.getLogger(__name__)


class RowParseError(ValueError):
    """Raised when an uploaded row cannot be coerced into a candidate."""

    def __init__(self, *, row_number: int, errors: str) -> None:
        self.row_number = row_number
        self.errors = errors
        super().__init__(f"Row {row_number}: {errors}")


def parse_rows(rows: Iterable[dict[str, str | None]]) -> tuple[ProductCandidate, ...]:
    """Coerce raw rows; ``row_number`` counts from 2 so it matches the sheet with a header."""

    candidates: list[ProductCandidate] = []
    for row_number, raw in enumerate(rows, start=2):
        cleaned = {key.strip(): value for key, value in raw.items() if key is not None}
        try:
            row = ProductRow.model_validate(cleaned)
        except ValidationError as exc:
            raise RowParseError(row_number=row_number, errors=_describe(exc)) from exc
        candidates.append(row_to_candidate(row))
    return tuple(candidates)


def read_candidates(source: Path | str | TextIO) -> tuple[ProductCandidate, ...]:
    if isinstance(source, (Path, str)):
        with Path(source).open(newline="", encoding="utf-8-sig") as handle:
            return _read(handle)
    return _read(source)


def _read(handle: TextIO) -> tuple[ProductCandidate, ...]:
    candidates = parse_rows(csv.DictReader(handle))
    log.info("Parsed %s candidate rows", len(candidates))
    return candidates


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error["loc"])
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)
