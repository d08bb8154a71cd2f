"""Decision types produced by bulk reconciliation.

The report is the contract between reconciliation (read-only classification) and
the mutation applier (batch commit). It carries enough structure for a UI to
render per-row success or failure without re-deriving any logic.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from stockroom.domain.model import Classification, ImportMode

if TYPE_CHECKING:
    from stockroom.domain.model import Product, Rejection


@dataclass(frozen=True, slots=True, kw_only=True)
class ReconciliationEntry:
    """Outcome for the candidate at ``index`` of the input batch."""

    index: int
    sku: str
    classification: Classification
    record: Product | None = None
    rejection: Rejection | None = None

    def __post_init__(self) -> None:
        accepted = self.classification is not Classification.CONFLICT
        if accepted and (self.record is None or self.rejection is not None):
            raise ValueError("Accepted entries carry a record and no rejection")
        if not accepted and (self.rejection is None or self.record is not None):
            raise ValueError("Conflict entries carry a rejection and no record")

    @property
    def accepted(self) -> bool:
        return self.classification is not Classification.CONFLICT


@dataclass(frozen=True, slots=True)
class ReconciliationReport:
    """Per-candidate decisions for one batch, in input order."""

    mode: ImportMode
    entries: tuple[ReconciliationEntry, ...] = ()

    @property
    def accepted(self) -> tuple[ReconciliationEntry, ...]:
        return tuple(entry for entry in self.entries if entry.accepted)

    @property
    def conflicts(self) -> tuple[ReconciliationEntry, ...]:
        return tuple(entry for entry in self.entries if not entry.accepted)

    @property
    def inserts(self) -> tuple[Product, ...]:
        return self._records(Classification.INSERT)

    @property
    def updates(self) -> tuple[Product, ...]:
        return self._records(Classification.UPDATE)

    def _records(self, classification: Classification) -> tuple[Product, ...]:
        return tuple(
            entry.record
            for entry in self.entries
            if entry.classification is classification and entry.record is not None
        )

    def summary(self) -> str:
        accepted = len(self.accepted)
        if self.mode is ImportMode.UPDATE_ONLY:
            message = f"Successfully updated {accepted} products"
        else:
            message = f"Successfully imported {accepted} new products"
        if self.conflicts:
            message += f" ({len(self.conflicts)} rejected)"
        return message
