"""Bulk reconciliation of imported candidates against the catalog.

Layered flow:
1) detect in-batch duplicates (first occurrence wins)
2) classify each candidate as insert, update or conflict for the import mode
3) hand the report to the mutation applier for a single batch commit
"""

from __future__ import annotations

from .contracts import ReconciliationEntry, ReconciliationReport
from .deduplicate import DeduplicationResult, first_occurrences
from .engine import ReconciliationEngine, reconcile

__all__ = [
    "DeduplicationResult",
    "ReconciliationEngine",
    "ReconciliationEntry",
    "ReconciliationReport",
    "first_occurrences",
    "reconcile",
]
