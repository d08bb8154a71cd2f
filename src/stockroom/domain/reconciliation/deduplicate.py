"""Intra-batch duplicate detection.

Evaluated over the whole batch before classification so the outcome depends only
on input positions: the first candidate per exact SKU is the representative and
every later one is reported as a duplicate. Blank SKUs are never grouped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from stockroom.domain.model import ProductCandidate


@dataclass(slots=True)
class DeduplicationResult:
    """Maps each duplicate candidate index to the index of its representative."""

    representative_by_index: dict[int, int] = field(default_factory=dict[int, int])

    def is_duplicate(self, index: int) -> bool:
        return index in self.representative_by_index

    def representative_for(self, index: int) -> int:
        return self.representative_by_index.get(index, index)


def first_occurrences(batch: Sequence[ProductCandidate]) -> DeduplicationResult:
    first_index_by_sku: dict[str, int] = {}
    result = DeduplicationResult()
    for index, candidate in enumerate(batch):
        # blank SKUs are left to validation
        if not candidate.sku.strip():
            continue
        representative = first_index_by_sku.setdefault(candidate.sku, index)
        if representative != index:
            result.representative_by_index[index] = representative
    return result
