"""Derived numeric fields kept consistent with their source fields."""

from __future__ import annotations

from decimal import Decimal


def derive_cbm(unit_cbm: Decimal, quantity: int) -> Decimal:
    """Aggregate volume in cubic metres: per-unit volume times quantity, unrounded."""

    return unit_cbm * quantity


def format_cbm(value: Decimal) -> str:
    """Fixed three-decimal rendering for output layers."""

    return f"{value:.3f}"
