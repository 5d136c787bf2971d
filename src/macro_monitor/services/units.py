"""Deterministic unit to gram conversion."""

import math

from macro_monitor.domain.units import grams_per_unit


def is_mass_unit(unit: str | None) -> bool:
    """Return whether ``unit`` converts deterministically to grams."""
    return grams_per_unit(unit) > 0


def to_grams(quantity: float | None, unit: str | None) -> float:
    """Convert a quantity of ``unit`` to grams.

    Returns 0 when no deterministic conversion exists (cups, servings, unknown
    or missing units) or the quantity is missing, non-positive or non-finite.
    Callers treat 0 as "unknown" and fall back to other estimates.
    """
    if quantity is None or isinstance(quantity, bool):
        return 0.0
    try:
        amount = float(quantity)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(amount) or amount <= 0:
        return 0.0
    return amount * grams_per_unit(unit)
