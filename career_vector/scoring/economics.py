"""
Economics scoring: how a role's income band fits the user's target range.

With no floor and no ceiling the score is a neutral 0.60.  Otherwise:

    target  = [floor or 0, ceiling or 9_999_999]
    overlap = max(0, min(high, t_high) − max(low, t_low))
    span    = max(1, min(high, t_high) − min(low, t_low))
    score   = clamp(overlap / span − 0.35 × shortfall, 0, 1)

``span`` runs from the lower of the two floors to the lower of the two
ceilings, so an open-ended target does not dilute the overlap.
``shortfall`` is how far the role's midpoint sits below the user's floor,
as a fraction of the floor (0 when at or above it).
"""

from __future__ import annotations

from career_vector.models.role import IncomeBand

NEUTRAL_ECONOMICS = 0.60
OPEN_CEILING = 9_999_999.0
SHORTFALL_WEIGHT = 0.35


def below_floor_shortfall(mid: float, floor: float) -> float:
    if not floor or mid >= floor:
        return 0.0
    return _clamp((floor - mid) / max(1.0, floor), 0.0, 1.0)


def compute_economics(
    income: IncomeBand,
    salary_min: float | None,
    salary_max: float | None,
) -> float:
    """Economics score in [0, 1] for one role's income band."""
    if not salary_min and not salary_max:
        return NEUTRAL_ECONOMICS

    t_low = salary_min or 0.0
    t_high = salary_max or OPEN_CEILING

    overlap = max(0.0, min(income.high, t_high) - max(income.low, t_low))
    span = max(1.0, min(income.high, t_high) - min(income.low, t_low))
    overlap_fraction = _clamp(overlap / span, 0.0, 1.0)

    shortfall = below_floor_shortfall(income.mid, t_low)
    return _clamp(overlap_fraction - SHORTFALL_WEIGHT * shortfall, 0.0, 1.0)


# ── Helper ────────────────────────────────────────────────────────────────────

def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
