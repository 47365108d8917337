"""
Ease scoring: how much friction stands between the user and a role.

    ease = clamp(
        0.75 * timeline_factor
        + 0.25 * retrain_willingness
        - min(0.70, 0.14 * missing_critical)
    , 0, 1)

Timeline buckets map to factors by substring: "0-3" → 0.25, "3-6" → 0.45,
"6-12" → 0.65, anything longer or unrecognized → 0.75.

Difficulty classification: ease >= 0.70 → Low, >= 0.50 → Medium, else High.
"""

from __future__ import annotations

from career_vector.models.recommendation import Difficulty
from career_vector.taxonomy.task_taxonomy import (
    DEFAULT_TIMELINE_FACTOR,
    TIMELINE_FACTORS,
)

W_TIMELINE = 0.75
W_RETRAIN = 0.25
MISSING_CRITICAL_STEP = 0.14
MISSING_CRITICAL_CAP = 0.70


def timeline_factor(timeline: str | None) -> float:
    """Map a timeline bucket to a factor; shorter windows give lower ease."""
    text = str(timeline or "")
    for marker, factor in TIMELINE_FACTORS:
        if marker in text:
            return factor
    return DEFAULT_TIMELINE_FACTOR


def missing_critical_penalty(missing_critical: int) -> float:
    return min(MISSING_CRITICAL_CAP, MISSING_CRITICAL_STEP * max(0, missing_critical))


def compute_ease(
    missing_critical: int,
    retrain_willingness: float,
    timeline: str | None,
) -> float:
    """Ease score in [0, 1]."""
    retrain = _clamp(retrain_willingness, 0.0, 1.0)
    return _clamp(
        W_TIMELINE * timeline_factor(timeline)
        + W_RETRAIN * retrain
        - missing_critical_penalty(missing_critical),
        0.0,
        1.0,
    )


def classify_difficulty(ease: float) -> Difficulty:
    if ease >= 0.70:
        return "Low"
    if ease >= 0.50:
        return "Medium"
    return "High"


# ── Helper ────────────────────────────────────────────────────────────────────

def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
