"""
Task, seniority and timeline taxonomies shared by users and role profiles.

``TaskCategory`` is the canonical, ordered category set used by every
``TaskVector``.  User task weights and role task allocations must use the same
keys; a key outside this set is ignored when a vector is built.

``Seniority`` is an ordinal scale.  Its declaration order *is* the ordering
used for seniority-distance penalties, so new levels must be inserted in
career order, never appended out of sequence.

This module has NO imports from any other ``career_vector`` package.
"""

from enum import StrEnum


class TaskCategory(StrEnum):
    """Category of weekly work effort."""

    ANALYSIS = "analysis"
    WRITING = "writing"
    DATA_OPS = "data_ops"
    DASHBOARDS = "dashboards"
    CUSTOMER_SUPPORT = "customer_support"
    COORDINATION = "coordination"
    PROCESS_DESIGN = "process_design"
    SALES_NEGOTIATION = "sales_negotiation"
    STAKEHOLDER_MGMT = "stakeholder_mgmt"
    PHYSICAL_OPS = "physical_ops"
    """Hands-on work with equipment, materials or physical spaces."""

    CAREGIVING = "caregiving"
    """Direct care for patients, students, children or clients."""

    HIGH_STAKES_LIABILITY = "high_stakes_liability"
    """Decisions where an error carries legal, safety or clinical consequences."""

    CREATIVE_STRATEGY = "creative_strategy"
    CODING_AUTOMATION = "coding_automation"
    COMPLIANCE_REGULATORY = "compliance_regulatory"


TASK_KEYS: tuple[str, ...] = tuple(c.value for c in TaskCategory)


class Seniority(StrEnum):
    """Career level, declared in ascending order."""

    ENTRY = "entry"
    MID = "mid"
    SENIOR = "senior"
    MANAGER = "manager"
    DIRECTOR = "director"
    EXECUTIVE = "executive"


SENIORITY_ORDER: tuple[str, ...] = tuple(s.value for s in Seniority)


def seniority_rank(level: str | None) -> int | None:
    """Return the 0-based ordinal of ``level`` or ``None`` if it is off-scale."""
    if not level:
        return None
    try:
        return SENIORITY_ORDER.index(str(level).strip().lower())
    except ValueError:
        return None


class TimelineBucket(StrEnum):
    """How soon the user wants to complete a move."""

    ZERO_TO_THREE = "0-3"
    THREE_TO_SIX = "3-6"
    SIX_TO_TWELVE = "6-12"
    TWELVE_PLUS = "12+"


# Matched by substring so "0-3 months" and "0-3" resolve the same way.
# Order matters: first match wins.
TIMELINE_FACTORS: tuple[tuple[str, float], ...] = (
    (TimelineBucket.ZERO_TO_THREE.value, 0.25),
    (TimelineBucket.THREE_TO_SIX.value, 0.45),
    (TimelineBucket.SIX_TO_TWELVE.value, 0.65),
)
DEFAULT_TIMELINE_FACTOR: float = 0.75
DEFAULT_TIMELINE: str = TimelineBucket.SIX_TO_TWELVE.value
