"""
Recommendation output models.

A ``ScoredRecommendation`` is built per request and never persisted.  It
serializes to camelCase JSON (``roleId``, ``skillGaps``, ``incomeBand``)
via ``model_dump(by_alias=True)``.

Integer subscores and the final score are each rounded from their own
unrounded [0, 1] value, so ``final`` is not necessarily the weighted sum of
the rounded subscores.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from career_vector.models.role import CompressionOverlay, IncomeBand

Difficulty = Literal["Low", "Medium", "High"]

MAX_DRIVERS = 3
MAX_SKILL_GAPS = 6
MAX_PLAN_STEPS = 5


class SkillGap(BaseModel):
    """A role-required skill the user does not list."""

    model_config = ConfigDict(frozen=True)

    name: str
    critical: bool


class AggregationWeightsOut(BaseModel):
    """Weights applied to the four subscores for this request."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    w_fit: float
    w_res: float
    w_econ: float
    w_ease: float


class ScoreExplain(BaseModel):
    """Diagnostics behind a recommendation's subscores.

    Attributes:
        weights: Aggregation weights used for ``final``.
        task_similarity: Cosine task similarity as an integer percentage.
        skill_coverage: Raw weighted skill coverage as an integer percentage
            (before the missing-critical penalty).
        missing_critical: Number of critical skills the user lacks.
        compression: The role's compression overlay.
        exposure_baseline: The role's automation exposure baseline (0–10).
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    weights: AggregationWeightsOut
    task_similarity: int
    skill_coverage: int
    missing_critical: int
    compression: CompressionOverlay
    exposure_baseline: float


class ScoredRecommendation(BaseModel):
    """One ranked role recommendation.

    Attributes:
        role_id: Catalog role identifier.
        title: Canonical role title.
        sector: Role sector.
        aliases: Alternate titles (useful for postings lookups).
        fit: Task/skill fit, 0–100.
        resilience: Automation/compression resilience, 0–100.
        economics: Income fit, 0–100.
        ease: Transition ease, 0–100.
        final: Weighted final score, 0–100.
        income_band: The role's income band.
        difficulty: ``"Low"``, ``"Medium"`` or ``"High"``, derived from ease.
        time_to_transition: The user's timeline bucket, echoed back.
        why: Up to 3 explanatory drivers.
        skill_gaps: Up to 6 missing skills.
        plan: Up to 5 transition steps.
        explain: Score diagnostics.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    role_id: str
    title: str
    sector: str
    aliases: tuple[str, ...] = ()
    fit: int
    resilience: int
    economics: int
    ease: int
    final: int
    income_band: IncomeBand
    difficulty: Difficulty
    time_to_transition: str
    why: list[str]
    skill_gaps: list[SkillGap] = []
    plan: list[str] = []
    explain: ScoreExplain

    @field_validator("fit", "resilience", "economics", "ease", "final")
    @classmethod
    def validate_percentage(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise ValueError(f"scores must be in [0, 100], got {v}.")
        return v

    @field_validator("why")
    @classmethod
    def validate_drivers(cls, v: list[str]) -> list[str]:
        if not 1 <= len(v) <= MAX_DRIVERS:
            raise ValueError(f"why must hold 1 to {MAX_DRIVERS} drivers, got {len(v)}.")
        return v

    @field_validator("skill_gaps")
    @classmethod
    def validate_gap_count(cls, v: list[SkillGap]) -> list[SkillGap]:
        if len(v) > MAX_SKILL_GAPS:
            raise ValueError(f"at most {MAX_SKILL_GAPS} skill gaps, got {len(v)}.")
        return v

    @field_validator("plan")
    @classmethod
    def validate_plan_length(cls, v: list[str]) -> list[str]:
        if len(v) > MAX_PLAN_STEPS:
            raise ValueError(f"at most {MAX_PLAN_STEPS} plan steps, got {len(v)}.")
        return v
