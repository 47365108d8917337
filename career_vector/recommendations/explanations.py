"""
Explanations: drivers, skill gaps, transition plan and difficulty.

Drivers come from ``DRIVER_RULES``, an ordered table of
(name, predicate, message).  Rules are evaluated in table order, the first
``MAX_DRIVERS`` matches are kept, and ``FALLBACK_DRIVER`` is used when none
match.  Add a rule by inserting a row at the priority it should have.

Skill gaps are the first ``MAX_SKILL_GAPS`` role skills (catalog order) the
user does not list.  The plan is a fixed 4-step template parameterized by the
role title and the first two missing skills.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import NamedTuple

from career_vector.models.recommendation import (
    MAX_DRIVERS,
    MAX_PLAN_STEPS,
    MAX_SKILL_GAPS,
    AggregationWeightsOut,
    ScoredRecommendation,
    ScoreExplain,
    SkillGap,
)
from career_vector.recommendations.aggregator import AggregationWeights, RoleScore
from career_vector.scoring.ease import classify_difficulty

DRIVER_THRESHOLD = 0.65
FALLBACK_DRIVER = "Balanced fit/resilience under your constraints"


class DriverRule(NamedTuple):
    name: str
    predicate: Callable[[RoleScore], bool]
    message: str


DRIVER_RULES: tuple[DriverRule, ...] = (
    DriverRule(
        "task_overlap",
        lambda s: s.fit.task_similarity >= DRIVER_THRESHOLD,
        "High task overlap with your weekly work",
    ),
    DriverRule(
        "skill_coverage",
        lambda s: s.fit.skills.missing_critical == 0
        and s.fit.skills.coverage >= DRIVER_THRESHOLD,
        "Strong skill coverage (low critical gaps)",
    ),
    DriverRule(
        "resilience",
        lambda s: s.resilience.score >= DRIVER_THRESHOLD,
        "Structural resilience signals (liability/embodiment/trust/regulatory)",
    ),
    DriverRule(
        "economics",
        lambda s: s.economics >= DRIVER_THRESHOLD,
        "Income band aligns with your target",
    ),
    DriverRule(
        "ease",
        lambda s: s.ease >= DRIVER_THRESHOLD,
        "Low transition friction under your timeline/retrain tolerance",
    ),
)


def build_drivers(
    score: RoleScore,
    rules: tuple[DriverRule, ...] = DRIVER_RULES,
    limit: int = MAX_DRIVERS,
) -> list[str]:
    """Messages of the first ``limit`` matching rules, or the fallback."""
    drivers = [rule.message for rule in rules if rule.predicate(score)][:limit]
    return drivers or [FALLBACK_DRIVER]


def build_skill_gaps(score: RoleScore, limit: int = MAX_SKILL_GAPS) -> list[SkillGap]:
    return [
        SkillGap(name=skill.name, critical=skill.critical)
        for skill in score.fit.skills.missing[:limit]
    ]


def build_plan(title: str, gaps: list[SkillGap]) -> list[str]:
    """Fixed-shape transition plan for one role."""
    focus = ", ".join(g.name for g in gaps[:2]) or "role-specific tools"
    plan = [
        f'Rewrite your resume around the top 3 overlapping tasks for "{title}".',
        f"Close 1-2 skill gaps: {focus}.",
        "Build a proof project (case study) that demonstrates outcomes for this role.",
        "Apply via ATS feeds + targeted companies, track interviews and iterate weekly.",
    ]
    return plan[:MAX_PLAN_STEPS]


def build_recommendation(
    score: RoleScore,
    weights: AggregationWeights,
    timeline: str,
) -> ScoredRecommendation:
    """Round a ``RoleScore`` into its reported, explained form."""
    role = score.role
    gaps = build_skill_gaps(score)
    return ScoredRecommendation(
        role_id=role.role_id,
        title=role.title,
        sector=role.sector,
        aliases=role.aliases,
        fit=_pct(score.fit.score),
        resilience=_pct(score.resilience.score),
        economics=_pct(score.economics),
        ease=_pct(score.ease),
        final=_pct(score.final),
        income_band=role.income,
        difficulty=classify_difficulty(score.ease),
        time_to_transition=timeline,
        why=build_drivers(score),
        skill_gaps=gaps,
        plan=build_plan(role.title, gaps),
        explain=ScoreExplain(
            weights=AggregationWeightsOut(
                w_fit=round(weights.w_fit, 4),
                w_res=round(weights.w_res, 4),
                w_econ=round(weights.w_econ, 4),
                w_ease=round(weights.w_ease, 4),
            ),
            task_similarity=_pct(score.fit.task_similarity),
            skill_coverage=_pct(score.fit.skills.coverage),
            missing_critical=score.missing_critical,
            compression=role.compression_overlay,
            exposure_baseline=role.automation_exposure_baseline,
        ),
    )


# ── Helper ────────────────────────────────────────────────────────────────────

def _pct(value: float) -> int:
    """[0, 1] → integer percentage, half-up."""
    return int(max(0.0, min(1.0, value)) * 100 + 0.5)
