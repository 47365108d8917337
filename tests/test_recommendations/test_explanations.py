"""
Tests for career_vector/recommendations/explanations.py.

What we test
------------
build_drivers():
  - Rules evaluated in table order, at most 3 kept.
  - Skill-coverage driver requires zero missing critical skills.
  - Fallback driver when nothing clears the threshold.

build_skill_gaps():
  - Catalog order, critical flag carried, capped at 6.

build_plan():
  - Four steps; role title in step 1; first two gaps in step 2.
  - "role-specific tools" when there are no gaps.

build_recommendation():
  - Integer percentages rounded half-up; difficulty from ease; explain block.
"""

from __future__ import annotations

import pytest

from career_vector.models.recommendation import SkillGap
from career_vector.recommendations.aggregator import RoleScore, aggregation_weights
from career_vector.recommendations.explanations import (
    DRIVER_RULES,
    FALLBACK_DRIVER,
    build_drivers,
    build_plan,
    build_recommendation,
    build_skill_gaps,
)
from career_vector.scoring.fit import FitComponents, SkillCoverage
from career_vector.scoring.resilience import ResilienceComponents


# ── Helpers ────────────────────────────────────────────────────────────────────

def _score(
    role,
    task_similarity: float = 0.0,
    coverage: float = 0.0,
    missing_critical: int = 1,
    resilience: float = 0.0,
    economics: float = 0.0,
    ease: float = 0.0,
    final: float = 0.5,
) -> RoleScore:
    """Build a RoleScore with chosen component values."""
    missing = tuple(role.skills)
    return RoleScore(
        role=role,
        fit=FitComponents(
            task_similarity=task_similarity,
            skills=SkillCoverage(
                coverage=coverage,
                missing_critical=missing_critical,
                adjusted=coverage,
                missing=missing,
            ),
            sector_preference=0.65,
            seniority_penalty=0.0,
        ),
        # 0.55 + 0.45 − (1 − r) = r
        resilience=ResilienceComponents(
            inverted_exposure=1.0, structural=1.0, compression_penalty=1.0 - resilience
        ),
        economics=economics,
        ease=ease,
        final=final,
    )


def _messages(*names: str) -> list[str]:
    by_name = {rule.name: rule.message for rule in DRIVER_RULES}
    return [by_name[n] for n in names]


class TestBuildDrivers:
    def test_all_high_keeps_first_three(self, make_role):
        score = _score(
            make_role(), task_similarity=0.9, coverage=0.9, missing_critical=0,
            resilience=0.9, economics=0.9, ease=0.9,
        )
        assert build_drivers(score) == _messages(
            "task_overlap", "skill_coverage", "resilience"
        )

    def test_table_order_preserved(self, make_role):
        score = _score(make_role(), economics=0.8, ease=0.7)
        assert build_drivers(score) == _messages("economics", "ease")

    def test_skill_coverage_needs_no_critical_gaps(self, make_role):
        score = _score(make_role(), coverage=0.95, missing_critical=1)
        assert build_drivers(score) == [FALLBACK_DRIVER]

    def test_threshold_inclusive(self, make_role):
        score = _score(make_role(), task_similarity=0.65)
        assert build_drivers(score) == _messages("task_overlap")

    def test_fallback(self, make_role):
        assert build_drivers(_score(make_role())) == [FALLBACK_DRIVER]


class TestBuildSkillGaps:
    def test_catalog_order_and_cap(self, make_role):
        role = make_role(
            skills=[{"name": f"Skill {i}", "critical": i == 0} for i in range(8)]
        )
        gaps = build_skill_gaps(_score(role))
        assert len(gaps) == 6
        assert gaps[0] == SkillGap(name="Skill 0", critical=True)
        assert [g.name for g in gaps] == [f"Skill {i}" for i in range(6)]


class TestBuildPlan:
    def test_four_steps(self):
        plan = build_plan("Registered Nurse (RN)", [
            SkillGap(name="Clinical care", critical=True),
            SkillGap(name="Triage", critical=False),
            SkillGap(name="Documentation", critical=False),
        ])
        assert len(plan) == 4
        assert '"Registered Nurse (RN)"' in plan[0]
        assert plan[1] == "Close 1-2 skill gaps: Clinical care, Triage."

    def test_no_gaps(self):
        plan = build_plan("Electrician", [])
        assert plan[1] == "Close 1-2 skill gaps: role-specific tools."


class TestBuildRecommendation:
    def test_rounding_and_difficulty(self, make_role):
        role = make_role(skills=[{"name": "Wiring", "critical": True}])
        score = _score(
            role, task_similarity=0.5, resilience=0.126, economics=0.6,
            ease=0.6125, final=0.347,
        )
        rec = build_recommendation(score, aggregation_weights(0.0), "6-12")
        assert rec.ease == 61
        assert rec.economics == 60
        assert rec.resilience == 13
        assert rec.final == 35
        assert rec.difficulty == "Medium"
        assert rec.time_to_transition == "6-12"
        assert rec.skill_gaps == [SkillGap(name="Wiring", critical=True)]
        assert rec.explain.missing_critical == 1
        assert rec.explain.task_similarity == 50
        assert rec.explain.weights.w_econ == pytest.approx(0.30)

    def test_identity_fields(self, make_role):
        role = make_role(role_id="x_role", titles=["X Role"], aliases=["Ex"])
        rec = build_recommendation(_score(role), aggregation_weights(0.5), "0-3")
        assert rec.role_id == "x_role"
        assert rec.title == "X Role"
        assert rec.aliases == ("Ex",)
        assert rec.income_band == role.income
        assert 1 <= len(rec.why) <= 3
