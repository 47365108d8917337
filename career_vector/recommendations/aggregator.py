"""
Aggregation: hard filters, dynamic weights and ranking.

Hard filters (applied before any scoring)
-----------------------------------------
    1. Sector in the avoid set          → dropped (avoid wins over accept)
    2. Accept set given, sector not in  → dropped
    3. Salary floor > role income.high  → dropped

Dynamic weights from the stability-vs-upside slider ``s`` in [0, 1]
-------------------------------------------------------------------
    w_fit  = 0.30
    w_res  = clamp(0.28 + 0.12·s, 0.28, 0.40)
    w_econ = clamp(0.30 − 0.16·s, 0.12, 0.30)
    w_ease = clamp(0.12 + 0.10·s, 0.12, 0.22)

The weights are not normalized: they total 1.00 at s = 0 and
1.06 at s = 1, so ``final`` is not a strict convex combination of the
subscores across the whole slider range.  ``AggregationWeights.total``
exposes the sum.

    final = clamp(w_fit·fit + w_res·resilience + w_econ·economics + w_ease·ease, 0, 1)

Ranking: descending by the unrounded final score, ties by ``role_id``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from career_vector.models.request import RecommendationRequest
from career_vector.models.role import RoleProfile
from career_vector.scoring.ease import compute_ease
from career_vector.scoring.economics import compute_economics
from career_vector.scoring.fit import FitComponents, compute_fit
from career_vector.scoring.resilience import ResilienceComponents, compute_resilience
from career_vector.scoring.task_vector import TaskVector

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 10


@dataclass(frozen=True)
class AggregationWeights:
    """Weights applied to the four subscores."""

    w_fit: float
    w_res: float
    w_econ: float
    w_ease: float

    @property
    def total(self) -> float:
        return self.w_fit + self.w_res + self.w_econ + self.w_ease

    def combine(
        self, fit: float, resilience: float, economics: float, ease: float
    ) -> float:
        return _clamp(
            self.w_fit * fit
            + self.w_res * resilience
            + self.w_econ * economics
            + self.w_ease * ease,
            0.0,
            1.0,
        )


def aggregation_weights(stability_vs_upside: float) -> AggregationWeights:
    """Weights for a slider value; out-of-range input is clamped to [0, 1]."""
    s = _clamp(stability_vs_upside, 0.0, 1.0)
    return AggregationWeights(
        w_fit=0.30,
        w_res=_clamp(0.28 + 0.12 * s, 0.28, 0.40),
        w_econ=_clamp(0.30 - 0.16 * s, 0.12, 0.30),
        w_ease=_clamp(0.12 + 0.10 * s, 0.12, 0.22),
    )


def passes_hard_filters(
    role: RoleProfile,
    avoid_sectors: frozenset[str],
    acceptable_sectors: frozenset[str],
    salary_floor: float,
) -> bool:
    """Whether ``role`` survives the hard filters.

    Sector sets hold lowercase keys.  A floor of 0 disables the income filter.
    """
    sector = role.sector_key
    if sector in avoid_sectors:
        return False
    if acceptable_sectors and sector not in acceptable_sectors:
        return False
    if salary_floor and role.income.high < salary_floor:
        return False
    return True


def filter_roles(
    roles: Iterable[RoleProfile],
    request: RecommendationRequest,
) -> list[RoleProfile]:
    """Apply the hard filters for ``request``, preserving catalog order."""
    avoid = request.avoid_keys
    accept = request.accept_keys
    floor = request.constraints.floor
    return [r for r in roles if passes_hard_filters(r, avoid, accept, floor)]


@dataclass(frozen=True)
class RoleScore:
    """Unrounded scores for one role under one request.

    Attributes:
        role:        The scored catalog entry.
        fit:         Fit components (task, skills, sector, seniority).
        resilience:  Resilience components.
        economics:   Economics score in [0, 1].
        ease:        Ease score in [0, 1].
        final:       Weighted final score in [0, 1].
    """

    role: RoleProfile
    fit: FitComponents
    resilience: ResilienceComponents
    economics: float
    ease: float
    final: float

    @property
    def missing_critical(self) -> int:
        return self.fit.skills.missing_critical


def score_role(
    role: RoleProfile,
    request: RecommendationRequest,
    user_vector: TaskVector,
    weights: AggregationWeights,
) -> RoleScore:
    """Run all four scorers against one role and combine them."""
    constraints = request.constraints
    fit = compute_fit(
        user_vector=user_vector,
        user_skills=request.skill_keys,
        user_seniority=request.seniority,
        acceptable_sectors=request.accept_keys,
        role=role,
    )
    resilience = compute_resilience(role)
    economics = compute_economics(
        role.income, constraints.salary_min, constraints.salary_max
    )
    ease = compute_ease(
        missing_critical=fit.skills.missing_critical,
        retrain_willingness=constraints.retrain_willingness,
        timeline=constraints.timeline,
    )
    final = weights.combine(fit.score, resilience.score, economics, ease)
    return RoleScore(
        role=role,
        fit=fit,
        resilience=resilience,
        economics=economics,
        ease=ease,
        final=final,
    )


def rank_scores(scores: list[RoleScore], top_n: int = DEFAULT_TOP_N) -> list[RoleScore]:
    """Sort by final score descending (ties by role_id) and keep ``top_n``."""
    ordered = sorted(scores, key=lambda s: (-s.final, s.role.role_id))
    return ordered[: max(0, top_n)]


# ── Helper ────────────────────────────────────────────────────────────────────

def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
