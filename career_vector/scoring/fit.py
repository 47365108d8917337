"""
Fit scoring: how closely a user's work and skills match a role.

Score formula (0–1)
-------------------
    fit = clamp(
        0.55 * task_similarity          # cosine of the two task vectors
        + 0.35 * adjusted_coverage      # weighted skill coverage − critical gaps
        + 0.10 * sector_preference      # 0.85 preferred / 0.65 neutral / 0.40 other
        - 0.25 * seniority_penalty      # 0 in band, up to 0.40 far off
    , 0, 1)

Component explanations
----------------------
skill coverage:
    Sum of weights of required skills the user holds / sum of all required
    weights.  A role with no declared skills gets a neutral 0.5.  Every
    missing *critical* skill subtracts 0.12 (aggregate cap 0.45).

seniority penalty:
    0 when the user's level is one of the role's bands.  0.05 when either side
    is unknown, 0.10 when the user's level is not on the scale.  Otherwise the
    ordinal distance to the midpoint of the role's bands × 0.08, clamped to
    [0.08, 0.40].
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from career_vector.models.role import RoleProfile, RoleSkill, normalize_skill
from career_vector.scoring.task_vector import TaskVector, cosine_similarity
from career_vector.taxonomy.task_taxonomy import seniority_rank

W_TASK = 0.55
W_SKILL = 0.35
W_SECTOR = 0.10
W_SENIORITY = 0.25

NO_SKILLS_COVERAGE = 0.5
CRITICAL_GAP_PENALTY = 0.12
CRITICAL_GAP_CAP = 0.45

SECTOR_PREFERRED = 0.85
SECTOR_NEUTRAL = 0.65
SECTOR_OTHER = 0.40

SENIORITY_UNKNOWN_PENALTY = 0.05
SENIORITY_OFF_SCALE_PENALTY = 0.10
SENIORITY_STEP = 0.08
SENIORITY_CAP = 0.40


@dataclass(frozen=True)
class SkillCoverage:
    """Skill-match breakdown for one user/role pair.

    Attributes:
        coverage:          Raw weighted coverage in [0, 1].
        missing_critical:  Count of critical skills the user lacks.
        adjusted:          Coverage minus the capped critical-gap penalty.
        missing:           Required skills the user lacks, in catalog order.
    """

    coverage: float
    missing_critical: int
    adjusted: float
    missing: tuple[RoleSkill, ...]


@dataclass(frozen=True)
class FitComponents:
    """All components of a fit score.

    Attributes:
        task_similarity:    Cosine similarity in [0, 1].
        skills:             Skill coverage breakdown.
        sector_preference:  Sector preference value.
        seniority_penalty:  Seniority mismatch penalty in [0, 0.40].
    """

    task_similarity: float
    skills: SkillCoverage
    sector_preference: float
    seniority_penalty: float

    @property
    def score(self) -> float:
        """Weighted fit score, clamped to [0, 1]."""
        return _clamp(
            W_TASK * self.task_similarity
            + W_SKILL * self.skills.adjusted
            + W_SECTOR * self.sector_preference
            - W_SENIORITY * self.seniority_penalty,
            0.0,
            1.0,
        )


def score_skill_coverage(
    user_skills: Iterable[str],
    role_skills: Iterable[RoleSkill],
) -> SkillCoverage:
    """Compare a user's skill list against a role's required skills.

    Args:
        user_skills: Skill names or pre-normalized keys; matching is
            case-insensitive and ignores surrounding whitespace.
        role_skills: The role's required skills.
    """
    held = {normalize_skill(s) for s in user_skills if s}
    covered = 0.0
    total = 0.0
    missing_critical = 0
    missing: list[RoleSkill] = []

    for skill in role_skills:
        total += skill.weight
        if skill.key in held:
            covered += skill.weight
            continue
        missing.append(skill)
        if skill.critical:
            missing_critical += 1

    coverage = covered / total if total else NO_SKILLS_COVERAGE
    penalty = _clamp(missing_critical * CRITICAL_GAP_PENALTY, 0.0, CRITICAL_GAP_CAP)

    return SkillCoverage(
        coverage=coverage,
        missing_critical=missing_critical,
        adjusted=_clamp(coverage - penalty, 0.0, 1.0),
        missing=tuple(missing),
    )


def seniority_penalty(user_seniority: str | None, role_bands: Sequence[str]) -> float:
    """Penalty for a mismatch between the user's level and a role's bands."""
    if not user_seniority or not role_bands:
        return SENIORITY_UNKNOWN_PENALTY

    user_level = user_seniority.strip().lower()
    bands = [b.lower() for b in role_bands]
    if user_level in bands:
        return 0.0

    user_rank = seniority_rank(user_level)
    low_rank = seniority_rank(bands[0])
    high_rank = seniority_rank(bands[-1])
    if user_rank is None or low_rank is None or high_rank is None:
        return SENIORITY_OFF_SCALE_PENALTY

    # Half-up rounding of the band midpoint; round() would bank to even.
    role_rank = int((low_rank + high_rank) / 2 + 0.5)
    distance = abs(user_rank - role_rank)
    return _clamp(distance * SENIORITY_STEP, SENIORITY_STEP, SENIORITY_CAP)


def sector_preference(role: RoleProfile, acceptable_sectors: frozenset[str]) -> float:
    """Sector preference value; ``acceptable_sectors`` holds lowercase keys."""
    if not acceptable_sectors:
        return SECTOR_NEUTRAL
    return SECTOR_PREFERRED if role.sector_key in acceptable_sectors else SECTOR_OTHER


def compute_fit(
    user_vector: TaskVector,
    user_skills: Iterable[str],
    user_seniority: str | None,
    acceptable_sectors: frozenset[str],
    role: RoleProfile,
) -> FitComponents:
    """Compute all fit components for one user/role pair."""
    return FitComponents(
        task_similarity=cosine_similarity(user_vector, role.task_vector),
        skills=score_skill_coverage(user_skills, role.skills),
        sector_preference=sector_preference(role, acceptable_sectors),
        seniority_penalty=seniority_penalty(user_seniority, role.seniority_bands),
    )


# ── Helper ────────────────────────────────────────────────────────────────────

def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
