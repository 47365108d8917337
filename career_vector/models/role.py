"""
Role profile models — the shape of every catalog entry.

All defaults for loosely specified catalog data are applied here, once, when
the catalog is loaded.  Scorers read fully populated, range-checked fields and
never re-derive defaults:

  - skill weight                    → 0.5
  - each work-context attribute     → 0.3
  - automation exposure baseline    → 5.0  (0–10, higher = more exposed)
  - compression score / momentum    → 50.0 / 0.0
  - income low / high               → 0.8 × mid / 1.2 × mid

Field names follow the catalog JSON.  A few legacy spellings (``w``,
``trustDepth``, ``realTimeLoad``, ``from``) are accepted as aliases so older
seed files load unchanged.

Every model is frozen and every collection field is a tuple: a ``RoleProfile``
is shared by all requests for the lifetime of its catalog.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from career_vector.scoring.task_vector import TaskVector, build_task_vector
from career_vector.taxonomy.task_taxonomy import seniority_rank


class RoleSkill(BaseModel):
    """A skill required by a role.

    Attributes:
        name: Display name; matched case-insensitively against user skills.
        weight: Relative importance in [0.0, 1.0].
        critical: Whether lacking this skill blocks a realistic transition.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    weight: float = Field(default=0.5, validation_alias=AliasChoices("weight", "w"))
    critical: bool = False

    @field_validator("name")
    @classmethod
    def validate_name_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("skill name must not be empty.")
        return v.strip()

    @field_validator("weight")
    @classmethod
    def validate_weight_range(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"skill weight must be in [0.0, 1.0], got {v}.")
        return v

    @property
    def key(self) -> str:
        return normalize_skill(self.name)


class WorkContext(BaseModel):
    """Structural attributes that resist automation independent of task mix.

    All attributes are in [0.0, 1.0].  ``unpredictability`` is recorded for
    completeness but carries no weight in the resilience composite.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    embodiment: float = 0.3
    liability: float = 0.3
    trust_depth: float = Field(
        default=0.3, validation_alias=AliasChoices("trust_depth", "trustDepth")
    )
    real_time_load: float = Field(
        default=0.3, validation_alias=AliasChoices("real_time_load", "realTimeLoad")
    )
    regulatory: float = 0.3
    unpredictability: float = 0.3

    @field_validator(
        "embodiment",
        "liability",
        "trust_depth",
        "real_time_load",
        "regulatory",
        "unpredictability",
    )
    @classmethod
    def validate_unit_range(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"work-context attribute must be in [0.0, 1.0], got {v}.")
        return v


class CompressionOverlay(BaseModel):
    """Time-varying labor-market compression for a role.

    Attributes:
        score: Current compression pressure in [0, 100].
        momentum_60d: Change in pressure over the last 60 days; positive means
            compression is accelerating.  Unbounded; scorers clamp it.
    """

    model_config = ConfigDict(frozen=True)

    score: float = 50.0
    momentum_60d: float = 0.0

    @field_validator("score")
    @classmethod
    def validate_score_range(cls, v: float) -> float:
        if not 0.0 <= v <= 100.0:
            raise ValueError(f"compression score must be in [0, 100], got {v}.")
        return v


class IncomeBand(BaseModel):
    """Annual income band for a role, ``low <= mid <= high``."""

    model_config = ConfigDict(frozen=True)

    low: float
    mid: float
    high: float

    @model_validator(mode="before")
    @classmethod
    def fill_missing_bounds(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        mid = data.get("mid")
        low = data.get("low")
        high = data.get("high")
        if mid is None:
            if low is not None and high is not None:
                mid = (float(low) + float(high)) / 2.0
            else:
                mid = low if low is not None else (high if high is not None else 0.0)
        mid = float(mid)
        data["mid"] = mid
        if low is None:
            data["low"] = mid * 0.8
        if high is None:
            data["high"] = mid * 1.2
        return data

    @model_validator(mode="after")
    def validate_ordering(self) -> "IncomeBand":
        if self.low < 0:
            raise ValueError(f"income low must be non-negative, got {self.low}.")
        if not self.low <= self.mid <= self.high:
            raise ValueError(
                f"income band must satisfy low <= mid <= high, "
                f"got {self.low} / {self.mid} / {self.high}."
            )
        return self


class TransitionEdge(BaseModel):
    """A known predecessor role and how hard the move from it is.

    ``from_role`` may name a role outside the catalog (e.g. ``"tutor"``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_role: str = Field(validation_alias=AliasChoices("from_role", "from"))
    friction: float

    @field_validator("friction")
    @classmethod
    def validate_friction_range(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"friction must be in [0.0, 1.0], got {v}.")
        return v


class RoleProfile(BaseModel):
    """One catalog entry describing a reference job role.

    Attributes:
        role_id: Unique lowercase identifier, e.g. ``"nurse_rn"``.
        titles: Display titles; the first is the canonical title.
        aliases: Alternate titles, used for postings lookups.
        sector: Industry sector, matched case-insensitively by filters.
        skill_family: Free-text grouping of related roles.
        seniority_bands: Career levels the role hires at.
        skills: Required skills with weights and critical flags.
        tools: Typical tools; informational only.
        work_context: Structural resilience attributes.
        task_vector: The role's own normalized task allocation.
        automation_exposure_baseline: 0–10 exposure estimate.
        compression_overlay: Current market compression.
        income: Annual income band.
        transition_edges: Predecessor roles with friction weights.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    role_id: str
    titles: tuple[str, ...]
    aliases: tuple[str, ...] = ()
    sector: str
    skill_family: Optional[str] = None
    seniority_bands: tuple[str, ...] = ()
    skills: tuple[RoleSkill, ...] = ()
    tools: tuple[str, ...] = ()
    work_context: WorkContext = WorkContext()
    task_vector: TaskVector
    automation_exposure_baseline: float = 5.0
    compression_overlay: CompressionOverlay = CompressionOverlay()
    income: IncomeBand
    transition_edges: tuple[TransitionEdge, ...] = ()

    @field_validator("role_id")
    @classmethod
    def validate_role_id_format(cls, v: str) -> str:
        if not v or " " in v or v != v.lower():
            raise ValueError(f"role_id '{v}' must be lowercase with no spaces.")
        return v

    @field_validator("titles")
    @classmethod
    def validate_titles_not_empty(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        titles = tuple(t.strip() for t in v if t and t.strip())
        if not titles:
            raise ValueError("a role needs at least one title.")
        return titles

    @field_validator("seniority_bands")
    @classmethod
    def validate_seniority_bands(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        bands = tuple(b.strip().lower() for b in v)
        unknown = [b for b in bands if seniority_rank(b) is None]
        if unknown:
            raise ValueError(f"unknown seniority bands: {unknown}.")
        return bands

    @field_validator("task_vector", mode="before")
    @classmethod
    def build_vector(cls, v: Any) -> TaskVector:
        if isinstance(v, TaskVector):
            return v
        return build_task_vector(v)

    @field_validator("automation_exposure_baseline")
    @classmethod
    def validate_exposure_range(cls, v: float) -> float:
        if not 0.0 <= v <= 10.0:
            raise ValueError(
                f"automation_exposure_baseline must be in [0, 10], got {v}."
            )
        return v

    @property
    def title(self) -> str:
        return self.titles[0]

    @property
    def sector_key(self) -> str:
        return self.sector.strip().lower()

    @property
    def critical_skills(self) -> list[RoleSkill]:
        return [s for s in self.skills if s.critical]


def normalize_skill(name: str) -> str:
    """Canonical key for case-insensitive skill matching."""
    return str(name).strip().lower()
