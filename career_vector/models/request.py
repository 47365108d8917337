"""
Recommendation request model — the validation boundary.

Structurally invalid payloads (wrong types, slider or retrain willingness
outside [0, 1], negative salaries, a ceiling below the floor) are rejected
here with ``pydantic.ValidationError``.  A field sent as ``null`` is treated as
omitted and takes its default; a ``null`` task weight counts as 0.  Anything
that passes is handed to the engine, which never raises on content and fills
remaining gaps with neutral defaults.

The JSON wire format is camelCase (``acceptableSectors``, ``salaryMin``);
snake_case field names are accepted too.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel

from career_vector.models.role import normalize_skill
from career_vector.taxonomy.task_taxonomy import DEFAULT_TIMELINE


def _without_nulls(data: Any) -> Any:
    """Drop ``null`` fields so they take their defaults, as if omitted."""
    if not isinstance(data, dict):
        return data
    return {k: v for k, v in data.items() if v is not None}


class UserConstraints(BaseModel):
    """Hard and soft constraints on a move.

    Attributes:
        salary_min: Salary floor; ``None`` or 0 means no floor.
        salary_max: Salary ceiling; ``None`` or 0 means no ceiling.
        timeline: Timeline bucket such as ``"0-3"`` or ``"6-12 months"``.
        retrain_willingness: 0 = unwilling to retrain, 1 = fully willing.
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    timeline: str = DEFAULT_TIMELINE
    retrain_willingness: float = 0.5

    @model_validator(mode="before")
    @classmethod
    def drop_null_fields(cls, data: Any) -> Any:
        return _without_nulls(data)

    @field_validator("salary_min", "salary_max")
    @classmethod
    def validate_salary_non_negative(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v < 0:
            raise ValueError(f"salary bounds must be non-negative, got {v}.")
        return v

    @field_validator("timeline", mode="before")
    @classmethod
    def default_blank_timeline(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return DEFAULT_TIMELINE
        return v

    @field_validator("retrain_willingness")
    @classmethod
    def validate_retrain_range(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"retrainWillingness must be in [0.0, 1.0], got {v}.")
        return v

    @model_validator(mode="after")
    def validate_salary_order(self) -> "UserConstraints":
        if self.salary_min and self.salary_max and self.salary_max < self.salary_min:
            raise ValueError(
                f"salaryMax ({self.salary_max}) must be >= salaryMin ({self.salary_min})."
            )
        return self

    @property
    def floor(self) -> float:
        return self.salary_min or 0.0

    @property
    def ceiling(self) -> float:
        return self.salary_max or 0.0


class RecommendationRequest(BaseModel):
    """Everything the engine needs about one user.

    Attributes:
        seniority: Career level on the ``Seniority`` scale; blank if unknown.
        skills: Free-text skill names; ``{"name": ...}`` objects are accepted.
        acceptable_sectors: If non-empty, only these sectors are considered.
        avoid_sectors: Sectors never recommended; wins over acceptable.
        task_weights: Raw hours or weights per task category.
        stability_vs_upside: 0 favors economics, 1 favors resilience and ease.
        constraints: Salary, timeline and retraining constraints.
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    seniority: str = ""
    skills: list[str] = []
    acceptable_sectors: list[str] = []
    avoid_sectors: list[str] = []
    task_weights: dict[str, Optional[float]] = {}
    stability_vs_upside: float = 0.6
    constraints: UserConstraints = UserConstraints()

    @model_validator(mode="before")
    @classmethod
    def drop_null_fields(cls, data: Any) -> Any:
        return _without_nulls(data)

    @field_validator("skills", mode="before")
    @classmethod
    def flatten_skill_objects(cls, v: Any) -> Any:
        if not isinstance(v, list):
            return v
        names = []
        for item in v:
            if isinstance(item, dict):
                item = item.get("name")
            if item is None:
                continue
            names.append(item)
        return names

    @field_validator("stability_vs_upside")
    @classmethod
    def validate_slider_range(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"stabilityVsUpside must be in [0.0, 1.0], got {v}.")
        return v

    @property
    def skill_keys(self) -> frozenset[str]:
        return frozenset(normalize_skill(s) for s in self.skills if s and s.strip())

    @property
    def avoid_keys(self) -> frozenset[str]:
        return frozenset(s.strip().lower() for s in self.avoid_sectors if s.strip())

    @property
    def accept_keys(self) -> frozenset[str]:
        return frozenset(
            s.strip().lower() for s in self.acceptable_sectors if s.strip()
        )

