"""
Task vectors: normalized distributions of weekly effort over ``TaskCategory``.

``build_task_vector()`` is the only constructor used by the rest of the
package.  It never raises on content: negatives, NaN, infinities and values
that are not numbers are coerced to 0 before summing, unknown keys are
dropped, and an all-zero input becomes the uniform distribution
(``1 / len(TASK_KEYS)`` per category).

``cosine_similarity()`` is defined over the same fixed key order; with both
vectors non-negative the result lies in [0, 1].  A zero-norm vector has no
direction, so similarity with it is 0.
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from career_vector.taxonomy.task_taxonomy import TASK_KEYS


@dataclass(frozen=True)
class TaskVector:
    """Immutable task distribution, stored in ``TASK_KEYS`` order.

    Attributes:
        values: One weight per ``TASK_KEYS`` entry; sums to 1.
    """

    values: tuple[float, ...]

    def __post_init__(self) -> None:
        if len(self.values) != len(TASK_KEYS):
            raise ValueError(
                f"TaskVector needs {len(TASK_KEYS)} values, got {len(self.values)}."
            )

    def __getitem__(self, key: str) -> float:
        return self.values[TASK_KEYS.index(key)]

    def __iter__(self) -> Iterator[tuple[str, float]]:
        return iter(zip(TASK_KEYS, self.values))

    def as_dict(self) -> dict[str, float]:
        return dict(zip(TASK_KEYS, self.values))

    @property
    def norm(self) -> float:
        return math.sqrt(sum(v * v for v in self.values))


def build_task_vector(weights: Mapping[str, Any] | None = None) -> TaskVector:
    """Normalize raw per-category weights into a ``TaskVector``.

    Args:
        weights: Mapping of category key to hours or relative weight.
            Missing categories count as 0.

    Returns:
        TaskVector whose values sum to 1.
    """
    weights = weights or {}
    raw = [_non_negative(weights.get(key)) for key in TASK_KEYS]
    total = sum(raw)
    if total <= 0:
        uniform = 1.0 / len(TASK_KEYS)
        return TaskVector(values=tuple(uniform for _ in TASK_KEYS))
    return TaskVector(values=tuple(v / total for v in raw))


def cosine_similarity(a: TaskVector, b: TaskVector) -> float:
    """Cosine similarity of two task vectors; 0 when either has zero norm."""
    na = a.norm
    nb = b.norm
    if not na or not nb:
        return 0.0
    dot = sum(x * y for x, y in zip(a.values, b.values))
    return max(0.0, min(1.0, dot / (na * nb)))


# ── Helper ────────────────────────────────────────────────────────────────────

def _non_negative(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number
