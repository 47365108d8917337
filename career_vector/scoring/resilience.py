"""
Resilience scoring: how well a role resists automation-driven compression.

    resilience = clamp(
        0.55 * (1 − exposure / 10)      # inverted automation exposure
        + 0.45 * structural             # weighted work-context composite
        - compression_penalty
    , 0, 1)

    structural = 0.30·embodiment + 0.22·liability + 0.18·trust_depth
               + 0.15·real_time_load + 0.15·regulatory

    compression_penalty = 0.35 · clamp(score / 100, 0, 1)
                        + 0.25 · clamp(momentum_60d / 25, 0, 1)

The structural weights sum to 1.00 but are not required to; unpredictability
carries no weight.  Resilience is non-increasing in exposure with everything
else held fixed.
"""

from __future__ import annotations

from dataclasses import dataclass

from career_vector.models.role import CompressionOverlay, RoleProfile, WorkContext

W_EXPOSURE = 0.55
W_STRUCTURAL = 0.45

STRUCTURAL_WEIGHTS: dict[str, float] = {
    "embodiment":       0.30,
    "liability":        0.22,
    "trust_depth":      0.18,
    "real_time_load":   0.15,
    "regulatory":       0.15,
    "unpredictability": 0.00,
}

W_COMPRESSION = 0.35
W_MOMENTUM = 0.25
MOMENTUM_SCALE = 25.0


@dataclass(frozen=True)
class ResilienceComponents:
    """All components of a resilience score.

    Attributes:
        inverted_exposure:    1 − exposure / 10, in [0, 1].
        structural:           Weighted work-context composite.
        compression_penalty:  Pressure + momentum penalty in [0, 0.60].
    """

    inverted_exposure: float
    structural: float
    compression_penalty: float

    @property
    def score(self) -> float:
        return _clamp(
            W_EXPOSURE * self.inverted_exposure
            + W_STRUCTURAL * self.structural
            - self.compression_penalty,
            0.0,
            1.0,
        )


def structural_composite(context: WorkContext) -> float:
    return sum(getattr(context, attr) * w for attr, w in STRUCTURAL_WEIGHTS.items())


def compression_penalty(overlay: CompressionOverlay) -> float:
    pressure = _clamp(overlay.score / 100.0, 0.0, 1.0)
    momentum = _clamp(overlay.momentum_60d / MOMENTUM_SCALE, 0.0, 1.0)
    return W_COMPRESSION * pressure + W_MOMENTUM * momentum


def compute_resilience(role: RoleProfile) -> ResilienceComponents:
    """Compute all resilience components for one role."""
    exposure = _clamp(role.automation_exposure_baseline, 0.0, 10.0)
    return ResilienceComponents(
        inverted_exposure=1.0 - exposure / 10.0,
        structural=structural_composite(role.work_context),
        compression_penalty=compression_penalty(role.compression_overlay),
    )


# ── Helper ────────────────────────────────────────────────────────────────────

def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
