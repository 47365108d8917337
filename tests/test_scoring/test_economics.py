"""
Tests for career_vector/scoring/economics.py.

What we test
------------
  - No floor and no ceiling → neutral 0.60.
  - Target equal to the band → 1.0; wider target measured from its floor.
  - Partial overlap measured against the clipped span.
  - Floor-only target: open ceiling does not dilute the overlap.
  - Midpoint below the floor adds a shortfall penalty.
  - Band entirely below the floor → 0.
  - below_floor_shortfall() edge cases.
"""

from __future__ import annotations

import pytest

from career_vector.models.role import IncomeBand
from career_vector.scoring.economics import below_floor_shortfall, compute_economics

BAND = IncomeBand(low=50_000, mid=70_000, high=90_000)


class TestComputeEconomics:
    @pytest.mark.parametrize("lo,hi", [(None, None), (0, 0), (None, 0)])
    def test_neutral_without_bounds(self, lo, hi):
        assert compute_economics(BAND, lo, hi) == pytest.approx(0.60)

    def test_target_matching_band_exactly(self):
        assert compute_economics(BAND, 50_000, 90_000) == pytest.approx(1.0)

    def test_band_inside_wider_target(self):
        # overlap 50k..90k = 40k; span runs from the lower floor: 40k..90k = 50k
        assert compute_economics(BAND, 40_000, 120_000) == pytest.approx(0.8)

    def test_partial_overlap(self):
        # overlap 60k..90k = 30k; span 50k..90k = 40k
        assert compute_economics(BAND, 60_000, 100_000) == pytest.approx(0.75)

    def test_floor_only_with_shortfall(self):
        # overlap 10k / span 40k = 0.25; shortfall (80k − 70k) / 80k = 0.125
        assert compute_economics(BAND, 80_000, None) == pytest.approx(
            0.25 - 0.35 * 0.125
        )

    def test_ceiling_only(self):
        # overlap 50k..60k = 10k; span 0..60k = 60k
        assert compute_economics(BAND, None, 60_000) == pytest.approx(10 / 60)

    def test_band_below_floor(self):
        assert compute_economics(BAND, 100_000, None) == 0.0

    def test_bounded(self):
        for lo, hi in [(1, 2), (10_000, 1_000_000), (89_999, 90_001)]:
            assert 0.0 <= compute_economics(BAND, lo, hi) <= 1.0


class TestShortfall:
    def test_no_floor(self):
        assert below_floor_shortfall(70_000, 0) == 0.0

    def test_mid_above_floor(self):
        assert below_floor_shortfall(70_000, 60_000) == 0.0

    def test_fraction_of_floor(self):
        assert below_floor_shortfall(50_000, 100_000) == pytest.approx(0.5)
