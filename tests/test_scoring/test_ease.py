"""
Tests for career_vector/scoring/ease.py.

What we test
------------
timeline_factor():
  - Substring matching of "0-3", "3-6", "6-12"; anything else → 0.75.

compute_ease():
  - Follows the weighted formula.
  - Each missing critical skill costs 0.14, capped at 0.70.
  - Clamped to [0, 1].

classify_difficulty():
  - Low at >= 0.70, Medium at >= 0.50, High below.
"""

from __future__ import annotations

import pytest

from career_vector.scoring.ease import (
    classify_difficulty,
    compute_ease,
    missing_critical_penalty,
    timeline_factor,
)


class TestTimelineFactor:
    @pytest.mark.parametrize(
        "timeline,expected",
        [
            ("0-3", 0.25),
            ("0-3 months", 0.25),
            ("3-6", 0.45),
            ("6-12", 0.65),
            ("12+", 0.75),
            ("someday", 0.75),
            ("", 0.75),
            (None, 0.75),
        ],
    )
    def test_buckets(self, timeline, expected):
        assert timeline_factor(timeline) == pytest.approx(expected)


class TestComputeEase:
    def test_defaults(self):
        # 0.75·0.65 + 0.25·0.5
        assert compute_ease(0, 0.5, "6-12") == pytest.approx(0.6125)

    def test_three_missing_critical(self):
        base = compute_ease(0, 0.5, "6-12")
        gapped = compute_ease(3, 0.5, "6-12")
        assert base - gapped == pytest.approx(0.42)
        assert gapped == pytest.approx(0.1925)

    def test_penalty_cap(self):
        assert missing_critical_penalty(6) == pytest.approx(0.70)
        assert missing_critical_penalty(-1) == 0.0

    def test_clamped_at_zero(self):
        assert compute_ease(6, 0.0, "0-3") == 0.0

    def test_longest_timeline_full_retrain(self):
        assert compute_ease(0, 1.0, "12+") == pytest.approx(0.8125)

    def test_more_gaps_never_easier(self):
        values = [compute_ease(n, 0.5, "3-6") for n in range(8)]
        assert values == sorted(values, reverse=True)


class TestClassifyDifficulty:
    @pytest.mark.parametrize(
        "ease,expected",
        [(0.95, "Low"), (0.70, "Low"), (0.69, "Medium"), (0.50, "Medium"),
         (0.49, "High"), (0.0, "High")],
    )
    def test_thresholds(self, ease, expected):
        assert classify_difficulty(ease) == expected
