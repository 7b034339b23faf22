"""
Tests for the erf approximation and percentile estimation.
"""

import numpy as np
import pytest
from scipy import special

from assessment_engine.scoring.percentiles import (
    calculate_percentile,
    calculate_z_score,
    erf,
    normal_cdf,
    round_half_up,
)
from assessment_engine.scoring.tables import BIG_FIVE_DIMENSIONS, BIG_FIVE_NORMS, NormativeStat


class TestErf:
    """Test the Abramowitz-Stegun error function."""

    def test_erf_zero(self):
        """erf(0) is zero up to the approximation error."""
        assert erf(0.0) == pytest.approx(0.0, abs=1e-8)

    @pytest.mark.parametrize("x", [0.1, 0.5, 1.0, 1.7, 2.5, 3.3])
    def test_erf_is_odd(self, x):
        """erf(-x) == -erf(x)."""
        assert erf(-x) == -erf(x)

    def test_erf_tends_to_one(self):
        """Large arguments approach +/-1."""
        assert abs(erf(4.0)) > 0.9999
        assert abs(erf(-4.0)) > 0.9999

    def test_matches_reference_erf(self):
        """Absolute error stays within the published bound."""
        xs = np.linspace(-5, 5, 1001)
        approx = np.array([erf(x) for x in xs])
        assert np.max(np.abs(approx - special.erf(xs))) < 2e-7

    def test_normal_cdf_midpoint(self):
        """CDF at zero is one half."""
        assert normal_cdf(0.0) == pytest.approx(0.5, abs=1e-8)


class TestRoundHalfUp:
    """Test the rounding rule used for percentiles."""

    def test_halves_round_up(self):
        """Halves go up rather than to even."""
        assert round_half_up(2.5) == 3
        assert round_half_up(84.5) == 85

    def test_regular_rounding(self):
        """Non-halves round to nearest."""
        assert round_half_up(84.13) == 84
        assert round_half_up(15.87) == 16


class TestCalculatePercentile:
    """Test percentile estimation."""

    @pytest.mark.parametrize("dimension", BIG_FIVE_DIMENSIONS)
    def test_mean_score_is_fiftieth(self, dimension):
        """A score equal to the population mean maps to 50."""
        assert calculate_percentile(dimension, BIG_FIVE_NORMS[dimension].mean) == 50

    @pytest.mark.parametrize("dimension,score,expected", [
        ("extraversion", 4.2, 84),
        ("neuroticism", 2.1, 16),
        ("conscientiousness", 4.0, 69),
        ("openness", 5.0, 99),
        ("openness", 1.0, 0),
        ("openness", 3.0, 28),
        ("conscientiousness", 3.0, 23),
        ("extraversion", 3.0, 37),
        ("agreeableness", 3.0, 16),
        ("neuroticism", 3.0, 55),
    ])
    def test_pinned_values(self, dimension, score, expected):
        """Known scores keep producing the stored percentiles."""
        assert calculate_percentile(dimension, score) == expected

    @pytest.mark.parametrize("dimension", BIG_FIVE_DIMENSIONS)
    def test_monotonic_in_score(self, dimension):
        """Percentile never decreases as the score rises."""
        scores = np.arange(1.0, 5.0001, 0.01)
        percentiles = [calculate_percentile(dimension, s) for s in scores]
        assert all(b >= a for a, b in zip(percentiles, percentiles[1:]))

    @pytest.mark.parametrize("score", [-10.0, 1.0, 3.0, 5.0, 50.0])
    def test_within_bounds(self, score):
        """Percentiles stay within [0, 100]."""
        assert 0 <= calculate_percentile("openness", score) <= 100

    def test_custom_norms(self):
        """Norms can be supplied for other assessments."""
        norms = {"focus": NormativeStat(mean=10.0, sd=2.0)}
        assert calculate_percentile("focus", 10.0, norms) == 50
        assert calculate_z_score("focus", 14.0, norms) == pytest.approx(2.0)

    def test_unknown_dimension_raises(self):
        """A dimension without norms is a programming error."""
        with pytest.raises(ValueError, match="No normative statistics"):
            calculate_percentile("charisma", 3.0)
