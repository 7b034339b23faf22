"""
Tests for cohort evaluation metrics.
"""

import json

import numpy as np
import pandas as pd
import pytest

from assessment_engine.batch import BatchScorer
from assessment_engine.evaluation import (
    compute_score_distribution_stats,
    create_evaluation_report,
    sanity_check_monotonicity,
)
from assessment_engine.scoring.percentiles import calculate_percentile


class TestDistributionStats:
    """Test score distribution statistics."""

    def test_basic_stats(self):
        """Mean, spread and quantiles of a simple sample."""
        stats = compute_score_distribution_stats(np.array([1.0, 2.0, 3.0, 4.0, 5.0]))
        assert stats.mean == pytest.approx(3.0)
        assert stats.std == pytest.approx(np.sqrt(2.0))
        assert stats.min == 1.0
        assert stats.max == 5.0
        assert stats.quantiles["p50"] == pytest.approx(3.0)
        assert set(stats.quantiles) == {"p10", "p25", "p50", "p75", "p90"}

    def test_custom_quantiles(self):
        """Quantile keys follow the requested levels."""
        stats = compute_score_distribution_stats(np.array([1.0, 2.0, 3.0]), quantiles=[0.5])
        assert stats.quantiles == {"p50": 2.0}


class TestMonotonicity:
    """Test the percentile monotonicity check."""

    def test_monotonic(self):
        """Rising percentiles pass."""
        check = sanity_check_monotonicity(np.array([10, 20, 30]), np.array([1.0, 2.0, 3.0]))
        assert check.is_monotonic
        assert check.n_violations == 0
        assert check.correlation_with_score == pytest.approx(1.0)

    def test_violation(self):
        """A percentile drop against a rising score is counted."""
        check = sanity_check_monotonicity(np.array([10, 30, 20]), np.array([1.0, 2.0, 3.0]))
        assert not check.is_monotonic
        assert check.n_violations == 1
        assert check.violation_rate == pytest.approx(0.5)

    def test_constant_scores(self):
        """A single distinct score is trivially monotonic."""
        check = sanity_check_monotonicity(np.array([50, 50]), np.array([3.0, 3.0]))
        assert check.is_monotonic
        assert check.violation_rate == 0.0

    def test_tied_percentiles_still_monotonic(self):
        """Close scores sharing a rounded percentile are not a violation."""
        scores = np.array([3.3, 3.31, 3.32, 3.4])
        percentiles = np.array([calculate_percentile("extraversion", s) for s in scores])
        assert percentiles.tolist() == [50, 50, 51, 54]

        check = sanity_check_monotonicity(percentiles, scores)
        assert check.correlation_with_score < 1.0
        assert check.n_violations == 0
        assert check.is_monotonic


class TestEvaluationReport:
    """Test report assembly from batch output."""

    def test_big_five_report(self, big_five_frame, tmp_path):
        """Counts, per-dimension stats and JSON output."""
        scorer = BatchScorer("big_five")
        results = scorer.score_frame(big_five_frame)
        report = create_evaluation_report("big_five", results, scorer.result_columns())

        assert report.n_respondents == 3
        assert report.n_scored == 1
        assert report.n_invalid == 2
        assert report.invalid_rate == pytest.approx(2 / 3)
        assert set(report.distribution_stats) == set(scorer.result_columns())
        assert report.monotonicity_checks["openness"].is_monotonic

        path = tmp_path / "report.json"
        report.save(str(path))
        saved = json.loads(path.read_text())
        assert saved["n_scored"] == 1
        assert "openness" in saved["distribution_stats"]
        assert "Evaluation Report: big_five" in report.summary()

    def test_lenient_big_five_is_monotonic(self, big_five_frame):
        """Percentiles rise with scores across a scored cohort."""
        scorer = BatchScorer("big_five", strict=False)
        results = scorer.score_frame(big_five_frame)
        report = create_evaluation_report("big_five", results, scorer.result_columns())

        for check in report.monotonicity_checks.values():
            assert check.n_violations == 0

    def test_no_scored_rows(self, big_five_frame):
        """A cohort with nothing scored still reports counts."""
        results = BatchScorer("big_five").score_frame(big_five_frame.iloc[1:])
        report = create_evaluation_report("big_five", results, ["openness"])
        assert report.n_scored == 0
        assert report.distribution_stats == {}

    def test_category_counts(self):
        """Categorical runs count primary styles."""
        results = pd.DataFrame([
            {"person_id": "a", "is_valid": True, "scored": True, "secure": 6.0, "primary_style": "secure"},
            {"person_id": "b", "is_valid": True, "scored": True, "secure": 5.0, "primary_style": "secure"},
            {"person_id": "c", "is_valid": True, "scored": True, "secure": 2.0, "primary_style": "fearful_avoidant"},
            {"person_id": "d", "is_valid": False, "scored": False, "secure": np.nan, "primary_style": None},
        ])
        report = create_evaluation_report("attachment", results, ["secure", "anxious_preoccupied"])

        assert report.category_counts == {"secure": 2, "fearful_avoidant": 1}
        assert list(report.distribution_stats) == ["secure"]
        assert report.monotonicity_checks == {}
        assert report.to_dict()["category_counts"] == {"secure": 2, "fearful_avoidant": 1}
