"""
Tests for custom assessment scoring and result records.
"""

import pytest

from assessment_engine.scoring.generic import (
    definition_questions,
    definition_reverse_scored,
    score_generic,
)
from assessment_engine.scoring.schema import CategoricalResult, GenericResult


class TestScoreGeneric:
    """Test definition-driven scoring."""

    def test_reverse_scoring_and_percentiles(self, team_fit_definition):
        """Definitions drive reverse scoring, aggregation and norms."""
        responses = {"c1": 5, "c2": 1, "c3": 5, "c4": 1, "a1": 3, "a2": 3, "a3": 3, "a4": 3}
        result = score_generic(responses, team_fit_definition)

        assert result.kind == "generic"
        assert result.assessment_type == "team_fit"
        assert result.raw_scores == {"collaboration": 5.0, "autonomy": 3.0}
        assert result.percentiles == {"collaboration": 98, "autonomy": 45}

    def test_without_norms(self, team_fit_definition):
        """No norms means no percentiles."""
        definition = dict(team_fit_definition)
        del definition["norms"]
        result = score_generic({"c1": 4}, definition)

        assert result.percentiles is None
        assert result.raw_scores["collaboration"] == pytest.approx(1.0)
        assert result.to_assessment_scores() == {
            "raw_scores": {"collaboration": 1.0, "autonomy": 0.0}
        }

    def test_definition_helpers(self, team_fit_definition):
        """Question and reverse lists follow declared order."""
        assert definition_questions(team_fit_definition) == ["c1", "c2", "c3", "c4", "a1", "a2", "a3", "a4"]
        assert definition_reverse_scored(team_fit_definition) == ["c2", "c4", "a3"]


class TestResultRecords:
    """Test flattening into the stored record shape."""

    def test_generic_record_with_percentiles(self):
        """Generic results store raw scores and percentiles."""
        result = GenericResult(assessment_type="x", raw_scores={"a": 2.0}, percentiles={"a": 40})
        assert result.to_assessment_scores() == {"raw_scores": {"a": 2.0}, "percentiles": {"a": 40}}

    def test_non_attachment_categorical_record(self):
        """Other categorical results fall back to raw scores."""
        result = CategoricalResult(
            assessment_type="disc",
            category_scores={"dominance": 4.0, "influence": 2.0},
            primary_category="dominance",
            confidence=0.3,
        )
        record = result.to_assessment_scores()
        assert record["raw_scores"] == {"dominance": 4.0, "influence": 2.0}
        assert record["interpretations"] == {"primary_category": "dominance"}
