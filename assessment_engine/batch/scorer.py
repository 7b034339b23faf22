"""
Batch scoring of respondent tables.

Each row of the input DataFrame is one respondent. Every row is validated;
in strict mode only valid rows are scored, otherwise every row with numeric
answers is scored and the validation errors are carried along (missing
answers then count as 0, see normalization.aggregate_dimension).
"""

import logging
from numbers import Real
from typing import Dict, Any, List, Optional, Sequence

import pandas as pd

from ..data_loading.loaders import question_columns, row_to_responses
from ..scoring.attachment import score_attachment
from ..scoring.big_five import score_big_five
from ..scoring.generic import definition_questions, definition_scale, score_generic
from ..scoring.interpretation import interpret_big_five
from ..scoring.schema import AssessmentResult
from ..scoring.tables import (
    ATTACHMENT_QUESTIONS,
    ATTACHMENT_SCALE,
    ATTACHMENT_STYLE_QUESTIONS,
    BIG_FIVE_DIMENSIONS,
    BIG_FIVE_QUESTIONS,
    BIG_FIVE_SCALE,
    ScaleBounds,
)
from ..scoring.utils import is_assessment_outdated
from ..scoring.validation import validate_responses

logger = logging.getLogger(__name__)


class BatchScorer:
    """
    Validates and scores many respondents of one assessment type.

    Attributes:
        assessment_type: big_five, attachment or custom
        strict: Score only rows that pass validation
        definition: Custom assessment definition (required for custom)
        expected_questions: Question ids the assessment asks
        scale: Response scale bounds
    """

    def __init__(
        self,
        assessment_type: str,
        strict: bool = True,
        definition: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize the batch scorer.

        Args:
            assessment_type: big_five, attachment or custom
            strict: Reject invalid rows instead of scoring them
            definition: Definition from load_assessment_definition() (custom only)

        Raises:
            ValueError: If the assessment type is unknown or a custom
                definition is missing
        """
        self.assessment_type = assessment_type
        self.strict = strict
        self.definition = definition

        if assessment_type == "big_five":
            self.expected_questions: Sequence[str] = BIG_FIVE_QUESTIONS
            self.scale: ScaleBounds = BIG_FIVE_SCALE
        elif assessment_type == "attachment":
            self.expected_questions = ATTACHMENT_QUESTIONS
            self.scale = ATTACHMENT_SCALE
        elif assessment_type == "custom":
            if definition is None:
                raise ValueError("Custom assessments need a definition")
            self.expected_questions = definition_questions(definition)
            self.scale = definition_scale(definition)
        else:
            raise ValueError(f"Unknown assessment type: {assessment_type}")

    def score_row(self, responses: Dict[str, Any]) -> AssessmentResult:
        """
        Score a single respondent.

        Args:
            responses: Question id -> response

        Returns:
            Tagged result for the assessment type
        """
        if self.assessment_type == "big_five":
            scores = score_big_five(responses)
            return scores.to_result(interpret_big_five(scores))
        if self.assessment_type == "attachment":
            return score_attachment(responses).to_result()
        return score_generic(responses, self.definition)

    def score_frame(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Validate and score every respondent in a DataFrame.

        Args:
            df: Responses frame (see load_responses())

        Returns:
            DataFrame with one row per respondent: person_id, is_valid,
            errors, scored, result columns and is_outdated (when the input
            has completed_at)
        """
        logger.info(f"Scoring {len(df)} respondents ({self.assessment_type}, strict={self.strict})")
        answer_columns = question_columns(df)
        rows = []

        for index, row in df.iterrows():
            responses = row_to_responses(row, answer_columns)
            report = validate_responses(responses, self.expected_questions, self.scale)

            record: Dict[str, Any] = {
                "person_id": row["person_id"] if "person_id" in row.index else str(index),
                "is_valid": report.is_valid,
                "errors": "; ".join(report.errors),
                "scored": False,
            }

            if self._should_score(report.is_valid, responses):
                record.update(self._flatten(self.score_row(responses)))
                record["scored"] = True

            if "completed_at" in row.index and not pd.isna(row["completed_at"]):
                try:
                    record["is_outdated"] = is_assessment_outdated(row["completed_at"], self.assessment_type)
                except ValueError:
                    logger.warning(f"Row {record['person_id']}: unreadable completed_at {row['completed_at']!r}")
                    record["is_outdated"] = None
                    message = f"Invalid completed_at: {row['completed_at']}"
                    record["errors"] = f"{record['errors']}; {message}" if record["errors"] else message

            rows.append(record)

        results = pd.DataFrame(rows)
        n_scored = int(results["scored"].sum()) if len(results) else 0
        n_invalid = int((~results["is_valid"]).sum()) if len(results) else 0
        logger.info(f"Scored {n_scored}/{len(results)} respondents, {n_invalid} failed validation")
        return results

    def result_columns(self) -> List[str]:
        """Numeric result columns produced for this assessment type."""
        if self.assessment_type == "attachment":
            return list(ATTACHMENT_STYLE_QUESTIONS.keys())
        if self.assessment_type == "big_five":
            return list(BIG_FIVE_DIMENSIONS)
        return list(self.definition["dimensions"].keys())

    def _should_score(self, is_valid: bool, responses: Dict[str, Any]) -> bool:
        if self.strict:
            return is_valid
        return all(
            isinstance(v, Real) and not isinstance(v, bool)
            for v in responses.values()
        )

    @staticmethod
    def _flatten(result: AssessmentResult) -> Dict[str, Any]:
        """Spread a tagged result over flat DataFrame columns."""
        flat: Dict[str, Any] = {}
        if result.kind == "dimensional":
            flat.update(result.scores)
            for dimension, percentile in result.percentiles.items():
                flat[f"{dimension}_percentile"] = percentile
            for dimension, level in result.interpretations.items():
                flat[f"{dimension}_level"] = level
        elif result.kind == "categorical":
            flat.update(result.category_scores)
            flat["primary_style"] = result.primary_category
            flat["style_confidence"] = result.confidence
        else:
            flat.update(result.raw_scores)
            for dimension, percentile in (result.percentiles or {}).items():
                flat[f"{dimension}_percentile"] = percentile
        return flat
