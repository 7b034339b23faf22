"""
Response validation.

Checks (all violations are collected, nothing short-circuits):
1. Completeness: every expected question has a response
2. Range: every present response lies within the scale
3. Straight-lining: more than 10 responses that are all identical

Validation never raises; callers that need strict behaviour reject on
`is_valid == False` before scoring.
"""

import logging
import math
from numbers import Real
from typing import Any, Mapping, Sequence, Tuple

from .schema import ValidationReport
from .tables import (
    ATTACHMENT_QUESTIONS,
    ATTACHMENT_SCALE,
    BIG_FIVE_QUESTIONS,
    BIG_FIVE_SCALE,
)

logger = logging.getLogger(__name__)

# Straight-line warning needs strictly more responses than this
STRAIGHT_LINE_MIN_RESPONSES = 10

STRAIGHT_LINE_MESSAGE = "All responses are identical - please answer more thoughtfully"


def _format_number(value: Any) -> str:
    """Render 8.0 as '8' and 8.5 as '8.5'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and not math.isnan(value)


def validate_responses(
    responses: Mapping[str, Any],
    expected_questions: Sequence[str],
    scale_range: Tuple[float, float]
) -> ValidationReport:
    """
    Validate responses for completeness, range and answer patterns.

    Args:
        responses: Question id -> response
        expected_questions: Full list of question ids the assessment asks
        scale_range: Inclusive (min, max) of the response scale

    Returns:
        ValidationReport with every violation found
    """
    errors = []
    lo, hi = scale_range

    missing_questions = [q for q in expected_questions if q not in responses]
    if missing_questions:
        errors.append(f"Missing responses for questions: {', '.join(missing_questions)}")

    for question_id, response in responses.items():
        if not _is_number(response) or response < lo or response > hi:
            errors.append(
                f"Invalid response for {question_id}: {_format_number(response)} "
                f"(expected {_format_number(lo)}-{_format_number(hi)})"
            )

    values = list(responses.values())
    if len(values) > STRAIGHT_LINE_MIN_RESPONSES and all(v == values[0] for v in values[1:]):
        errors.append(STRAIGHT_LINE_MESSAGE)

    if errors:
        logger.debug(f"Validation found {len(errors)} issue(s)")

    return ValidationReport(is_valid=len(errors) == 0, errors=errors)


def validate_big_five_responses(responses: Mapping[str, Any]) -> ValidationReport:
    """Validate against the 50 Big Five questions on a 1-5 scale."""
    return validate_responses(responses, BIG_FIVE_QUESTIONS, BIG_FIVE_SCALE)


def validate_attachment_responses(responses: Mapping[str, Any]) -> ValidationReport:
    """Validate against the 30 attachment questions on a 1-7 scale."""
    return validate_responses(responses, ATTACHMENT_QUESTIONS, ATTACHMENT_SCALE)
