"""
Response normalization and dimension aggregation.

Reverse scoring formula: new_value = (scale_max + scale_min) - original_value
For a 1-5 scale: new_value = 6 - original_value

Aggregation is the mean of a group's declared questions after reverse
scoring. A question without a response contributes 0 to the sum but still
counts in the divisor, so incomplete submissions are biased downward.
Run the validator first when that matters.
"""

import logging
from typing import Dict, Iterable, Mapping, Sequence

from .tables import ScaleBounds

logger = logging.getLogger(__name__)


def normalize_responses(
    responses: Mapping[str, float],
    reverse_scored: Iterable[str],
    scale: ScaleBounds
) -> Dict[str, float]:
    """
    Apply reverse scoring to designated questions.

    Only present responses are transformed; missing questions are not
    invented here.

    Args:
        responses: Raw question id -> response mapping
        reverse_scored: Question ids whose responses must be reflected
        scale: Scale bounds (lo, hi) of the assessment

    Returns:
        New mapping with reverse-scored responses reflected
    """
    reverse_set = frozenset(reverse_scored)
    reverse_value = scale.lo + scale.hi

    normalized = {}
    for question_id, response in responses.items():
        if question_id in reverse_set:
            normalized[question_id] = reverse_value - response
        else:
            normalized[question_id] = response

    return normalized


def aggregate_dimension(
    question_ids: Sequence[str],
    responses: Mapping[str, float]
) -> float:
    """
    Average the responses of one question group.

    Args:
        question_ids: Declared question ids of the group
        responses: Normalized responses

    Returns:
        Mean over the full declared group (missing responses count as 0)
    """
    if not question_ids:
        raise ValueError("Cannot aggregate an empty question group")

    # Left-to-right accumulation keeps sums identical to stored results
    total = 0.0
    missing = 0
    for question_id in question_ids:
        if question_id in responses:
            total += responses[question_id]
        else:
            missing += 1

    if missing:
        logger.debug(f"{missing}/{len(question_ids)} questions unanswered, counted as 0")

    return total / len(question_ids)


def aggregate_dimensions(
    question_map: Mapping[str, Sequence[str]],
    responses: Mapping[str, float]
) -> Dict[str, float]:
    """Aggregate every group of a dimension map, keeping the map's order."""
    return {
        dimension: aggregate_dimension(question_ids, responses)
        for dimension, question_ids in question_map.items()
    }
