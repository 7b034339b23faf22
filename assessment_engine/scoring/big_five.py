"""
Big Five scoring.

Pipeline: raw responses -> reverse scoring -> per-dimension mean ->
normative percentile.
"""

import logging
from typing import Mapping

from .normalization import aggregate_dimensions, normalize_responses
from .percentiles import calculate_percentile
from .schema import BigFiveScores
from .tables import (
    BIG_FIVE_DIMENSION_QUESTIONS,
    BIG_FIVE_DIMENSIONS,
    BIG_FIVE_NORMS,
    BIG_FIVE_REVERSE_SCORED,
    BIG_FIVE_SCALE,
)

logger = logging.getLogger(__name__)


def score_big_five(responses: Mapping[str, float]) -> BigFiveScores:
    """
    Score a Big Five questionnaire.

    Args:
        responses: Question id (q1..q50) -> response on a 1-5 scale

    Returns:
        BigFiveScores with five dimension means and their percentiles
    """
    adjusted = normalize_responses(responses, BIG_FIVE_REVERSE_SCORED, BIG_FIVE_SCALE)
    dimension_scores = aggregate_dimensions(BIG_FIVE_DIMENSION_QUESTIONS, adjusted)

    percentiles = {
        dimension: calculate_percentile(dimension, dimension_scores[dimension], BIG_FIVE_NORMS)
        for dimension in BIG_FIVE_DIMENSIONS
    }

    logger.debug(f"Scored Big Five from {len(responses)} responses")
    return BigFiveScores(
        openness=dimension_scores["openness"],
        conscientiousness=dimension_scores["conscientiousness"],
        extraversion=dimension_scores["extraversion"],
        agreeableness=dimension_scores["agreeableness"],
        neuroticism=dimension_scores["neuroticism"],
        percentiles=percentiles
    )
