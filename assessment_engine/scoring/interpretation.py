"""
Qualitative interpretation of Big Five dimension scores.

Bands are evaluated on the raw 1-5 score (not the percentile), first match
wins:

    score < 2.0  -> very_low
    score < 2.8  -> low
    score < 3.7  -> average
    score < 4.5  -> high
    otherwise    -> very_high
"""

from types import MappingProxyType
from typing import Dict, Mapping, Tuple

from .schema import BigFiveScores, DimensionInterpretation
from .tables import BIG_FIVE_DIMENSIONS

LEVELS: Tuple[str, ...] = ("very_low", "low", "average", "high", "very_high")

# Upper (exclusive) bound of every band but the last
LEVEL_THRESHOLDS: Tuple[Tuple[float, str], ...] = (
    (2.0, "very_low"),
    (2.8, "low"),
    (3.7, "average"),
    (4.5, "high"),
)

NO_DESCRIPTION = "No description available"

DIMENSION_DESCRIPTIONS: Mapping[str, Mapping[str, str]] = MappingProxyType({
    "openness": MappingProxyType({
        "very_low": "Very practical and conventional. Prefers familiar experiences and traditional approaches.",
        "low": "Generally practical with some openness to new experiences when necessary.",
        "average": "Balanced between practical and creative approaches. Open to some new experiences.",
        "high": "Creative and curious. Enjoys exploring new ideas and experiences.",
        "very_high": "Highly imaginative and intellectually curious. Constantly seeks novel experiences and abstract ideas.",
    }),
    "conscientiousness": MappingProxyType({
        "very_low": "Very spontaneous and flexible. May struggle with organization and follow-through.",
        "low": "Somewhat disorganized but adaptable. Prefers flexibility over rigid planning.",
        "average": "Generally organized with some flexibility. Balances planning with spontaneity.",
        "high": "Well-organized and reliable. Good at following through on commitments.",
        "very_high": "Extremely organized and disciplined. May be seen as perfectionist or rigid.",
    }),
    "extraversion": MappingProxyType({
        "very_low": "Very introverted. Strongly prefers solitude and quiet environments.",
        "low": "Generally quiet and reserved. Comfortable in small groups or alone.",
        "average": "Balanced between social and solitary activities. Comfortable in various social settings.",
        "high": "Outgoing and energetic. Enjoys social interaction and group activities.",
        "very_high": "Extremely sociable and assertive. Thrives on social interaction and attention.",
    }),
    "agreeableness": MappingProxyType({
        "very_low": "Very competitive and skeptical. May appear blunt or unsympathetic.",
        "low": "Somewhat competitive. Values honesty over harmony in interactions.",
        "average": "Generally cooperative with some assertiveness when needed.",
        "high": "Cooperative and trusting. Values harmony and helping others.",
        "very_high": "Extremely cooperative and empathetic. May have difficulty asserting own needs.",
    }),
    "neuroticism": MappingProxyType({
        "very_low": "Exceptionally calm and emotionally stable. Rarely experiences stress or negative emotions.",
        "low": "Generally calm and resilient. Handles stress well most of the time.",
        "average": "Experiences normal range of emotions. Generally stable with occasional stress.",
        "high": "Somewhat prone to worry and emotional reactions. May need stress management strategies.",
        "very_high": "Highly sensitive to stress and prone to anxiety. May benefit from emotional support strategies.",
    }),
})


def classify_level(score: float) -> str:
    """Map a raw 1-5 score to one of the five qualitative bands."""
    for upper, level in LEVEL_THRESHOLDS:
        if score < upper:
            return level
    return "very_high"


def get_dimension_description(dimension: str, level: str) -> str:
    """Look up the canned description, falling back for unknown combinations."""
    return DIMENSION_DESCRIPTIONS.get(dimension, {}).get(level, NO_DESCRIPTION)


def interpret_score(dimension: str, score: float, percentile: int) -> DimensionInterpretation:
    """Interpret a single dimension score."""
    level = classify_level(score)
    return DimensionInterpretation(
        score=score,
        percentile=percentile,
        level=level,
        description=get_dimension_description(dimension, level)
    )


def interpret_big_five(scores: BigFiveScores) -> Dict[str, DimensionInterpretation]:
    """
    Interpret all five dimensions of a Big Five result.

    Args:
        scores: Output of score_big_five()

    Returns:
        Dict of dimension -> DimensionInterpretation, in declared order
    """
    dimension_scores = scores.dimension_scores()
    return {
        dimension: interpret_score(
            dimension,
            dimension_scores[dimension],
            scores.percentiles[dimension]
        )
        for dimension in BIG_FIVE_DIMENSIONS
    }
