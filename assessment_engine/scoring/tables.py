"""
Static lookup tables for assessment scoring.

These tables are part of the scoring contract: every stored result was
computed against them, so changing a question map, the reverse-scored set
or the normative statistics changes the meaning of past percentiles.
Bump TABLES_VERSION whenever any of them changes.

All tables are read-only (MappingProxyType, tuples, frozensets).
"""

from types import MappingProxyType
from typing import Mapping, NamedTuple, Tuple

TABLES_VERSION = "1.0.0"


class ScaleBounds(NamedTuple):
    """Inclusive response scale of an assessment."""
    lo: float
    hi: float


class NormativeStat(NamedTuple):
    """Population mean and standard deviation for one dimension."""
    mean: float
    sd: float


# =============================================================================
# Big Five (IPIP-50 style, 1-5 Likert)
# =============================================================================

BIG_FIVE_SCALE = ScaleBounds(1, 5)

# Declared dimension order, also the order results are reported in
BIG_FIVE_DIMENSIONS: Tuple[str, ...] = (
    "openness",
    "conscientiousness",
    "extraversion",
    "agreeableness",
    "neuroticism",
)

BIG_FIVE_DIMENSION_QUESTIONS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "extraversion": ("q1", "q6", "q11", "q16", "q21", "q26", "q31", "q36", "q41", "q46"),
    "agreeableness": ("q2", "q7", "q12", "q17", "q22", "q27", "q32", "q37", "q42", "q47"),
    "conscientiousness": ("q3", "q8", "q13", "q18", "q23", "q28", "q33", "q38", "q43", "q48"),
    "neuroticism": ("q4", "q9", "q14", "q19", "q24", "q29", "q34", "q39", "q44", "q49"),
    "openness": ("q5", "q10", "q15", "q20", "q25", "q30", "q35", "q40", "q45", "q50"),
})

BIG_FIVE_REVERSE_SCORED = frozenset({
    "q2", "q6", "q8", "q9", "q10", "q12", "q16", "q18", "q19", "q20",
    "q22", "q26", "q28", "q30", "q32", "q36", "q38", "q46",
})

# Normative data for percentile calculation
BIG_FIVE_NORMS: Mapping[str, NormativeStat] = MappingProxyType({
    "openness": NormativeStat(mean=3.4, sd=0.7),
    "conscientiousness": NormativeStat(mean=3.6, sd=0.8),
    "extraversion": NormativeStat(mean=3.3, sd=0.9),
    "agreeableness": NormativeStat(mean=3.7, sd=0.7),
    "neuroticism": NormativeStat(mean=2.9, sd=0.8),
})


# =============================================================================
# Attachment styles (1-7 Likert)
# =============================================================================

ATTACHMENT_SCALE = ScaleBounds(1, 7)

# Declared order doubles as the tie-break order for classification
ATTACHMENT_STYLE_QUESTIONS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "secure": ("q1", "q5", "q9", "q13", "q17", "q21", "q25", "q29"),
    "anxious_preoccupied": ("q2", "q6", "q10", "q14", "q18", "q22", "q26", "q30"),
    "dismissive_avoidant": ("q3", "q7", "q11", "q15", "q19", "q23", "q27"),
    "fearful_avoidant": ("q4", "q8", "q12", "q16", "q20", "q24", "q28"),
})

# Confidence divisor: the scale's upper bound, not its span
ATTACHMENT_CONFIDENCE_DIVISOR = 7


# =============================================================================
# Staleness
# =============================================================================

ASSESSMENT_EXPIRATION_DAYS: Mapping[str, int] = MappingProxyType({
    "big_five": 365,
    "attachment": 180,
    "mbti": 730,
    "enneagram": 365,
    "disc": 180,
    "emotional_intelligence": 365,
})

DEFAULT_EXPIRATION_DAYS = 365


def expected_questions(question_map: Mapping[str, Tuple[str, ...]]) -> Tuple[str, ...]:
    """Flatten a dimension -> question-id map into the full expected id list."""
    ids = []
    for items in question_map.values():
        ids.extend(items)
    return tuple(ids)


BIG_FIVE_QUESTIONS = expected_questions(BIG_FIVE_DIMENSION_QUESTIONS)
ATTACHMENT_QUESTIONS = expected_questions(ATTACHMENT_STYLE_QUESTIONS)
