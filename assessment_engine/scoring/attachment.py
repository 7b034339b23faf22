"""
Attachment style classification.

The primary style is the category with the highest mean score. Ties keep
the declared order (secure, anxious_preoccupied, dismissive_avoidant,
fearful_avoidant) because the sort is stable.

Confidence Formula:
    confidence = clamp((top - second) / 7, 0, 1)

The divisor is the scale's upper bound (7), not its span (6). Stored
confidence values depend on it.
"""

import logging
from typing import Mapping, Tuple

from .normalization import aggregate_dimensions
from .schema import AttachmentProfile, AttachmentStyle
from .tables import ATTACHMENT_CONFIDENCE_DIVISOR, ATTACHMENT_STYLE_QUESTIONS

logger = logging.getLogger(__name__)


def classify_attachment(category_scores: Mapping[str, float]) -> Tuple[AttachmentStyle, float]:
    """
    Pick the dominant attachment style and the confidence margin.

    Args:
        category_scores: Category name -> mean score for all four categories

    Returns:
        Tuple of (primary style, confidence in [0, 1])
    """
    ranked = [(style, category_scores[style.value]) for style in AttachmentStyle]
    ranked.sort(key=lambda item: item[1], reverse=True)

    top_score = ranked[0][1]
    second_score = ranked[1][1]
    confidence = min(max((top_score - second_score) / ATTACHMENT_CONFIDENCE_DIVISOR, 0.0), 1.0)

    return ranked[0][0], confidence


def score_attachment(responses: Mapping[str, float]) -> AttachmentProfile:
    """
    Score an attachment questionnaire.

    Args:
        responses: Question id (q1..q30) -> response on a 1-7 scale

    Returns:
        AttachmentProfile with category scores, primary style and confidence
    """
    category_scores = aggregate_dimensions(ATTACHMENT_STYLE_QUESTIONS, responses)
    primary_style, confidence = classify_attachment(category_scores)

    logger.debug(f"Primary attachment style {primary_style.value} (confidence={confidence:.3f})")
    return AttachmentProfile(
        secure=category_scores["secure"],
        anxious_preoccupied=category_scores["anxious_preoccupied"],
        dismissive_avoidant=category_scores["dismissive_avoidant"],
        fearful_avoidant=category_scores["fearful_avoidant"],
        primary_style=primary_style,
        style_confidence=confidence
    )
