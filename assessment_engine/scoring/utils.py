"""
Statistical and temporal helpers used alongside scoring.
"""

import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from .schema import ConfidenceInterval
from .tables import ASSESSMENT_EXPIRATION_DAYS, DEFAULT_EXPIRATION_DAYS

logger = logging.getLogger(__name__)

DateLike = Union[str, datetime]

Z_95 = 1.96
Z_90 = 1.645

SECONDS_PER_DAY = 24 * 3600


def calculate_confidence_interval(
    score: float,
    sample_size: int,
    confidence_level: float = 0.95
) -> ConfidenceInterval:
    """
    Wald confidence interval for a score expressed as a proportion.

    Only the 95% level is recognised; any other level uses the 90% z-value.

    Args:
        score: Proportion in [0, 1]
        sample_size: Number of observations behind the score
        confidence_level: 0.95 or anything else (treated as 0.90)

    Returns:
        ConfidenceInterval with bounds clamped to [0, 1]. A non-positive
        sample size or a score outside [0, 1] has no defined interval and
        gives NaN for every field.
    """
    variance = score * (1 - score)
    if sample_size <= 0 or variance < 0:
        logger.warning(f"No confidence interval for score={score}, sample_size={sample_size}")
        return ConfidenceInterval(lower=math.nan, upper=math.nan, margin=math.nan)

    z_score = Z_95 if confidence_level == 0.95 else Z_90
    standard_error = math.sqrt(variance / sample_size)
    margin = z_score * standard_error

    return ConfidenceInterval(
        lower=max(0.0, score - margin),
        upper=min(1.0, score + margin),
        margin=margin
    )


def parse_completed_date(completed_date: DateLike) -> datetime:
    """Parse an ISO-8601 timestamp; a trailing 'Z' means UTC."""
    if isinstance(completed_date, datetime):
        return completed_date
    text = completed_date.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def get_expiration_days(assessment_type: str) -> int:
    """Days a result stays current; unknown types get the default."""
    return ASSESSMENT_EXPIRATION_DAYS.get(assessment_type, DEFAULT_EXPIRATION_DAYS)


def _now_like(reference: datetime) -> datetime:
    if reference.tzinfo is None:
        return datetime.now()
    return datetime.now(timezone.utc)


def is_assessment_outdated(
    completed_date: DateLike,
    assessment_type: str,
    now: Optional[datetime] = None
) -> bool:
    """
    Check whether a result is too old and should be retaken.

    Args:
        completed_date: When the assessment was completed
        assessment_type: e.g. big_five, attachment, mbti
        now: Reference time (defaults to the current time). When only one
            of now and completed_date carries a timezone, the naive one is
            read as UTC.

    Returns:
        True iff elapsed days exceed the type's expiration
    """
    completed = parse_completed_date(completed_date)
    if now is None:
        now = _now_like(completed)
    elif completed.tzinfo is None and now.tzinfo is not None:
        completed = completed.replace(tzinfo=timezone.utc)
    elif completed.tzinfo is not None and now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    days_difference = (now - completed).total_seconds() / SECONDS_PER_DAY
    return days_difference > get_expiration_days(assessment_type)


def compute_expiration_date(completed_date: DateLike, assessment_type: str) -> datetime:
    """Point in time after which a result counts as outdated."""
    completed = parse_completed_date(completed_date)
    return completed + timedelta(days=get_expiration_days(assessment_type))
