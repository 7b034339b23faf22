"""Deterministic scoring of questionnaire responses."""

from .attachment import classify_attachment, score_attachment
from .big_five import score_big_five
from .compatibility import calculate_compatibility, DEFAULT_COMPATIBILITY
from .generic import score_generic
from .interpretation import classify_level, get_dimension_description, interpret_big_five
from .normalization import aggregate_dimension, aggregate_dimensions, normalize_responses
from .percentiles import calculate_percentile, erf, normal_cdf
from .schema import (
    AssessmentResult,
    AttachmentProfile,
    AttachmentStyle,
    BigFiveScores,
    CategoricalResult,
    CompatibilityJudgment,
    ConfidenceInterval,
    DimensionalResult,
    DimensionInterpretation,
    GenericResult,
    ValidationReport,
)
from .utils import calculate_confidence_interval, compute_expiration_date, is_assessment_outdated
from .validation import (
    validate_attachment_responses,
    validate_big_five_responses,
    validate_responses,
)

__all__ = [
    "classify_attachment",
    "score_attachment",
    "score_big_five",
    "calculate_compatibility",
    "DEFAULT_COMPATIBILITY",
    "score_generic",
    "classify_level",
    "get_dimension_description",
    "interpret_big_five",
    "aggregate_dimension",
    "aggregate_dimensions",
    "normalize_responses",
    "calculate_percentile",
    "erf",
    "normal_cdf",
    "AssessmentResult",
    "AttachmentProfile",
    "AttachmentStyle",
    "BigFiveScores",
    "CategoricalResult",
    "CompatibilityJudgment",
    "ConfidenceInterval",
    "DimensionalResult",
    "DimensionInterpretation",
    "GenericResult",
    "ValidationReport",
    "calculate_confidence_interval",
    "compute_expiration_date",
    "is_assessment_outdated",
    "validate_attachment_responses",
    "validate_big_five_responses",
    "validate_responses",
]
