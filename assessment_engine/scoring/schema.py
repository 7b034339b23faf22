"""
Result types for assessment scoring.

Every scoring operation returns one of these immutable values. The three
result variants (DimensionalResult, CategoricalResult, GenericResult) carry
a `kind` tag and flatten into the stored assessment-scores record through
to_assessment_scores().
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union


class AttachmentStyle(Enum):
    """Attachment style categories, in declared (tie-break) order."""
    SECURE = "secure"
    ANXIOUS_PREOCCUPIED = "anxious_preoccupied"
    DISMISSIVE_AVOIDANT = "dismissive_avoidant"
    FEARFUL_AVOIDANT = "fearful_avoidant"


@dataclass(frozen=True)
class DimensionInterpretation:
    """
    Qualitative reading of one dimension.

    Attributes:
        score: Raw dimension score (1-5)
        percentile: Population percentile [0, 100]
        level: very_low | low | average | high | very_high
        description: Canned description for (dimension, level)
    """
    score: float
    percentile: int
    level: str
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "percentile": self.percentile,
            "level": self.level,
            "description": self.description
        }


@dataclass(frozen=True)
class DimensionalResult:
    """Scores on N continuous dimensions, e.g. the Big Five."""
    assessment_type: str
    scores: Dict[str, float]
    percentiles: Dict[str, int]
    interpretations: Dict[str, str] = field(default_factory=dict)
    kind: str = field(default="dimensional", init=False)

    def to_assessment_scores(self) -> Dict[str, Any]:
        """Flatten into the stored assessment-scores record."""
        record: Dict[str, Any] = dict(self.scores)
        record["percentiles"] = dict(self.percentiles)
        if self.interpretations:
            record["interpretations"] = dict(self.interpretations)
        return record


@dataclass(frozen=True)
class CategoricalResult:
    """A dominant category chosen from per-category scores."""
    assessment_type: str
    category_scores: Dict[str, float]
    primary_category: str
    confidence: float
    kind: str = field(default="categorical", init=False)

    def to_assessment_scores(self) -> Dict[str, Any]:
        """Flatten into the stored assessment-scores record."""
        if self.assessment_type == "attachment":
            return {
                "attachment_style": self.primary_category,
                "attachment_scores": dict(self.category_scores)
            }
        return {
            "raw_scores": dict(self.category_scores),
            "interpretations": {"primary_category": self.primary_category}
        }


@dataclass(frozen=True)
class GenericResult:
    """Key-value scores of a custom assessment."""
    assessment_type: str
    raw_scores: Dict[str, float]
    percentiles: Optional[Dict[str, int]] = None
    kind: str = field(default="generic", init=False)

    def to_assessment_scores(self) -> Dict[str, Any]:
        """Flatten into the stored assessment-scores record."""
        record: Dict[str, Any] = {"raw_scores": dict(self.raw_scores)}
        if self.percentiles is not None:
            record["percentiles"] = dict(self.percentiles)
        return record


AssessmentResult = Union[DimensionalResult, CategoricalResult, GenericResult]


@dataclass(frozen=True)
class BigFiveScores:
    """
    Big Five dimension scores and population percentiles.

    Each score is the mean of ten reverse-scored responses on a 1-5 scale;
    each percentile is an integer in [0, 100].
    """
    openness: float
    conscientiousness: float
    extraversion: float
    agreeableness: float
    neuroticism: float
    percentiles: Dict[str, int]

    def dimension_scores(self) -> Dict[str, float]:
        """Scores keyed by dimension name."""
        return {
            "openness": self.openness,
            "conscientiousness": self.conscientiousness,
            "extraversion": self.extraversion,
            "agreeableness": self.agreeableness,
            "neuroticism": self.neuroticism
        }

    def to_result(
        self,
        interpretations: Optional[Dict[str, DimensionInterpretation]] = None
    ) -> DimensionalResult:
        """Convert to the tagged dimensional result."""
        levels = {}
        if interpretations:
            levels = {dim: interp.level for dim, interp in interpretations.items()}
        return DimensionalResult(
            assessment_type="big_five",
            scores=self.dimension_scores(),
            percentiles=dict(self.percentiles),
            interpretations=levels
        )


@dataclass(frozen=True)
class AttachmentProfile:
    """
    Attachment category scores (1-7 scale) and the classified primary style.

    Attributes:
        primary_style: Category with the highest score (declared order on ties)
        style_confidence: (top - second) / 7, clamped to [0, 1]
    """
    secure: float
    anxious_preoccupied: float
    dismissive_avoidant: float
    fearful_avoidant: float
    primary_style: AttachmentStyle
    style_confidence: float

    def category_scores(self) -> Dict[str, float]:
        """Scores keyed by category name, in declared order."""
        return {
            "secure": self.secure,
            "anxious_preoccupied": self.anxious_preoccupied,
            "dismissive_avoidant": self.dismissive_avoidant,
            "fearful_avoidant": self.fearful_avoidant
        }

    def to_result(self) -> CategoricalResult:
        """Convert to the tagged categorical result."""
        return CategoricalResult(
            assessment_type="attachment",
            category_scores=self.category_scores(),
            primary_category=self.primary_style.value,
            confidence=self.style_confidence
        )


@dataclass(frozen=True)
class CompatibilityJudgment:
    """
    Precomputed judgment of how two attachment styles interact.

    Attributes:
        score: Compatibility score [0, 100]
        description: Summary of the pairing
        challenges: Typical difficulties
        advice: Suggested practices
    """
    score: int
    description: str
    challenges: Tuple[str, ...]
    advice: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "description": self.description,
            "challenges": list(self.challenges),
            "advice": list(self.advice)
        }


@dataclass(frozen=True)
class ValidationReport:
    """Outcome of response validation; errors are in detection order."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"is_valid": self.is_valid, "errors": list(self.errors)}


@dataclass(frozen=True)
class ConfidenceInterval:
    """Wald interval for a proportion, bounds clamped to [0, 1]."""
    lower: float
    upper: float
    margin: float

    def to_dict(self) -> Dict[str, float]:
        return {"lower": self.lower, "upper": self.upper, "margin": self.margin}
