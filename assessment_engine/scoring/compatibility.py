"""
Compatibility between two attachment styles.

The matrix covers the ten unordered pairs of the four styles (including
self-pairs). Each pair is authored once; lookup tries (style1, style2) and
then (style2, style1), which makes the result independent of argument
order. Pairs outside the matrix resolve to DEFAULT_COMPATIBILITY.
"""

import logging
from types import MappingProxyType
from typing import Mapping, Tuple, Union

from .schema import AttachmentStyle, CompatibilityJudgment

logger = logging.getLogger(__name__)

StyleLike = Union[AttachmentStyle, str]

COMPATIBILITY_MATRIX: Mapping[Tuple[str, str], CompatibilityJudgment] = MappingProxyType({
    ("secure", "secure"): CompatibilityJudgment(
        score=95,
        description="Excellent compatibility. Both partners are emotionally stable and supportive.",
        challenges=("May become complacent", "Could benefit from more growth challenges"),
        advice=("Continue open communication", "Support individual growth", "Maintain appreciation"),
    ),
    ("secure", "anxious_preoccupied"): CompatibilityJudgment(
        score=80,
        description="Good compatibility. Secure partner provides stability for anxious partner's growth.",
        challenges=("Anxious partner may test the relationship", "Different needs for reassurance"),
        advice=("Consistent reassurance from secure partner", "Anxious partner should develop self-soothing",
                "Patient understanding"),
    ),
    ("secure", "dismissive_avoidant"): CompatibilityJudgment(
        score=70,
        description="Moderate compatibility. Secure partner can help avoidant partner open up gradually.",
        challenges=("Avoidant partner may withdraw under pressure", "Different comfort levels with intimacy"),
        advice=("Respect need for independence", "Gradual intimacy building", "Don't take withdrawal personally"),
    ),
    ("secure", "fearful_avoidant"): CompatibilityJudgment(
        score=75,
        description="Good potential with patience. Secure partner provides safe space for healing.",
        challenges=("Fearful partner's push-pull dynamic", "Need for consistent safety"),
        advice=("Consistent, non-threatening presence", "Professional support helpful", "Celebrate small steps"),
    ),
    ("anxious_preoccupied", "anxious_preoccupied"): CompatibilityJudgment(
        score=60,
        description="Moderate compatibility. High emotional intensity - can be very supportive or volatile.",
        challenges=("Emotional flooding", "Codependent patterns", "High drama potential"),
        advice=("Individual emotional regulation work", "Maintain separate identities", "Set boundaries"),
    ),
    ("anxious_preoccupied", "dismissive_avoidant"): CompatibilityJudgment(
        score=40,
        description="Challenging compatibility. Classic pursuer-distancer dynamic.",
        challenges=("Anxious pursues, avoidant withdraws", "Escalating conflict cycles", "Mismatched needs"),
        advice=("Both need individual therapy", "Understand each other's triggers", "Professional couples support"),
    ),
    ("anxious_preoccupied", "fearful_avoidant"): CompatibilityJudgment(
        score=55,
        description="Complex compatibility. Both partners have relationship anxiety but different expressions.",
        challenges=("Double anxiety patterns", "Unpredictable dynamics", "Trust issues"),
        advice=("Focus on individual healing first", "Trauma-informed support", "Go slowly with commitment"),
    ),
    ("dismissive_avoidant", "dismissive_avoidant"): CompatibilityJudgment(
        score=65,
        description="Moderate compatibility. Low conflict but potentially low intimacy.",
        challenges=("Emotional distance", "Lack of deep connection", "Parallel rather than intimate lives"),
        advice=("Intentional intimacy practices", "Schedule relationship check-ins", "Vulnerability exercises"),
    ),
    ("dismissive_avoidant", "fearful_avoidant"): CompatibilityJudgment(
        score=50,
        description="Complex compatibility. Both avoid intimacy but for different reasons.",
        challenges=("Double avoidance patterns", "Mixed signals", "Difficulty building trust"),
        advice=("Individual attachment work", "Very gradual trust building", "Professional guidance recommended"),
    ),
    ("fearful_avoidant", "fearful_avoidant"): CompatibilityJudgment(
        score=45,
        description="Challenging compatibility. Both partners struggle with approach-avoidance conflicts.",
        challenges=("Double push-pull dynamics", "Triggered reactions", "Inconsistent behavior"),
        advice=("Individual trauma work essential", "External support system", "Clear communication agreements"),
    ),
})

DEFAULT_COMPATIBILITY = CompatibilityJudgment(
    score=50,
    description="Compatibility depends on individual growth and communication.",
    challenges=("Unknown compatibility pattern",),
    advice=("Focus on healthy communication", "Individual self-awareness work"),
)


def _style_key(style: StyleLike) -> str:
    """Accept either an AttachmentStyle member or its string value."""
    if isinstance(style, AttachmentStyle):
        return style.value
    return str(style)


def calculate_compatibility(style1: StyleLike, style2: StyleLike) -> CompatibilityJudgment:
    """
    Look up the compatibility judgment for two attachment styles.

    Args:
        style1: First partner's attachment style
        style2: Second partner's attachment style

    Returns:
        CompatibilityJudgment (DEFAULT_COMPATIBILITY for unknown pairs)
    """
    key1 = _style_key(style1)
    key2 = _style_key(style2)

    judgment = COMPATIBILITY_MATRIX.get((key1, key2)) or COMPATIBILITY_MATRIX.get((key2, key1))
    if judgment is None:
        logger.debug(f"No compatibility entry for ({key1}, {key2}), using default")
        return DEFAULT_COMPATIBILITY

    return judgment
