"""
Population percentiles from dimension scores.

Percentile Formula:
    z = (score - mean) / sd
    cdf = 0.5 * (1 + erf(z / sqrt(2)))
    percentile = round_half_up(cdf * 100)

erf uses the Abramowitz & Stegun 7.1.26 rational approximation
(max absolute error ~1.5e-7). The coefficients, evaluation order and
rounding rule must stay exactly as they are: stored percentiles were
produced with them.
"""

import logging
import math
from typing import Mapping

from .tables import BIG_FIVE_NORMS, NormativeStat

logger = logging.getLogger(__name__)

ERF_P = 0.3275911
ERF_A1 = 0.254829592
ERF_A2 = -0.284496736
ERF_A3 = 1.421413741
ERF_A4 = -1.453152027
ERF_A5 = 1.061405429


def erf(x: float) -> float:
    """Error function approximation (odd, erf(0) == 0, tends to +/-1)."""
    sign = 1.0 if x >= 0 else -1.0
    x = abs(x)

    t = 1.0 / (1.0 + ERF_P * x)
    y = 1.0 - (((((ERF_A5 * t + ERF_A4) * t) + ERF_A3) * t + ERF_A2) * t + ERF_A1) * t * math.exp(-x * x)

    return sign * y


def normal_cdf(x: float) -> float:
    """Standard normal cumulative distribution function."""
    return 0.5 * (1 + erf(x / math.sqrt(2)))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return int(math.floor(value + 0.5))


def calculate_z_score(
    dimension: str,
    score: float,
    norms: Mapping[str, NormativeStat] = BIG_FIVE_NORMS
) -> float:
    """
    Standardize a dimension score against its normative statistics.

    Raises:
        ValueError: If the dimension has no normative statistics
    """
    if dimension not in norms:
        raise ValueError(f"No normative statistics for dimension: {dimension}")

    mean, sd = norms[dimension]
    return (score - mean) / sd


def calculate_percentile(
    dimension: str,
    score: float,
    norms: Mapping[str, NormativeStat] = BIG_FIVE_NORMS
) -> int:
    """
    Convert a dimension score to a population percentile.

    Args:
        dimension: Dimension name (key into norms)
        score: Aggregated dimension score
        norms: Dimension -> (mean, sd) table

    Returns:
        Integer percentile in [0, 100]
    """
    z_score = calculate_z_score(dimension, score, norms)
    percentile = round_half_up(normal_cdf(z_score) * 100)
    logger.debug(f"{dimension}: score={score:.3f} z={z_score:.3f} percentile={percentile}")
    return percentile
