"""
Scoring for custom assessments described by a definition mapping.

A definition has the same shape as the YAML loaded by
load_assessment_definition():
{
    "name": "team_fit",
    "version": "1",
    "scale": {"min": 1, "max": 5},
    "dimensions": {
        "collaboration": {"items": ["c1", "c2"], "reverse_scored": ["c2"]},
        ...
    },
    "norms": {"collaboration": {"mean": 3.2, "sd": 0.6}}   # optional
}
"""

import logging
from typing import Any, Dict, List, Mapping

from .normalization import aggregate_dimensions, normalize_responses
from .percentiles import calculate_percentile
from .schema import GenericResult
from .tables import NormativeStat, ScaleBounds

logger = logging.getLogger(__name__)


def definition_scale(definition: Mapping[str, Any]) -> ScaleBounds:
    """Scale bounds declared by a definition."""
    return ScaleBounds(definition["scale"]["min"], definition["scale"]["max"])


def definition_question_map(definition: Mapping[str, Any]) -> Dict[str, List[str]]:
    """Dimension -> question ids, in declared order."""
    return {
        name: list(dim_config["items"])
        for name, dim_config in definition["dimensions"].items()
    }


def definition_reverse_scored(definition: Mapping[str, Any]) -> List[str]:
    """All reverse-scored question ids across dimensions."""
    columns = []
    for dim_config in definition["dimensions"].values():
        columns.extend(dim_config.get("reverse_scored", []))
    return columns


def definition_questions(definition: Mapping[str, Any]) -> List[str]:
    """Every question id the assessment asks."""
    columns = []
    for items in definition_question_map(definition).values():
        columns.extend(items)
    return columns


def definition_norms(definition: Mapping[str, Any]) -> Dict[str, NormativeStat]:
    """Normative statistics, empty when the definition has none."""
    return {
        name: NormativeStat(mean=stat["mean"], sd=stat["sd"])
        for name, stat in (definition.get("norms") or {}).items()
    }


def score_generic(responses: Mapping[str, float], definition: Mapping[str, Any]) -> GenericResult:
    """
    Score a custom assessment.

    Args:
        responses: Question id -> response
        definition: Assessment definition (see module docstring)

    Returns:
        GenericResult with per-dimension means and, when norms are
        declared, percentiles for the normed dimensions
    """
    adjusted = normalize_responses(
        responses,
        definition_reverse_scored(definition),
        definition_scale(definition)
    )
    raw_scores = aggregate_dimensions(definition_question_map(definition), adjusted)

    norms = definition_norms(definition)
    percentiles = None
    if norms:
        percentiles = {
            dimension: calculate_percentile(dimension, score, norms)
            for dimension, score in raw_scores.items()
            if dimension in norms
        }

    return GenericResult(
        assessment_type=definition.get("name", "custom"),
        raw_scores=raw_scores,
        percentiles=percentiles
    )
