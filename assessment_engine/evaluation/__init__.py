"""Evaluation module for batch scoring runs."""

from .metrics import (
    compute_score_distribution_stats,
    sanity_check_monotonicity,
    EvaluationReport,
    create_evaluation_report
)

__all__ = [
    "compute_score_distribution_stats",
    "sanity_check_monotonicity",
    "EvaluationReport",
    "create_evaluation_report"
]
