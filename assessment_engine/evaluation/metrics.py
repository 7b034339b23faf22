"""
Evaluation metrics for batch scoring runs.

Summarises a scored cohort rather than judging any individual:
1. Score distribution per dimension/category
2. Sanity check: percentiles must rise monotonically with raw scores
3. Share of respondents that failed validation

Percentiles come from fixed normative tables, so a monotonicity violation
always points at a table or data problem, never at sampling noise.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional
import json

import numpy as np
import pandas as pd
from scipy.stats import spearmanr

logger = logging.getLogger(__name__)

DEFAULT_QUANTILES = [0.1, 0.25, 0.5, 0.75, 0.9]


@dataclass
class ScoreDistributionStats:
    """Statistics about score distribution."""
    mean: float
    std: float
    min: float
    max: float
    quantiles: Dict[str, float]  # e.g., {"p10": 2.2, "p50": 3.1, "p90": 4.0}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mean": float(self.mean),
            "std": float(self.std),
            "min": float(self.min),
            "max": float(self.max),
            "quantiles": {k: float(v) for k, v in self.quantiles.items()}
        }


@dataclass
class MonotonicityCheck:
    """Results of the percentile-vs-score monotonicity check."""
    correlation_with_score: float
    is_monotonic: bool
    n_violations: int
    violation_rate: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "correlation_with_score": float(self.correlation_with_score),
            "is_monotonic": bool(self.is_monotonic),
            "n_violations": int(self.n_violations),
            "violation_rate": float(self.violation_rate)
        }


@dataclass
class EvaluationReport:
    """
    Cohort report for one batch scoring run.

    Contains per-dimension distribution statistics, monotonicity checks for
    dimensions with percentiles, and validation counts.
    """
    assessment_type: str
    n_respondents: int
    n_scored: int
    n_invalid: int
    distribution_stats: Dict[str, ScoreDistributionStats] = field(default_factory=dict)
    monotonicity_checks: Dict[str, MonotonicityCheck] = field(default_factory=dict)
    category_counts: Dict[str, int] = field(default_factory=dict)

    @property
    def invalid_rate(self) -> float:
        return self.n_invalid / self.n_respondents if self.n_respondents else 0.0

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "assessment_type": self.assessment_type,
            "n_respondents": self.n_respondents,
            "n_scored": self.n_scored,
            "n_invalid": self.n_invalid,
            "invalid_rate": self.invalid_rate,
            "distribution_stats": {k: v.to_dict() for k, v in self.distribution_stats.items()}
        }
        if self.monotonicity_checks:
            result["monotonicity_checks"] = {k: v.to_dict() for k, v in self.monotonicity_checks.items()}
        if self.category_counts:
            result["category_counts"] = dict(self.category_counts)
        return result

    def save(self, filepath: str) -> None:
        """Save report to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved evaluation report to {filepath}")

    def summary(self) -> str:
        """Generate text summary of the report."""
        lines = [
            f"Evaluation Report: {self.assessment_type}",
            "=" * 50,
            f"  Respondents: {self.n_respondents}",
            f"  Scored:      {self.n_scored}",
            f"  Invalid:     {self.n_invalid} ({self.invalid_rate:.2%})",
        ]

        for name, stats in self.distribution_stats.items():
            lines.extend([
                "",
                f"{name}:",
                f"  Mean: {stats.mean:.4f}",
                f"  Std:  {stats.std:.4f}",
                f"  Min:  {stats.min:.4f}",
                f"  Max:  {stats.max:.4f}",
            ])
            check = self.monotonicity_checks.get(name)
            if check:
                lines.append(f"  Percentile monotonic: {check.is_monotonic} "
                             f"(violations: {check.n_violations})")

        if self.category_counts:
            lines.extend(["", "Primary categories:"])
            for category, count in self.category_counts.items():
                lines.append(f"  {category}: {count}")

        return "\n".join(lines)


def compute_score_distribution_stats(
    scores: np.ndarray,
    quantiles: Optional[List[float]] = None
) -> ScoreDistributionStats:
    """
    Compute distribution statistics for scores.

    Args:
        scores: Array of dimension scores
        quantiles: Quantile values to compute (default: p10, p25, p50, p75, p90)

    Returns:
        ScoreDistributionStats instance
    """
    if quantiles is None:
        quantiles = DEFAULT_QUANTILES

    quantile_dict = {
        f"p{int(round(q * 100))}": float(np.percentile(scores, q * 100))
        for q in quantiles
    }

    return ScoreDistributionStats(
        mean=float(np.mean(scores)),
        std=float(np.std(scores)),
        min=float(np.min(scores)),
        max=float(np.max(scores)),
        quantiles=quantile_dict
    )


def sanity_check_monotonicity(
    percentiles: np.ndarray,
    scores: np.ndarray
) -> MonotonicityCheck:
    """
    Check that percentiles never fall as raw scores rise.

    Percentiles are rounded integers, so close scores share a percentile and
    the rank correlation can dip below 1 without any drop. Only drops count
    against "is_monotonic"; the correlation is reported for information.

    Args:
        percentiles: Percentile per respondent
        scores: Raw dimension score per respondent

    Returns:
        MonotonicityCheck instance
    """
    percentiles = np.asarray(percentiles, dtype=float)
    scores = np.asarray(scores, dtype=float)

    # Sort by score; any drop in percentile along that order is a violation
    order = np.argsort(scores, kind="stable")
    sorted_scores = scores[order]
    sorted_percentiles = percentiles[order]

    score_steps = np.diff(sorted_scores)
    percentile_steps = np.diff(sorted_percentiles)
    n_comparisons = int(np.sum(score_steps > 0))
    n_violations = int(np.sum((score_steps > 0) & (percentile_steps < 0)))

    if len(np.unique(scores)) > 1 and len(np.unique(percentiles)) > 1:
        correlation, _ = spearmanr(scores, percentiles)
        correlation = float(correlation)
    else:
        # Constant input has no rank correlation; treat as trivially monotonic
        correlation = 1.0

    violation_rate = n_violations / n_comparisons if n_comparisons > 0 else 0.0

    return MonotonicityCheck(
        correlation_with_score=correlation,
        is_monotonic=n_violations == 0,
        n_violations=n_violations,
        violation_rate=violation_rate
    )


def create_evaluation_report(
    assessment_type: str,
    results: pd.DataFrame,
    dimensions: List[str],
    quantiles: Optional[List[float]] = None
) -> EvaluationReport:
    """
    Create a cohort report from BatchScorer.score_frame() output.

    Args:
        assessment_type: Assessment type of the run
        results: Results frame
        dimensions: Numeric result columns to summarise
        quantiles: Quantiles to compute

    Returns:
        EvaluationReport instance
    """
    scored = results[results["scored"]] if "scored" in results.columns else results

    report = EvaluationReport(
        assessment_type=assessment_type,
        n_respondents=len(results),
        n_scored=len(scored),
        n_invalid=int((~results["is_valid"]).sum()) if "is_valid" in results.columns else 0
    )

    if scored.empty:
        logger.warning("No scored respondents - evaluation report has no statistics")
        return report

    for dimension in dimensions:
        if dimension not in scored.columns:
            continue
        values = scored[dimension].to_numpy(dtype=float)
        report.distribution_stats[dimension] = compute_score_distribution_stats(values, quantiles)

        percentile_column = f"{dimension}_percentile"
        if percentile_column in scored.columns:
            report.monotonicity_checks[dimension] = sanity_check_monotonicity(
                scored[percentile_column].to_numpy(dtype=float), values
            )

    if "primary_style" in scored.columns:
        counts = scored["primary_style"].value_counts()
        report.category_counts = {str(k): int(v) for k, v in counts.items()}

    return report
