"""
Assessment Scoring Engine

This package turns raw questionnaire answers into normalized dimension
scores, population percentiles, categorical classifications and pairwise
compatibility judgments.

Key Design Decisions:
- Scoring is a set of pure functions over immutable lookup tables
- The lookup tables are versioned: stored results depend on them
- Malformed answers are reported by the validator, never raised
- Batch running, loading and evaluation sit outside the scoring core
"""

__version__ = "1.0.0"
