"""Batch scoring module for respondent tables."""

from .scorer import BatchScorer

__all__ = ["BatchScorer"]
