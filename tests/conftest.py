"""
Pytest configuration and shared fixtures.
"""

import pytest
from typing import Dict, Any

import pandas as pd

from assessment_engine.scoring.tables import ATTACHMENT_QUESTIONS, BIG_FIVE_QUESTIONS


@pytest.fixture
def big_five_all_threes() -> Dict[str, int]:
    """Every Big Five question answered with the scale midpoint."""
    return {q: 3 for q in BIG_FIVE_QUESTIONS}


@pytest.fixture
def big_five_all_fives() -> Dict[str, int]:
    """Every Big Five question answered with 5."""
    return {q: 5 for q in BIG_FIVE_QUESTIONS}


@pytest.fixture
def attachment_all_fours() -> Dict[str, int]:
    """Every attachment question answered with 4."""
    return {q: 4 for q in ATTACHMENT_QUESTIONS}


@pytest.fixture
def team_fit_definition() -> Dict[str, Any]:
    """Custom assessment definition with norms."""
    return {
        "name": "team_fit",
        "version": "1",
        "scale": {"min": 1, "max": 5},
        "dimensions": {
            "collaboration": {"items": ["c1", "c2", "c3", "c4"], "reverse_scored": ["c2", "c4"]},
            "autonomy": {"items": ["a1", "a2", "a3", "a4"], "reverse_scored": ["a3"]},
        },
        "norms": {
            "collaboration": {"mean": 3.5, "sd": 0.7},
            "autonomy": {"mean": 3.1, "sd": 0.8},
        },
    }


@pytest.fixture
def big_five_frame() -> pd.DataFrame:
    """Three respondents: valid, out of range, openness unanswered."""
    valid = {"person_id": "p1", **{q: (i % 5) + 1 for i, q in enumerate(BIG_FIVE_QUESTIONS)}}
    out_of_range = {"person_id": "p2", **{q: 4 for q in BIG_FIVE_QUESTIONS}}
    out_of_range["q1"] = 9
    incomplete = {"person_id": "p3", **{q: 2 for q in BIG_FIVE_QUESTIONS[:40]}}
    return pd.DataFrame([valid, out_of_range, incomplete])
