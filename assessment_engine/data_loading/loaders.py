"""
Data loading functions for batch scoring.

This module handles loading respondent answers from CSV files and custom
assessment definitions from YAML. No scoring is done here - that's handled
by the scoring module.
"""

import logging
from pathlib import Path
from typing import Dict, Any, List, Sequence

import pandas as pd
import yaml

logger = logging.getLogger(__name__)

# Non-question columns a responses file may carry
META_COLUMNS = ("person_id", "completed_at")


def load_responses(filepath: str, delimiter: str = ",") -> pd.DataFrame:
    """
    Load questionnaire responses from CSV.

    The file should contain:
    - One row per respondent
    - One column per question id (e.g. q1..q50), empty cells for unanswered
    - Optional person_id and completed_at (ISO-8601) columns

    Args:
        filepath: Path to the responses file
        delimiter: Field delimiter (default: comma)

    Returns:
        DataFrame with raw responses

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or has no valid rows
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Responses file not found: {filepath}")

    logger.info(f"Loading responses from {filepath} (delimiter: {repr(delimiter)})")
    df = pd.read_csv(filepath, sep=delimiter, dtype={"person_id": str, "completed_at": str})

    if df.empty:
        raise ValueError(f"Responses file is empty: {filepath}")

    logger.info(f"Loaded {len(df)} respondents with {len(df.columns)} columns")
    return df


def question_columns(df: pd.DataFrame) -> List[str]:
    """Columns of a responses frame that hold answers."""
    return [c for c in df.columns if c not in META_COLUMNS]


def row_to_responses(row: pd.Series, question_ids: Sequence[str]) -> Dict[str, Any]:
    """
    Convert one respondent row into a response mapping.

    Empty (NaN) cells are dropped so they read as "no response". Whole
    numbers are returned as int.
    """
    responses = {}
    for question_id in question_ids:
        if question_id not in row.index:
            continue
        value = row[question_id]
        if pd.isna(value):
            continue
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        elif hasattr(value, "item"):
            value = value.item()
        responses[question_id] = value
    return responses


def load_assessment_definition(filepath: str) -> Dict[str, Any]:
    """
    Load a custom assessment definition from YAML.

    The definition file specifies:
    - Which questions belong to which dimension
    - Which items are reverse-scored
    - Scale min/max for reverse scoring and validation
    - Optional normative mean/sd per dimension for percentiles

    Args:
        filepath: Path to the definition YAML file

    Returns:
        Dictionary with the definition:
        {
            "name": "team_fit",
            "version": "1",
            "scale": {"min": 1, "max": 5},
            "dimensions": {
                "collaboration": {
                    "items": ["c1", "c2", ...],
                    "reverse_scored": ["c2", ...]
                },
                ...
            },
            "norms": {"collaboration": {"mean": 3.2, "sd": 0.6}}
        }

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the definition is invalid or incomplete
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Assessment definition not found: {filepath}")

    logger.info(f"Loading assessment definition from {filepath}")
    with open(filepath, "r") as f:
        definition = yaml.safe_load(f)

    if definition is None:
        raise ValueError(f"Assessment definition is empty: {filepath}")

    validate_assessment_definition(definition)

    total_items = sum(
        len(dim_config["items"])
        for dim_config in definition["dimensions"].values()
    )
    logger.info(
        f"Loaded definition '{definition['name']}' v{definition.get('version', '?')}: "
        f"{len(definition['dimensions'])} dimensions, {total_items} items"
    )

    return definition


def validate_assessment_definition(definition: Dict[str, Any]) -> None:
    """
    Validate an assessment definition.

    Checks:
    - Required keys are present
    - Scale min is below scale max
    - Each dimension has a non-empty items list
    - Reverse-scored items are a subset of items
    - Norms refer to declared dimensions and have a positive sd

    Args:
        definition: The loaded definition dictionary

    Raises:
        ValueError: If validation fails
    """
    for key in ("name", "scale", "dimensions"):
        if key not in definition:
            raise ValueError(f"Assessment definition missing '{key}'")

    scale = definition["scale"]
    if "min" not in scale or "max" not in scale:
        raise ValueError("Assessment definition scale needs 'min' and 'max'")
    if scale["min"] >= scale["max"]:
        raise ValueError(f"Scale min must be below max, got {scale['min']}-{scale['max']}")

    if not definition["dimensions"]:
        raise ValueError("Assessment definition has no dimensions")

    for dim_name, dim_config in definition["dimensions"].items():
        if "items" not in dim_config:
            raise ValueError(f"Dimension '{dim_name}' missing 'items' list")

        if not isinstance(dim_config["items"], list):
            raise ValueError(f"Dimension '{dim_name}' items must be a list")

        if len(dim_config["items"]) == 0:
            raise ValueError(f"Dimension '{dim_name}' has no items")

        if "reverse_scored" in dim_config:
            items_set = set(dim_config["items"])
            reverse_set = set(dim_config["reverse_scored"])
            invalid = reverse_set - items_set
            if invalid:
                raise ValueError(
                    f"Dimension '{dim_name}' has reverse_scored items not in items list: {invalid}"
                )

    for dim_name, stat in (definition.get("norms") or {}).items():
        if dim_name not in definition["dimensions"]:
            raise ValueError(f"Norms given for undeclared dimension '{dim_name}'")
        if "mean" not in stat or "sd" not in stat:
            raise ValueError(f"Norms for '{dim_name}' need 'mean' and 'sd'")
        if stat["sd"] <= 0:
            raise ValueError(f"Norms for '{dim_name}' need a positive sd, got {stat['sd']}")
