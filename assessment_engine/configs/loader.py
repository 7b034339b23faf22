"""
Configuration loading and validation.

This module handles loading of YAML configuration files and
validates that all required fields are present.
"""

import logging
from pathlib import Path
from typing import Dict, Any, List

import yaml

logger = logging.getLogger(__name__)

SUPPORTED_ASSESSMENT_TYPES = ("big_five", "attachment", "custom")


def load_config(filepath: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        filepath: Path to the YAML configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    logger.info(f"Loading configuration from {filepath}")
    with open(filepath, "r") as f:
        config = yaml.safe_load(f)

    if config is None:
        raise ValueError(f"Configuration file is empty: {filepath}")

    return config


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration and return list of warnings/errors.

    Args:
        config: Configuration dictionary

    Returns:
        List of warning/error messages (empty if valid)
    """
    issues = []

    required_sections = ["global", "data", "scoring", "evaluation"]
    for section in required_sections:
        if section not in config:
            issues.append(f"Missing required section: {section}")

    if "data" in config:
        data = config["data"] or {}
        if "responses" not in data or "path" not in (data.get("responses") or {}):
            issues.append("Missing data.responses.path")

    if "scoring" in config:
        scoring = config["scoring"] or {}
        assessment_type = scoring.get("assessment_type")
        if assessment_type not in SUPPORTED_ASSESSMENT_TYPES:
            issues.append(
                f"scoring.assessment_type must be one of {list(SUPPORTED_ASSESSMENT_TYPES)}, "
                f"got {assessment_type}"
            )
        elif assessment_type == "custom" and not scoring.get("definition_file"):
            issues.append("scoring.definition_file is required for custom assessments")

    if "evaluation" in config:
        quantiles = (config["evaluation"] or {}).get("quantiles", [])
        for q in quantiles:
            if not 0 <= q <= 1:
                issues.append(f"Evaluation quantile must be in [0, 1], got {q}")

    return issues


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Get a nested configuration value using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., "scoring.strict_validation")
        default: Default value if path doesn't exist

    Returns:
        Configuration value or default
    """
    keys = path.split(".")
    value = config
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value
