"""Data loading module for response files and assessment definitions."""

from .loaders import load_responses, load_assessment_definition, row_to_responses

__all__ = ["load_responses", "load_assessment_definition", "row_to_responses"]
