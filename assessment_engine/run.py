"""
Batch runner for the assessment scoring engine.

Usage:
    python -m assessment_engine.run --config configs/config.yaml

The runner performs the following steps:
1. Load and validate configuration
2. Load respondent answers (and a custom definition if configured)
3. Validate and score every respondent
4. Summarise the cohort
5. Save results, report and metadata
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, Any, Optional
from datetime import datetime
import json

from . import __version__
from .scoring.tables import TABLES_VERSION

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def setup_logging(log_level: str) -> None:
    """Configure logging level from config."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.getLogger().setLevel(level)


def run_batch(
    config_path: str,
    responses_path: Optional[str] = None,
    output_dir: Optional[str] = None
) -> Dict[str, Any]:
    """
    Score a respondent file end to end.

    Args:
        config_path: Path to the configuration YAML file
        responses_path: If provided, read responses from here instead of config
        output_dir: If provided, write outputs here instead of config default

    Returns:
        Dictionary with run results and paths to outputs
    """
    from .configs import load_config, validate_config, get_config_value
    from .data_loading import load_responses, load_assessment_definition
    from .batch import BatchScorer
    from .evaluation import create_evaluation_report

    # =========================================================================
    # 1. Load and validate configuration
    # =========================================================================
    logger.info("=" * 60)
    logger.info("ASSESSMENT SCORING - BATCH RUN")
    logger.info("=" * 60)

    config = load_config(config_path)
    issues = validate_config(config)
    if issues:
        for issue in issues:
            logger.warning(f"Config issue: {issue}")

    setup_logging(get_config_value(config, "global.log_level", "INFO"))

    assessment_type = get_config_value(config, "scoring.assessment_type", "big_five")
    strict = get_config_value(config, "scoring.strict_validation", True)

    # =========================================================================
    # 2. Load data
    # =========================================================================
    logger.info("STEP 1: Loading Data")

    effective_responses = responses_path or get_config_value(config, "data.responses.path")
    if not effective_responses:
        raise ValueError("No responses file given (data.responses.path or --responses)")
    delimiter = get_config_value(config, "data.responses.delimiter", ",")
    df = load_responses(effective_responses, delimiter=delimiter)

    definition = None
    if assessment_type == "custom":
        definition = load_assessment_definition(get_config_value(config, "scoring.definition_file"))

    # =========================================================================
    # 3. Score
    # =========================================================================
    logger.info("STEP 2: Validating and Scoring")

    scorer = BatchScorer(assessment_type, strict=strict, definition=definition)
    results = scorer.score_frame(df)

    # =========================================================================
    # 4. Evaluate
    # =========================================================================
    logger.info("STEP 3: Cohort Evaluation")

    report = create_evaluation_report(
        assessment_type,
        results,
        scorer.result_columns(),
        quantiles=get_config_value(config, "evaluation.quantiles")
    )
    logger.info("\n" + report.summary())

    # =========================================================================
    # 5. Save outputs
    # =========================================================================
    out_dir = Path(output_dir or get_config_value(config, "global.output_dir", "outputs"))
    out_dir.mkdir(parents=True, exist_ok=True)

    results_path = out_dir / "results.csv"
    results.to_csv(results_path, index=False)
    logger.info(f"Saved results to {results_path}")

    report_path = out_dir / "evaluation_report.json"
    report.save(str(report_path))

    metadata = {
        "engine_version": __version__,
        "tables_version": TABLES_VERSION,
        "assessment_type": assessment_type,
        "definition_version": definition.get("version") if definition else None,
        "strict_validation": strict,
        "run_timestamp": datetime.now().isoformat(),
        "config_path": config_path,
        "responses_path": effective_responses,
        "n_respondents": report.n_respondents,
        "n_scored": report.n_scored,
        "n_invalid": report.n_invalid
    }
    metadata_path = out_dir / "metadata.json"
    with open(metadata_path, "w") as f:
        json.dump(metadata, f, indent=2)

    logger.info("=" * 60)
    logger.info("BATCH RUN COMPLETE")
    logger.info("=" * 60)

    return {
        "success": True,
        "output_dir": str(out_dir),
        "outputs": [str(results_path), str(report_path), str(metadata_path)],
        "metadata": metadata
    }


def main():
    """Main entry point for the batch runner."""
    parser = argparse.ArgumentParser(
        description="Validate and score questionnaire responses"
    )
    parser.add_argument(
        "--config",
        type=str,
        default="configs/config.yaml",
        help="Path to configuration file"
    )
    parser.add_argument(
        "--responses",
        type=str,
        default=None,
        help="Responses CSV (overrides config)"
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Output directory (overrides config)"
    )

    args = parser.parse_args()

    try:
        result = run_batch(args.config, responses_path=args.responses, output_dir=args.output_dir)
        if result["success"]:
            logger.info("Batch run completed successfully!")
            return 0
        else:
            logger.error("Batch run failed!")
            return 1
    except Exception as e:
        logger.exception(f"Batch run failed with error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
