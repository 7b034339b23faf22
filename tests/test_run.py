"""
End-to-end tests for the batch runner.
"""

import json
import sys

import pandas as pd
import pytest
import yaml

from assessment_engine.run import main, run_batch
from assessment_engine.scoring.tables import BIG_FIVE_QUESTIONS, TABLES_VERSION


@pytest.fixture
def run_setup(tmp_path, big_five_frame):
    """Responses CSV and a config pointing at it."""
    responses_path = tmp_path / "responses.csv"
    big_five_frame.to_csv(responses_path, index=False)

    config = {
        "global": {"log_level": "DEBUG", "output_dir": str(tmp_path / "outputs")},
        "data": {"responses": {"path": str(responses_path)}},
        "scoring": {"assessment_type": "big_five", "strict_validation": True},
        "evaluation": {"quantiles": [0.25, 0.5, 0.75]},
    }
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.safe_dump(config))
    return {"config_path": str(config_path), "tmp_path": tmp_path}


class TestRunBatch:
    """Test the end-to-end batch run."""

    def test_writes_outputs(self, run_setup):
        """Results, report and metadata land in the output directory."""
        result = run_batch(run_setup["config_path"])

        assert result["success"]
        out_dir = run_setup["tmp_path"] / "outputs"
        assert result["output_dir"] == str(out_dir)

        results = pd.read_csv(out_dir / "results.csv", dtype={"person_id": str})
        assert results["person_id"].tolist() == ["p1", "p2", "p3"]
        assert results["scored"].tolist() == [True, False, False]

        report = json.loads((out_dir / "evaluation_report.json").read_text())
        assert report["n_respondents"] == 3
        assert set(report["distribution_stats"]["openness"]["quantiles"]) == {"p25", "p50", "p75"}

        metadata = json.loads((out_dir / "metadata.json").read_text())
        assert metadata["tables_version"] == TABLES_VERSION
        assert metadata["n_scored"] == 1
        assert metadata["definition_version"] is None

    def test_output_dir_override(self, run_setup):
        """An explicit output directory wins over the config."""
        override = run_setup["tmp_path"] / "elsewhere"
        result = run_batch(run_setup["config_path"], output_dir=str(override))
        assert (override / "results.csv").exists()
        assert len(result["outputs"]) == 3

    def test_custom_assessment(self, tmp_path, team_fit_definition):
        """Custom runs load the definition named in the config."""
        definition_path = tmp_path / "team_fit.yaml"
        definition_path.write_text(yaml.safe_dump(team_fit_definition))
        responses_path = tmp_path / "responses.csv"
        responses_path.write_text(
            "person_id,c1,c2,c3,c4,a1,a2,a3,a4\n"
            "x,5,1,5,1,3,4,2,3\n"
            "y,2,3,4,2,5,5,1,4\n"
        )
        config = {
            "global": {"output_dir": str(tmp_path / "out")},
            "data": {"responses": {"path": str(responses_path)}},
            "scoring": {"assessment_type": "custom", "definition_file": str(definition_path)},
            "evaluation": {},
        }
        config_path = tmp_path / "config.yaml"
        config_path.write_text(yaml.safe_dump(config))

        result = run_batch(str(config_path))

        assert result["metadata"]["definition_version"] == "1"
        assert result["metadata"]["n_scored"] == 2

    def test_missing_responses_file(self, run_setup):
        """A missing responses file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            run_batch(run_setup["config_path"], responses_path=str(run_setup["tmp_path"] / "nope.csv"))


class TestMain:
    """Test the command-line entry point."""

    def test_success_exit_code(self, run_setup, monkeypatch):
        """A good run exits with 0."""
        monkeypatch.setattr(sys, "argv", ["assessment-engine", "--config", run_setup["config_path"]])
        assert main() == 0

    def test_failure_exit_code(self, tmp_path, monkeypatch):
        """A missing config exits with 1."""
        monkeypatch.setattr(sys, "argv", ["assessment-engine", "--config", str(tmp_path / "nope.yaml")])
        assert main() == 1

    def test_responses_override(self, run_setup, monkeypatch):
        """--responses replaces the configured file."""
        other = run_setup["tmp_path"] / "other.csv"
        answers = {q: (i % 5) + 1 for i, q in enumerate(BIG_FIVE_QUESTIONS)}
        pd.DataFrame([{"person_id": "solo", **answers}]).to_csv(other, index=False)
        out_dir = run_setup["tmp_path"] / "cli"
        monkeypatch.setattr(sys, "argv", [
            "assessment-engine",
            "--config", run_setup["config_path"],
            "--responses", str(other),
            "--output-dir", str(out_dir),
        ])

        assert main() == 0
        results = pd.read_csv(out_dir / "results.csv")
        assert results["person_id"].tolist() == ["solo"]
