"""Tests for the ``analyze`` command."""

import json

from typer.testing import CliRunner

from codebase_metrics import __version__
from codebase_metrics.cli import app

runner = CliRunner()


class TestAnalyzeCommand:
    def test_json_summary(self, sample_project, tmp_path):
        out = tmp_path / "reports"
        result = runner.invoke(
            app, ["analyze", str(sample_project), str(out), "--no-lint", "--json", "--quiet"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["summary"]["metadata"]["totalFiles"] == 4
        assert data["summary"]["metadata"]["fallbackFiles"] == 1
        assert data["failures"] == []
        assert data["runDir"].startswith(str(out))
        assert list(out.glob("individual-files/*/summary-codebase.json"))

    def test_rich_output(self, sample_project, tmp_path):
        result = runner.invoke(
            app, ["analyze", str(sample_project), str(tmp_path / "r"), "--no-lint", "-w", "2"]
        )
        assert result.exit_code == 0, result.output
        assert "CODEBASE METRICS" in result.output
        assert "Reports written to" in result.output

    def test_missing_root(self, tmp_path):
        result = runner.invoke(app, ["analyze", str(tmp_path / "nope"), "--no-lint"])
        assert result.exit_code == 1
        assert "source root not found" in result.output

    def test_invalid_config_file(self, sample_project, tmp_path):
        config = tmp_path / "bad.toml"
        config.write_text("workers = 0\n")
        result = runner.invoke(
            app, ["analyze", str(sample_project), str(tmp_path / "r"), "--config", str(config)]
        )
        assert result.exit_code == 1
        assert "workers" in result.output

    def test_log_file_option(self, sample_project, tmp_path):
        log_file = tmp_path / "run.log"
        result = runner.invoke(
            app,
            [
                "analyze",
                str(sample_project),
                str(tmp_path / "r"),
                "--no-lint",
                "--json",
                "--verbose",
                "--log-file",
                str(log_file),
            ],
        )
        assert result.exit_code == 0, result.output
        text = log_file.read_text()
        assert "Analyzing 4 files" in text
        assert "Batch complete" in text

    def test_verbosity_from_config_file(self, sample_project, tmp_path):
        config = tmp_path / "cfg.toml"
        config.write_text('verbosity = "quiet"\n')
        result = runner.invoke(
            app,
            [
                "analyze",
                str(sample_project),
                str(tmp_path / "r"),
                "--no-lint",
                "--config",
                str(config),
            ],
        )
        assert result.exit_code == 0, result.output
        assert "CODEBASE METRICS" not in result.output

    def test_workers_must_be_positive(self, sample_project):
        result = runner.invoke(app, ["analyze", str(sample_project), "-w", "0"])
        assert result.exit_code == 2


class TestVersion:
    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output
