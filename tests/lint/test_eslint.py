"""Tests for the ESLint runner (subprocess mocked)."""

import json
import subprocess
from unittest.mock import patch

import pytest

from codebase_metrics.exceptions import LintCollaboratorError
from codebase_metrics.lint.eslint import ESLintLinter, parse_eslint_output

ESLINT_JSON = json.dumps(
    [
        {
            "filePath": "/p/a.js",
            "messages": [
                {
                    "ruleId": "no-unused-vars",
                    "severity": 2,
                    "message": "'x' is assigned a value but never used.",
                    "line": 1,
                    "column": 7,
                },
                {
                    "ruleId": None,
                    "severity": 1,
                    "message": "File ignored by default.",
                    "line": 0,
                    "column": 0,
                },
            ],
        }
    ]
)


def _completed(returncode=0, stdout="[]", stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestParseOutput:
    def test_severity_and_rule_mapping(self):
        issues = parse_eslint_output(ESLINT_JSON)
        assert [i.severity for i in issues] == ["error", "warning"]
        assert issues[0].rule == "no-unused-vars"
        assert issues[0].line == 1
        assert issues[0].column == 7
        assert issues[1].rule == "unknown"

    def test_empty_output(self):
        assert parse_eslint_output("") == []
        assert parse_eslint_output("[]") == []

    def test_not_a_list(self):
        with pytest.raises(ValueError):
            parse_eslint_output('{"messages": []}')


class TestESLintLinter:
    def test_command_line(self):
        linter = ESLintLinter(command=["eslint"])
        assert linter.build_command("/p/a.js") == [
            "eslint",
            "--stdin",
            "--stdin-filename",
            "/p/a.js",
            "--format",
            "json",
        ]

    def test_source_passed_on_stdin(self):
        with patch("codebase_metrics.lint.eslint.subprocess.run") as run:
            run.return_value = _completed(stdout=ESLINT_JSON)
            issues = ESLintLinter(command=["eslint"]).lint("const x = 1;", "/p/a.js")
        assert len(issues) == 2
        assert run.call_args.kwargs["input"] == "const x = 1;"
        assert run.call_args.args[0][0] == "eslint"

    def test_exit_code_one_is_success(self):
        with patch("codebase_metrics.lint.eslint.subprocess.run") as run:
            run.return_value = _completed(returncode=1, stdout=ESLINT_JSON)
            assert len(ESLintLinter().lint("x", "/p/a.js")) == 2

    def test_exit_code_two_raises(self):
        with patch("codebase_metrics.lint.eslint.subprocess.run") as run:
            run.return_value = _completed(returncode=2, stdout="", stderr="No config found")
            with pytest.raises(LintCollaboratorError) as exc_info:
                ESLintLinter().lint("x", "/p/a.js")
        assert "Exit code 2" in exc_info.value.reason
        assert "No config found" in exc_info.value.reason

    def test_missing_executable(self):
        with patch(
            "codebase_metrics.lint.eslint.subprocess.run", side_effect=FileNotFoundError()
        ):
            with pytest.raises(LintCollaboratorError, match="Lint failed"):
                ESLintLinter(command=["no-such-eslint"]).lint("x", "/p/a.js")

    def test_timeout(self):
        with patch(
            "codebase_metrics.lint.eslint.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="eslint", timeout=5),
        ):
            with pytest.raises(LintCollaboratorError) as exc_info:
                ESLintLinter(timeout_seconds=5).lint("x", "/p/a.js")
        assert "Timed out" in exc_info.value.reason

    def test_garbage_output(self):
        with patch("codebase_metrics.lint.eslint.subprocess.run") as run:
            run.return_value = _completed(stdout="Oops, not JSON")
            with pytest.raises(LintCollaboratorError, match="Lint failed"):
                ESLintLinter().lint("x", "/p/a.js")

    def test_serialized_linter_still_lints(self):
        with patch("codebase_metrics.lint.eslint.subprocess.run") as run:
            run.return_value = _completed(stdout=ESLINT_JSON)
            assert len(ESLintLinter(serialized=True).lint("x", "/p/a.js")) == 2
