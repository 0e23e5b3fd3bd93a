"""Tests for the exception hierarchy."""

import pytest

from codebase_metrics.exceptions import (
    AnalysisError,
    CodebaseMetricsError,
    ConfigurationError,
    FileAccessError,
    InvalidConfigError,
    LintCollaboratorError,
    ParseStructureError,
    RootNotFoundError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "exc",
        [
            FileAccessError("a.js", "File not found"),
            ParseStructureError("a.js", "syntax error at 1:1"),
            LintCollaboratorError("a.js", "Exit code 2"),
        ],
    )
    def test_per_file_errors_are_analysis_errors(self, exc):
        assert isinstance(exc, AnalysisError)
        assert isinstance(exc, CodebaseMetricsError)
        assert exc.filepath == "a.js"

    def test_run_level_errors_are_configuration_errors(self):
        assert isinstance(RootNotFoundError("/x"), ConfigurationError)
        assert isinstance(InvalidConfigError("workers", 0, "must be at least 1"), ConfigurationError)

    def test_analysis_and_config_are_disjoint(self):
        assert not isinstance(FileAccessError("a", "b"), ConfigurationError)
        assert not isinstance(RootNotFoundError("/x"), AnalysisError)


class TestFormatting:
    def test_str_includes_details(self):
        exc = FileAccessError("a.js", "File not found")
        assert str(exc) == "Cannot access file: a.js (filepath=a.js, reason=File not found)"

    def test_plain_message(self):
        assert str(CodebaseMetricsError("oops")) == "oops"

    def test_to_dict(self):
        exc = ParseStructureError("a.js", "depth 5001 exceeds limit")
        assert exc.to_dict() == {
            "error": "ParseStructureError",
            "message": "Cannot build syntax tree for: a.js",
            "filepath": "a.js",
            "reason": "depth 5001 exceeds limit",
        }

    def test_invalid_config_keeps_value(self):
        exc = InvalidConfigError("workers", 0, "must be at least 1")
        assert exc.key == "workers"
        assert exc.value == 0
        assert exc.details["value"] == "0"
