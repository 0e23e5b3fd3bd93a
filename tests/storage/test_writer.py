"""Tests for JSON report writing."""

import json
from datetime import datetime

import pytest

from codebase_metrics.analysis.aggregate import summarize_folder
from codebase_metrics.metrics.models import FileResult
from codebase_metrics.storage import ReportWriter, report_name


class TestReportName:
    @pytest.mark.parametrize(
        "relative,expected",
        [
            ("app.js", "analysis-app.json"),
            ("src/utils/math.js", "analysis-src__utils__math.json"),
            ("src/components/Button.tsx", "analysis-src__components__Button.json"),
            ("lib/index.d.ts", "analysis-lib__index.d.json"),
        ],
    )
    def test_flattened_names(self, relative, expected):
        assert report_name(relative) == expected


class TestReportWriter:
    @pytest.fixture
    def result(self, analyze):
        record = analyze("const x = 1 + 2;", "/p/src/x.js")
        return FileResult(file="src/x.js", path=record.file_path, metrics=record)

    def test_run_directory(self, tmp_path):
        writer = ReportWriter(tmp_path, run_started=datetime(2024, 3, 5, 14, 7, 9))
        assert writer.run_dir == tmp_path / "individual-files" / "2024-03-05T14-07-09"

    def test_file_report(self, tmp_path, result):
        writer = ReportWriter(tmp_path, run_started=datetime(2024, 1, 1))
        path = writer.write_file_report(result)
        assert path.name == "analysis-src__x.json"
        data = json.loads(path.read_text())
        assert data["metadata"]["filePath"] == "/p/src/x.js"
        assert data["halsteadMetrics"]["operatorList"]
        assert data == result.metrics.to_dict()

    def test_summary_report(self, tmp_path, result):
        writer = ReportWriter(tmp_path, run_started=datetime(2024, 1, 1))
        summary = summarize_folder([result], "web")
        path = writer.write_summary(summary)
        assert path == writer.run_dir / "summary-web.json"
        data = json.loads(path.read_text())
        assert data["metadata"]["folderName"] == "web"
        assert data["totals"]["totalFunctions"] == 0

    def test_same_stem_different_extension(self, tmp_path, result):
        writer = ReportWriter(tmp_path, run_started=datetime(2024, 1, 1))
        js = writer.write_file_report(
            FileResult(file="src/util.js", path="/p/src/util.js", metrics=result.metrics)
        )
        ts = writer.write_file_report(
            FileResult(file="src/util.ts", path="/p/src/util.ts", metrics=result.metrics)
        )
        assert js.name == "analysis-src__util.json"
        assert ts.name == "analysis-src__util-2.json"
        assert len(list(writer.run_dir.iterdir())) == 2

    def test_flattened_separator_collision(self, tmp_path):
        writer = ReportWriter(tmp_path, run_started=datetime(2024, 1, 1))
        assert writer.claim_name("a__b.js") == "analysis-a__b.json"
        assert writer.claim_name("a/b.js") == "analysis-a__b-2.json"
        assert writer.claim_name("a/b.jsx") == "analysis-a__b-3.json"

    def test_names_differing_only_in_case_are_kept_apart(self, tmp_path):
        writer = ReportWriter(tmp_path, run_started=datetime(2024, 1, 1))
        assert writer.claim_name("Button.js") == "analysis-Button.json"
        assert writer.claim_name("button.js") == "analysis-button-2.json"
