"""Shared test fixtures for codebase-metrics tests."""

import os
from pathlib import Path

import pytest

from codebase_metrics.analysis import FileAnalyzer
from codebase_metrics.config import AnalysisConfig


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep user/project config files and CODEBASE_METRICS_* vars out of tests."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    for key in list(os.environ):
        if key.startswith("CODEBASE_METRICS_"):
            monkeypatch.delenv(key)


@pytest.fixture
def no_lint_config():
    """Configuration with the ESLint collaborator switched off."""
    return AnalysisConfig(lint_enabled=False)


@pytest.fixture
def analyzer(no_lint_config):
    """FileAnalyzer that never shells out to ESLint."""
    return FileAnalyzer(no_lint_config)


@pytest.fixture
def analyze(analyzer):
    """Analyze a source string: ``analyze("const x = 1;", "a.js")``."""

    def _analyze(source: str, path: str = "sample.js"):
        return analyzer.analyze_source(source, path)

    return _analyze


@pytest.fixture
def sample_project(tmp_path) -> Path:
    """Small mixed JS/TS tree with a vendored dir, a non-source file and a broken file."""
    root = tmp_path / "project"
    (root / "src" / "lib").mkdir(parents=True)
    (root / "node_modules" / "dep").mkdir(parents=True)

    (root / "src" / "a.js").write_text(
        "import { helper } from './lib/c';\n"
        "\n"
        "export function run(items) {\n"
        "  for (const item of items) {\n"
        "    if (item && item.ok) {\n"
        "      helper(item);\n"
        "    }\n"
        "  }\n"
        "}\n"
    )
    (root / "src" / "b.ts").write_text(
        "export class Store {\n"
        "  private count: number = 0;\n"
        "  add(n: number): number {\n"
        "    this.count += n;\n"
        "    return this.count;\n"
        "  }\n"
        "}\n"
    )
    (root / "src" / "lib" / "c.jsx").write_text(
        "export const helper = (item) => <span className=\"x\">{item.name}</span>;\n"
    )
    (root / "node_modules" / "dep" / "index.js").write_text("module.exports = 1;\n")
    (root / "README.md").write_text("# project\n")
    (root / "broken.js").write_text("function broken( {\n  return 1;\n")
    return root
