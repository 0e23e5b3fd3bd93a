"""Public API for codebase-metrics.

Example:
    >>> from codebase_metrics import analyze, analyze_source
    >>>
    >>> batch = analyze("src", output_root="reports", lint_enabled=False)
    >>> batch.summary.total_functions
    >>>
    >>> record = analyze_source("const x = 1 + 2;", lint_enabled=False)
    >>> record.cyclomatic.complexity
    1
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .analysis import BatchAnalyzer, BatchResult, FileAnalyzer
from .config import load_config
from .metrics.models import MetricsRecord


def analyze(
    path: str | Path = ".",
    output_root: Optional[str | Path] = None,
    config_file: Optional[Path] = None,
    **overrides,
) -> BatchResult:
    """Analyze every source file under path.

    Args:
        path: Source root
        output_root: Where to write JSON reports (not written when None)
        config_file: Optional explicit config file path
        **overrides: Configuration overrides (e.g., workers=4, lint_enabled=False)

    Raises:
        RootNotFoundError: If path does not exist
        InvalidConfigError: If configuration is invalid
    """
    config = load_config(config_file=config_file, **overrides)
    return BatchAnalyzer(config).run(path, output_root=output_root)


def analyze_source(
    source: str, file_path: str = "<stdin>.js", config_file: Optional[Path] = None, **overrides
) -> MetricsRecord:
    """Analyze a source string; the extension of file_path picks the grammar."""
    config = load_config(config_file=config_file, **overrides)
    return FileAnalyzer(config).analyze_source(source, file_path)
