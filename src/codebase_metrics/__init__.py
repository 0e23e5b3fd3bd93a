"""
codebase-metrics - static code-quality metrics for JavaScript and TypeScript

Size, structure, McCabe cyclomatic complexity and Halstead software-science
measures computed from tree-sitter syntax trees, with ESLint findings merged
into per-file JSON reports and a folder summary.
"""

__version__ = "1.0.0"

from .api import analyze, analyze_source
from .analysis import BatchAnalyzer, BatchResult, FileAnalyzer
from .config import AnalysisConfig, load_config
from .metrics.models import FolderSummary, MetricsRecord

__all__ = [
    "analyze",  # Main entry point
    "analyze_source",
    "AnalysisConfig",
    "load_config",
    "BatchAnalyzer",
    "BatchResult",
    "FileAnalyzer",
    "FolderSummary",
    "MetricsRecord",
]
