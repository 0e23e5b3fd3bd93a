"""Single-file and batch analysis orchestration."""

from .aggregate import summarize_folder
from .batch import BatchAnalyzer, BatchResult
from .engine import FileAnalyzer, run_static_analysis

__all__ = [
    "BatchAnalyzer",
    "BatchResult",
    "FileAnalyzer",
    "run_static_analysis",
    "summarize_folder",
]
