"""Exception hierarchy for codebase-metrics."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    LintCollaboratorError,
    ParseStructureError,
)
from .base import CodebaseMetricsError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    RootNotFoundError,
)

__all__ = [
    "CodebaseMetricsError",
    "AnalysisError",
    "FileAccessError",
    "ParseStructureError",
    "LintCollaboratorError",
    "ConfigurationError",
    "InvalidConfigError",
    "RootNotFoundError",
]
