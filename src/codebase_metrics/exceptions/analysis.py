"""Per-file analysis exceptions: file access, tree structure, lint collaborator.

None of these is fatal for a batch. ParseStructureError routes a file to the
fallback analyzer, LintCollaboratorError degrades to an empty issue list, and
FileAccessError excludes the file from aggregates.
"""

from pathlib import Path
from typing import Union

from .base import CodebaseMetricsError

PathLike = Union[str, Path]


class AnalysisError(CodebaseMetricsError):
    """Base class for analysis-related errors."""
    pass


class FileAccessError(AnalysisError):
    """Raised when a file cannot be accessed or read."""

    def __init__(self, filepath: PathLike, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class ParseStructureError(AnalysisError):
    """Raised when a syntax tree cannot be built or walked."""

    def __init__(self, filepath: PathLike, reason: str):
        super().__init__(
            f"Cannot build syntax tree for: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class LintCollaboratorError(AnalysisError):
    """Raised when the external linter fails to produce a result."""

    def __init__(self, filepath: PathLike, reason: str):
        super().__init__(
            f"Lint failed for: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason
