"""Configuration exceptions: settings and run-level paths."""

from pathlib import Path
from typing import Any

from .base import CodebaseMetricsError


class ConfigurationError(CodebaseMetricsError):
    """Base class for configuration-related errors."""

    pass


class RootNotFoundError(ConfigurationError):
    """Raised when the source root to analyze does not exist.

    Fatal: the batch is aborted before any file is processed.
    """

    def __init__(self, path: Path, reason: str = "directory not found"):
        super().__init__(
            f"Source root not found: {path}", details={"path": str(path), "reason": reason}
        )
        self.path = path
        self.reason = reason


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason
