"""Base exception for codebase-metrics."""

from typing import Dict, Optional


class CodebaseMetricsError(Exception):
    """Base exception for all codebase-metrics errors."""

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def to_dict(self) -> Dict[str, str]:
        """Flatten into a JSON-friendly mapping for reports."""
        return {"error": type(self).__name__, "message": self.message, **self.details}
