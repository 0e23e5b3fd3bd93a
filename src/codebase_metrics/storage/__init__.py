"""Report persistence."""

from .writer import ReportWriter, report_name

__all__ = ["ReportWriter", "report_name"]
