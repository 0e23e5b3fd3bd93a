"""Text-only fallback analysis.

Used when no syntax tree is available. Only size metrics are measured;
everything that needs a tree is reported as zero and the McCabe risk level
as Unknown.
"""

from __future__ import annotations

from typing import Optional

from ..scanning.lexical import scan_lines
from .models import (
    FALLBACK_ANALYZER_NAME,
    CyclomaticComplexity,
    HalsteadMetrics,
    MetricsRecord,
    RiskLevel,
    StaticAnalysisSummary,
    StructuralComplexity,
)

FALLBACK_NOTE = "AST parsing failed - using text-based analysis"
TIMEOUT_NOTE = "Analysis timed out - using text-based analysis"
LINT_SKIPPED_NOTE = "Static analysis skipped due to parse failure"
LINT_SKIPPED_TIMEOUT_NOTE = "Static analysis skipped due to timeout"


def fallback_record(
    content: str,
    file_path: str,
    reason: Optional[str] = None,
    timestamp: str = "",
    timed_out: bool = False,
) -> MetricsRecord:
    """Build a reduced MetricsRecord from source text alone. Never raises.

    ``timed_out`` marks a file whose full analysis did not finish in time
    rather than one that failed to parse.
    """
    prefix = TIMEOUT_NOTE if timed_out else FALLBACK_NOTE
    note = f"{prefix}: {reason}" if reason else prefix
    lint_note = LINT_SKIPPED_TIMEOUT_NOTE if timed_out else LINT_SKIPPED_NOTE
    return MetricsRecord(
        file_path=file_path,
        size=scan_lines(content),
        structure=StructuralComplexity(),
        cyclomatic=CyclomaticComplexity(risk_level=RiskLevel.UNKNOWN),
        halstead=HalsteadMetrics(),
        static_analysis=StaticAnalysisSummary.skipped_with(lint_note),
        analyzer=FALLBACK_ANALYZER_NAME,
        timestamp=timestamp,
        note=note,
    )
