"""Metrics data models.

All records are frozen: a MetricsRecord is built once by the finalizer (or
the fallback analyzer) and never mutated afterwards. ``to_dict`` produces
the camelCase JSON shape consumed by dashboards.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

ANALYZER_NAME = "codebase-analyzer-v1.0"
FALLBACK_ANALYZER_NAME = "codebase-fallback-v1.0"

STANDARDS = (
    "IEEE-1061-1998",
    "ISO-25010-2011",
    "McCabe-1976",
    "Halstead-1977",
    "ESLint",
)


def round_half_up(value: float, digits: int = 2) -> float:
    """Round half away from zero for non-negative values.

    ``round()`` uses banker's rounding; reports use the conventional
    ``floor(x * 10^d + 0.5) / 10^d``.
    """
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


class RiskLevel(Enum):
    """McCabe risk category, ordered by increasing complexity."""

    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    VERY_HIGH = "Very High"
    UNKNOWN = "Unknown"

    @classmethod
    def from_complexity(cls, complexity: int) -> RiskLevel:
        """Map cyclomatic complexity to McCabe's risk bands (inclusive upper bounds)."""
        if complexity <= 10:
            return cls.LOW
        if complexity <= 20:
            return cls.MODERATE
        if complexity <= 50:
            return cls.HIGH
        return cls.VERY_HIGH


@dataclass(frozen=True)
class SizeMetrics:
    """Line counts from the lexical scanner.

    comment_lines and logical_lines are independent scans, not a
    partition of source_lines.
    """

    total_lines: int = 0
    source_lines: int = 0
    comment_lines: int = 0
    blank_lines: int = 0
    logical_lines: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "totalLines": self.total_lines,
            "sourceLines": self.source_lines,
            "commentLines": self.comment_lines,
            "blankLines": self.blank_lines,
            "logicalLinesOfCode": self.logical_lines,
        }


@dataclass(frozen=True)
class StructuralComplexity:
    """Structural counters from the tree walk."""

    named_functions: int = 0
    anonymous_functions: int = 0
    arrow_functions: int = 0
    methods: int = 0
    classes: int = 0
    variables: int = 0
    constants: int = 0
    imports: int = 0
    exports: int = 0
    conditionals: int = 0
    loops: int = 0
    ast_nodes: int = 0

    @property
    def total_functions(self) -> int:
        return self.named_functions + self.anonymous_functions + self.arrow_functions

    def to_dict(self) -> dict[str, int]:
        return {
            "totalFunctions": self.total_functions,
            "namedFunctions": self.named_functions,
            "anonymousFunctions": self.anonymous_functions,
            "arrowFunctions": self.arrow_functions,
            "methods": self.methods,
            "classes": self.classes,
            "variables": self.variables,
            "constants": self.constants,
            "imports": self.imports,
            "exports": self.exports,
            "conditionals": self.conditionals,
            "loops": self.loops,
            "astNodes": self.ast_nodes,
        }


@dataclass(frozen=True)
class CyclomaticComplexity:
    """McCabe (1976) cyclomatic complexity for a whole file."""

    decision_points: int = 0
    max_nesting_depth: int = 0
    average_complexity: float = 0.0
    risk_level: RiskLevel = RiskLevel.LOW

    @property
    def complexity(self) -> int:
        return 1 + self.decision_points

    def to_dict(self) -> dict[str, Any]:
        return {
            "complexity": self.complexity,
            "decisionPoints": self.decision_points,
            "maxNestingDepth": self.max_nesting_depth,
            "averageComplexity": self.average_complexity,
            "riskLevel": self.risk_level.value,
        }


@dataclass(frozen=True)
class HalsteadMetrics:
    """Halstead (1977) software-science measures.

    Float fields hold raw, unrounded values; rounding happens in to_dict().
    operator_list/operand_list hold unique tokens in first-seen order.
    """

    unique_operators: int = 0
    unique_operands: int = 0
    total_operators: int = 0
    total_operands: int = 0
    calculated_length: float = 0.0
    volume: float = 0.0
    difficulty: float = 0.0
    effort: float = 0.0
    time_to_program: float = 0.0
    delivered_bugs: float = 0.0
    operator_list: tuple[str, ...] = ()
    operand_list: tuple[str, ...] = ()

    @property
    def vocabulary(self) -> int:
        return self.unique_operators + self.unique_operands

    @property
    def length(self) -> int:
        return self.total_operators + self.total_operands

    def to_dict(self) -> dict[str, Any]:
        return {
            "uniqueOperators": self.unique_operators,
            "uniqueOperands": self.unique_operands,
            "totalOperators": self.total_operators,
            "totalOperands": self.total_operands,
            "vocabulary": self.vocabulary,
            "length": self.length,
            "calculatedLength": round_half_up(self.calculated_length, 2),
            "volume": round_half_up(self.volume, 2),
            "difficulty": round_half_up(self.difficulty, 2),
            "effort": round_half_up(self.effort, 2),
            "timeToProgram": round_half_up(self.time_to_program, 2),
            "deliveredBugs": round_half_up(self.delivered_bugs, 4),
            "_rawVolume": self.volume,
            "_rawDifficulty": self.difficulty,
            "_rawEffort": self.effort,
            "operatorList": list(self.operator_list),
            "operandList": list(self.operand_list),
        }


@dataclass(frozen=True)
class LintIssue:
    """One message reported by the lint collaborator."""

    line: int
    column: int
    rule: str
    severity: str  # "error" | "warning"
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "line": self.line,
            "column": self.column,
            "rule": self.rule,
            "severity": self.severity,
            "message": self.message,
        }


@dataclass(frozen=True)
class StaticAnalysisSummary:
    """Lint results merged into a metrics record; opaque to the core."""

    issues: tuple[LintIssue, ...] = ()
    note: Optional[str] = None
    skipped: bool = False

    @classmethod
    def from_issues(cls, issues: list[LintIssue]) -> StaticAnalysisSummary:
        return cls(issues=tuple(issues))

    @classmethod
    def skipped_with(cls, note: str) -> StaticAnalysisSummary:
        return cls(note=note, skipped=True)

    @classmethod
    def failed_with(cls, note: str) -> StaticAnalysisSummary:
        return cls(note=note)

    @property
    def total_issues(self) -> int:
        return len(self.issues)

    @property
    def errors(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def warnings(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == "warning")

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "totalIssues": self.total_issues,
            "errors": self.errors,
            "warnings": self.warnings,
            "issues": [issue.to_dict() for issue in self.issues],
            "skipped": self.skipped,
        }
        if self.note is not None:
            data["note"] = self.note
        return data


@dataclass(frozen=True)
class MetricsRecord:
    """All metrics for one analyzed file."""

    file_path: str
    size: SizeMetrics
    structure: StructuralComplexity
    cyclomatic: CyclomaticComplexity
    halstead: HalsteadMetrics
    static_analysis: StaticAnalysisSummary = field(default_factory=StaticAnalysisSummary)
    analyzer: str = ANALYZER_NAME
    timestamp: str = ""
    note: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.analyzer == FALLBACK_ANALYZER_NAME

    def to_dict(self, include_timestamp: bool = True) -> dict[str, Any]:
        """Serialize to the report JSON shape.

        Args:
            include_timestamp: Set False to compare records across runs
        """
        metadata: dict[str, Any] = {
            "filePath": self.file_path,
            "analyzer": self.analyzer,
        }
        if include_timestamp:
            metadata["timestamp"] = self.timestamp
        if self.is_fallback:
            metadata["note"] = self.note
        else:
            metadata["standards"] = list(STANDARDS)

        return {
            "metadata": metadata,
            "sizeMetrics": self.size.to_dict(),
            "structuralComplexity": self.structure.to_dict(),
            "cyclomaticComplexity": self.cyclomatic.to_dict(),
            "halsteadMetrics": self.halstead.to_dict(),
            "staticAnalysis": self.static_analysis.to_dict(),
        }


@dataclass(frozen=True)
class FileResult:
    """A successfully analyzed file, relative to the batch root."""

    file: str
    path: str
    metrics: MetricsRecord

    def to_dict(self, include_timestamp: bool = True) -> dict[str, Any]:
        return {
            "file": self.file,
            "path": self.path,
            "metrics": self.metrics.to_dict(include_timestamp=include_timestamp),
        }


@dataclass(frozen=True)
class FileFailure:
    """A file excluded from aggregates, with the reason."""

    file: str
    reason: str

    def to_dict(self) -> dict[str, str]:
        return {"file": self.file, "reason": self.reason}


@dataclass(frozen=True)
class FileLineItem:
    """Per-file row of a folder summary."""

    file: str
    lines: int
    functions: int
    complexity: int
    issues: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "lines": self.lines,
            "functions": self.functions,
            "complexity": self.complexity,
            "issues": self.issues,
        }


@dataclass(frozen=True)
class FolderSummary:
    """Aggregate over all completed files of one batch."""

    folder_name: str
    total_lines: int
    source_lines: int
    total_functions: int
    total_classes: int
    total_complexity: int
    total_issues: int
    avg_lines_per_file: float
    avg_complexity: float
    avg_functions_per_file: float
    files: tuple[FileLineItem, ...] = ()
    failures: tuple[FileFailure, ...] = ()
    fallback_files: int = 0
    timestamp: str = ""
    analyzer: str = ANALYZER_NAME

    @property
    def total_files(self) -> int:
        return len(self.files)

    def to_dict(self, include_timestamp: bool = True) -> dict[str, Any]:
        metadata: dict[str, Any] = {
            "folderName": self.folder_name,
            "analyzer": self.analyzer,
            "totalFiles": self.total_files,
            "failedFiles": len(self.failures),
            "fallbackFiles": self.fallback_files,
        }
        if include_timestamp:
            metadata["timestamp"] = self.timestamp
        return {
            "metadata": metadata,
            "totals": {
                "totalLines": self.total_lines,
                "sourceLines": self.source_lines,
                "totalFunctions": self.total_functions,
                "totalClasses": self.total_classes,
                "totalComplexity": self.total_complexity,
                "totalIssues": self.total_issues,
            },
            "files": [item.to_dict() for item in self.files],
            "averages": {
                "avgLinesPerFile": self.avg_lines_per_file,
                "avgComplexity": self.avg_complexity,
                "avgFunctionsPerFile": self.avg_functions_per_file,
            },
            "failures": [failure.to_dict() for failure in self.failures],
        }
