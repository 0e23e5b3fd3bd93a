"""Metrics computation engine: tree walk, classification, finalization."""

from .accumulator import MetricsAccumulator, NestingTracker
from .finalizer import compute_halstead, finalize, risk_level
from .models import (
    CyclomaticComplexity,
    FileFailure,
    FileResult,
    FolderSummary,
    HalsteadMetrics,
    LintIssue,
    MetricsRecord,
    RiskLevel,
    SizeMetrics,
    StaticAnalysisSummary,
    StructuralComplexity,
    round_half_up,
)
from .taxonomy import NodeKind, classify
from .walker import TreeWalker, walk_tree

__all__ = [
    "MetricsAccumulator",
    "NestingTracker",
    "compute_halstead",
    "finalize",
    "risk_level",
    "CyclomaticComplexity",
    "FileFailure",
    "FileResult",
    "FolderSummary",
    "HalsteadMetrics",
    "LintIssue",
    "MetricsRecord",
    "RiskLevel",
    "SizeMetrics",
    "StaticAnalysisSummary",
    "StructuralComplexity",
    "round_half_up",
    "NodeKind",
    "classify",
    "TreeWalker",
    "walk_tree",
]
