"""Folder-level aggregation over completed file results."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..metrics.models import (
    FileFailure,
    FileLineItem,
    FileResult,
    FolderSummary,
    round_half_up,
)

# Column order of the per-file matrix
_COLUMNS = ("lines", "source", "functions", "classes", "complexity", "issues")


def _row(result: FileResult) -> list[int]:
    m = result.metrics
    return [
        m.size.total_lines,
        m.size.source_lines,
        m.structure.total_functions,
        m.structure.classes,
        m.cyclomatic.complexity,
        m.static_analysis.total_issues,
    ]


def _mean(column: np.ndarray) -> float:
    if column.size == 0:
        return 0.0
    return round_half_up(float(column.mean()), 2)


def summarize_folder(
    results: Sequence[FileResult],
    folder_name: str,
    failures: Sequence[FileFailure] = (),
    timestamp: str = "",
) -> FolderSummary:
    """Sum counters and average per-file values over all completed files.

    Failed files contribute to ``failures`` only, never to totals.
    """
    matrix = np.array([_row(r) for r in results], dtype=np.int64).reshape(-1, len(_COLUMNS))
    totals = matrix.sum(axis=0)
    col = {name: i for i, name in enumerate(_COLUMNS)}

    items = tuple(
        FileLineItem(
            file=r.file,
            lines=r.metrics.size.total_lines,
            functions=r.metrics.structure.total_functions,
            complexity=r.metrics.cyclomatic.complexity,
            issues=r.metrics.static_analysis.total_issues,
        )
        for r in results
    )

    return FolderSummary(
        folder_name=folder_name,
        total_lines=int(totals[col["lines"]]),
        source_lines=int(totals[col["source"]]),
        total_functions=int(totals[col["functions"]]),
        total_classes=int(totals[col["classes"]]),
        total_complexity=int(totals[col["complexity"]]),
        total_issues=int(totals[col["issues"]]),
        avg_lines_per_file=_mean(matrix[:, col["lines"]]),
        avg_complexity=_mean(matrix[:, col["complexity"]]),
        avg_functions_per_file=_mean(matrix[:, col["functions"]]),
        files=items,
        failures=tuple(failures),
        fallback_files=sum(1 for r in results if r.metrics.is_fallback),
        timestamp=timestamp,
    )
