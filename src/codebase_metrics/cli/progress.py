"""Progress display and summary rendering for the CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from ._common import risk_color

if TYPE_CHECKING:
    from ..analysis import BatchResult


class AnalysisProgress:
    """Per-file progress bar fed by the batch progress callback."""

    def __init__(self, console: Console | None = None, enabled: bool = True):
        self.console = console or Console()
        self.enabled = enabled
        self._progress: Progress | None = None
        self._task_id: TaskID | None = None

    def __enter__(self) -> AnalysisProgress:
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.finish()

    def start(self) -> None:
        if not self.enabled:
            return
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold]{task.description}"),
            BarColumn(bar_width=40, complete_style="cyan", finished_style="green"),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        )
        self._progress.start()
        self._task_id = self._progress.add_task("Discovering files...", total=None)

    def update(self, done: int, total: int, current: str) -> None:
        """Batch progress callback: ``(done, total, relative_path)``."""
        if not self._progress or self._task_id is None:
            return
        label = current if len(current) <= 50 else "..." + current[-47:]
        self._progress.update(self._task_id, completed=done, total=total, description=label)

    def finish(self) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None


def create_summary_table(batch: BatchResult) -> Table:
    """Key totals and averages for a finished batch."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="dim")
    table.add_column(style="bold")

    summary = batch.summary
    table.add_row("Files", str(len(batch.results)))
    if batch.fallback_count:
        table.add_row("Text-only", f"[yellow]{batch.fallback_count}[/]")
    if batch.failures:
        table.add_row("Failed", f"[red]{len(batch.failures)}[/]")
    if summary is not None:
        table.add_row("Lines", str(summary.total_lines))
        table.add_row("Functions", str(summary.total_functions))
        table.add_row("Classes", str(summary.total_classes))
        table.add_row("Avg complexity", f"{summary.avg_complexity:.2f}")
        issues = summary.total_issues
        color = "red" if issues > 10 else "yellow" if issues > 0 else "green"
        table.add_row("Lint issues", f"[{color}]{issues}[/]")
    return table


def create_files_table(batch: BatchResult, limit: int = 10) -> Table:
    """Most complex files first."""
    table = Table(title="Most complex files", title_justify="left", header_style="bold")
    table.add_column("File")
    table.add_column("Lines", justify="right")
    table.add_column("Functions", justify="right")
    table.add_column("Complexity", justify="right")
    table.add_column("Risk")
    table.add_column("Volume", justify="right")

    ranked = sorted(batch.results, key=lambda r: r.metrics.cyclomatic.complexity, reverse=True)
    for result in ranked[:limit]:
        m = result.metrics
        risk = m.cyclomatic.risk_level.value
        table.add_row(
            result.file,
            str(m.size.total_lines),
            str(m.structure.total_functions),
            str(m.cyclomatic.complexity),
            f"[{risk_color(risk)}]{risk}[/]",
            f"{m.halstead.to_dict()['volume']:.2f}",
        )
    return table
