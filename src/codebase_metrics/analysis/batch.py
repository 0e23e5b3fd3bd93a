"""Batch analysis over a source tree.

Files are analyzed on a thread pool. Each worker writes into its own
pre-assigned slot, so no result list is shared between threads. The folder
summary is built only after every file has a result, a fallback record, or
a failure entry.
"""

from __future__ import annotations

import time
from collections import deque
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Union

from ..config import AnalysisConfig
from ..exceptions import FileAccessError
from ..logging_config import get_logger
from ..metrics.models import FileFailure, FileResult, FolderSummary, MetricsRecord
from ..scanning.discovery import discover_files
from ..storage.writer import ReportWriter
from .aggregate import summarize_folder
from .engine import FileAnalyzer, utc_timestamp

logger = get_logger(__name__)

ProgressCallback = Callable[[int, int, str], None]

# One slot per discovered file
Slot = Union[FileResult, FileFailure, None]


@dataclass
class BatchResult:
    """Outcome of one batch run."""

    root: Path
    results: list[FileResult] = field(default_factory=list)
    failures: list[FileFailure] = field(default_factory=list)
    summary: Optional[FolderSummary] = None
    run_dir: Optional[Path] = None
    report_paths: list[Path] = field(default_factory=list)

    @property
    def total_files(self) -> int:
        return len(self.results) + len(self.failures)

    @property
    def fallback_count(self) -> int:
        return sum(1 for r in self.results if r.metrics.is_fallback)


class BatchAnalyzer:
    """Discovers, analyzes and aggregates every source file under a root.

    Args:
        config: Analysis configuration
        analyzer: Single-file analyzer (built from config when omitted)
    """

    def __init__(
        self, config: Optional[AnalysisConfig] = None, analyzer: Optional[FileAnalyzer] = None
    ):
        self.config = config or AnalysisConfig()
        self.analyzer = analyzer or FileAnalyzer(self.config)

    def _analyze_one(self, path: Path, root: Path) -> Slot:
        rel = path.relative_to(root).as_posix()
        try:
            record = self.analyzer.analyze_file(path)
        except FileAccessError as e:
            logger.warning(f"Skipping {rel}: {e.reason}")
            return FileFailure(file=rel, reason=e.reason)
        except Exception as e:
            # Contain the failure to this file
            logger.exception(f"Unexpected error analyzing {rel}")
            return FileFailure(file=rel, reason=f"{type(e).__name__}: {e}")
        return FileResult(file=rel, path=record.file_path, metrics=record)

    def _timed_out(self, path: Path, root: Path) -> Slot:
        rel = path.relative_to(root).as_posix()
        reason = f"Analysis exceeded {self.config.timeout_seconds}s"
        logger.warning(f"{rel}: {reason}, using text-based analysis")
        try:
            record: MetricsRecord = self.analyzer.timeout_record(path, reason)
        except FileAccessError as e:
            return FileFailure(file=rel, reason=e.reason)
        return FileResult(file=rel, path=record.file_path, metrics=record)

    def analyze_files(
        self,
        files: list[Path],
        root: Path,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> list[Slot]:
        """Analyze files in parallel, returning one slot per input file, in order.

        At most ``effective_workers`` files are in flight. A file times out
        only after its own work has run for ``timeout_seconds``; time spent
        queued behind other files does not count. A timed-out thread cannot
        be stopped, so it is abandoned and later files get a fresh pool.
        """
        slots: list[Slot] = [None] * len(files)
        if not files:
            return slots

        total = len(files)
        limit = self.config.effective_workers
        timeout = self.config.timeout_seconds
        # Set by the worker when it picks the file up
        started: list[Optional[float]] = [None] * total

        def run_slot(index: int) -> Slot:
            started[index] = time.monotonic()
            return self._analyze_one(files[index], root)

        queued = deque(range(total))
        running: dict[Future, int] = {}
        completed = 0
        executor = ThreadPoolExecutor(max_workers=limit)
        try:
            while queued or running:
                while queued and len(running) < limit:
                    index = queued.popleft()
                    running[executor.submit(run_slot, index)] = index

                now = time.monotonic()
                wait_for = float(timeout)
                for index in running.values():
                    if started[index] is not None:
                        wait_for = min(wait_for, started[index] + timeout - now)
                done, _ = wait(running, timeout=max(wait_for, 0.0), return_when=FIRST_COMPLETED)

                finished = []
                for future in done:
                    index = running.pop(future)
                    slots[index] = future.result()
                    finished.append(index)

                now = time.monotonic()
                expired = [
                    future
                    for future, index in running.items()
                    if started[index] is not None and now - started[index] >= timeout
                ]
                if expired:
                    for future in expired:
                        index = running.pop(future)
                        slots[index] = self._timed_out(files[index], root)
                        finished.append(index)
                    # The old pool keeps its stuck threads; queued files must not wait on them
                    executor.shutdown(wait=False)
                    executor = ThreadPoolExecutor(max_workers=limit)

                for index in finished:
                    completed += 1
                    if progress_callback is not None:
                        progress_callback(
                            completed, total, files[index].relative_to(root).as_posix()
                        )
        finally:
            executor.shutdown(wait=False, cancel_futures=True)
        return slots

    def run(
        self,
        root: Path | str,
        output_root: Optional[Path | str] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> BatchResult:
        """Analyze every source file under root.

        Args:
            root: Source directory
            output_root: Report directory; nothing is written when omitted
            progress_callback: Called as ``(done, total, relative_path)``

        Returns:
            BatchResult with per-file results, failures and the folder summary

        Raises:
            RootNotFoundError: If root does not exist
        """
        root = Path(root).resolve()
        files = discover_files(root, self.config)
        logger.info(f"Analyzing {len(files)} files with {self.config.effective_workers} workers")

        batch = BatchResult(root=root)
        for slot in self.analyze_files(files, root, progress_callback):
            if isinstance(slot, FileResult):
                batch.results.append(slot)
            elif isinstance(slot, FileFailure):
                batch.failures.append(slot)

        if batch.results:
            batch.summary = summarize_folder(
                batch.results,
                self.config.folder_name,
                failures=batch.failures,
                timestamp=utc_timestamp(),
            )

        if output_root is not None:
            self._write_reports(batch, ReportWriter(output_root))

        logger.info(
            f"Batch complete: {len(batch.results)} analyzed "
            f"({batch.fallback_count} fallback), {len(batch.failures)} failed"
        )
        return batch

    def _write_reports(self, batch: BatchResult, writer: ReportWriter) -> None:
        batch.run_dir = writer.run_dir
        for result in batch.results:
            try:
                batch.report_paths.append(writer.write_file_report(result))
            except FileAccessError as e:
                logger.warning(f"Could not write report for {result.file}: {e.reason}")
        if batch.summary is not None:
            batch.report_paths.append(writer.write_summary(batch.summary))
