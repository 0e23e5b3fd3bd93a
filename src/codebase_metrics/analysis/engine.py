"""Single-file analysis pipeline.

Source text goes through the lexical scanner and the parser/tree walker
independently; both results merge into one MetricsRecord. A
ParseStructureError from either the parser or the walker switches the file
to the text-only fallback. Lint results are merged in last and never
influence the other metrics.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ..config import AnalysisConfig
from ..exceptions import LintCollaboratorError, ParseStructureError
from ..file_ops import read_source
from ..lint import BaseLinter, ESLintLinter
from ..logging_config import get_logger
from ..metrics.fallback import fallback_record
from ..metrics.finalizer import finalize
from ..metrics.models import MetricsRecord, StaticAnalysisSummary
from ..metrics.walker import TreeWalker
from ..scanning.lexical import BYTE_ORDER_MARK, scan_lines
from ..scanning.treesitter_parser import TreeSitterParser

logger = get_logger(__name__)

LINT_DISABLED_NOTE = "Static analysis disabled"
LINT_FAILED_PREFIX = "ESLint analysis failed"


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def run_static_analysis(
    linter: Optional[BaseLinter], source: str, path: str
) -> StaticAnalysisSummary:
    """Run the lint collaborator, degrading failures to a note."""
    if linter is None:
        return StaticAnalysisSummary.skipped_with(LINT_DISABLED_NOTE)
    try:
        return StaticAnalysisSummary.from_issues(linter.lint(source, path))
    except LintCollaboratorError as e:
        logger.warning(f"Lint failed for {path}: {e.reason}")
        return StaticAnalysisSummary.failed_with(f"{LINT_FAILED_PREFIX}: {e.reason}")


class FileAnalyzer:
    """Computes the MetricsRecord for one file.

    Holds no per-file state, so one instance can serve every batch worker.
    """

    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        parser: Optional[TreeSitterParser] = None,
        linter: Optional[BaseLinter] = None,
    ):
        self.config = config or AnalysisConfig()
        self.parser = parser or TreeSitterParser(
            enable_jsx=self.config.enable_jsx,
            enable_typescript=self.config.enable_typescript,
        )
        if linter is None and self.config.lint_enabled:
            linter = ESLintLinter(
                command=self.config.lint_command,
                timeout_seconds=self.config.lint_timeout_seconds,
                serialized=self.config.lint_serialized,
            )
        self.linter = linter if self.config.lint_enabled else None

    def analyze_source(
        self, source: str, file_path: str, extension: Optional[str] = None
    ) -> MetricsRecord:
        """Analyze source text as if read from file_path.

        Args:
            source: Source code text
            file_path: Path recorded in the report metadata
            extension: Grammar hint; derived from file_path when omitted

        Returns:
            Finalized MetricsRecord (a fallback record if parsing fails)
        """
        ext = extension if extension is not None else Path(file_path).suffix
        source = source.removeprefix(BYTE_ORDER_MARK)
        timestamp = utc_timestamp()
        size = scan_lines(source)

        try:
            tree = self.parser.parse(source, ext, path=file_path)
            walker = TreeWalker(max_depth=self.config.max_tree_depth, path=file_path)
            acc = walker.walk(tree.root_node)
        except ParseStructureError as e:
            logger.info(f"Falling back to text analysis for {file_path}: {e.reason}")
            return fallback_record(source, file_path, reason=e.reason, timestamp=timestamp)

        static_analysis = run_static_analysis(self.linter, source, file_path)
        return finalize(
            acc, size, file_path, static_analysis=static_analysis, timestamp=timestamp
        )

    def analyze_file(self, filepath: Path) -> MetricsRecord:
        """Read and analyze one file.

        Raises:
            FileAccessError: If the file cannot be read or exceeds the size limit
        """
        filepath = Path(filepath).resolve()
        source = read_source(filepath, self.config.max_file_size_bytes)
        return self.analyze_source(source, str(filepath))

    def timeout_record(self, filepath: Path, reason: str) -> MetricsRecord:
        """Text-only record for a file whose full analysis did not finish.

        Raises:
            FileAccessError: If the file cannot be read
        """
        filepath = Path(filepath).resolve()
        source = read_source(filepath, self.config.max_file_size_bytes)
        return fallback_record(
            source, str(filepath), reason=reason, timestamp=utc_timestamp(), timed_out=True
        )
