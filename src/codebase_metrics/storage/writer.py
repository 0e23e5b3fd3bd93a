"""Write per-file and folder reports as JSON.

Every batch gets its own run directory::

    <output>/individual-files/<YYYY-MM-DDTHH-MM-SS>/
        analysis-src__app.json
        analysis-src__components__Button.json
        summary-<folder>.json

Two sources that flatten to the same name (``util.js`` and ``util.ts``)
get a numeric suffix in the order they are written: ``analysis-util-2.json``.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path, PurePath
from typing import Optional

from ..file_ops import write_json
from ..logging_config import get_logger
from ..metrics.models import FileResult, FolderSummary

logger = get_logger(__name__)

RUN_DIR_PARENT = "individual-files"
RUN_TIMESTAMP_FORMAT = "%Y-%m-%dT%H-%M-%S"


def report_name(relative_path: str) -> str:
    """``src/utils/math.js`` -> ``analysis-src__utils__math.json``."""
    pure = PurePath(relative_path)
    stem = pure.with_suffix("") if pure.suffix else pure
    return f"analysis-{'__'.join(stem.parts)}.json"


class ReportWriter:
    """Writes one batch's reports into a timestamped run directory.

    Usage::

        writer = ReportWriter("reports")
        writer.write_file_report(result)
        writer.write_summary(summary)
    """

    def __init__(self, output_root: Path | str, run_started: Optional[datetime] = None) -> None:
        self.output_root = Path(output_root)
        started = run_started or datetime.now()
        self.run_dir = self.output_root / RUN_DIR_PARENT / started.strftime(RUN_TIMESTAMP_FORMAT)
        self._claimed: set[str] = set()

    def claim_name(self, relative_path: str) -> str:
        """Report file name for relative_path, unique within this run."""
        name = report_name(relative_path)
        stem = name.removesuffix(".json")
        counter = 1
        while name.lower() in self._claimed:
            counter += 1
            name = f"{stem}-{counter}.json"
        self._claimed.add(name.lower())
        return name

    def write_file_report(self, result: FileResult) -> Path:
        """Write one file's MetricsRecord.

        Raises:
            FileAccessError: If the report cannot be written
        """
        target = self.run_dir / self.claim_name(result.file)
        write_json(target, result.metrics.to_dict())
        logger.debug(f"Wrote {target}")
        return target

    def write_summary(self, summary: FolderSummary) -> Path:
        """Write the folder summary.

        Raises:
            FileAccessError: If the report cannot be written
        """
        target = self.run_dir / f"summary-{summary.folder_name}.json"
        write_json(target, summary.to_dict())
        logger.info(f"Wrote folder summary to {target}")
        return target
