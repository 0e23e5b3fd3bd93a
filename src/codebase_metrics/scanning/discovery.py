"""Source file discovery.

Walks a root directory depth-first with entries sorted by name, so the
resulting order is stable across platforms and runs.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from ..config import AnalysisConfig
from ..exceptions import RootNotFoundError
from ..logging_config import get_logger
from .languages import is_supported

logger = get_logger(__name__)


def discover_files(root: Path, config: Optional[AnalysisConfig] = None) -> list[Path]:
    """
    Collect analyzable source files under root.

    Directories are recursed in place (a subdirectory's files appear where
    the subdirectory sorts among its siblings). Directory names listed in
    ``skip_dirs`` are never entered.

    Args:
        root: Directory to scan
        config: Analysis configuration (defaults when omitted)

    Returns:
        Ordered list of file paths

    Raises:
        RootNotFoundError: If root does not exist or is not a directory
    """
    config = config or AnalysisConfig()
    root = Path(root)
    if not root.is_dir():
        raise RootNotFoundError(root)

    skip = set(config.skip_dirs)
    files: list[Path] = []
    # Track visited directories to survive symlink loops when following links
    visited: set[tuple[int, int]] = set()

    def _walk(directory: Path) -> None:
        try:
            st = directory.stat()
        except OSError as e:
            logger.warning(f"Cannot stat {directory}: {e}")
            return
        key = (st.st_dev, st.st_ino)
        if key in visited:
            logger.debug(f"Skipped (loop): {directory}")
            return
        visited.add(key)

        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.warning(f"Cannot list {directory}: {e}")
            return

        for entry in entries:
            path = Path(entry.path)
            if entry.is_symlink() and not config.follow_symlinks:
                logger.debug(f"Skipped (symlink): {path}")
                continue
            try:
                is_dir = entry.is_dir()
            except OSError:
                continue
            if is_dir:
                if entry.name in skip:
                    logger.debug(f"Skipped (dir): {path}")
                    continue
                _walk(path)
            elif is_supported(path):
                files.append(path)

    _walk(root)
    logger.info(f"Discovered {len(files)} source files under {root}")
    return files
