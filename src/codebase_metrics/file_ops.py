"""
Safe file operations for codebase-metrics.

Provides size-limited reads and JSON writes that report failures as
FileAccessError instead of leaking OSError to callers.
"""

import json
from pathlib import Path
from typing import Any

from .exceptions import FileAccessError


def read_source(filepath: Path, max_bytes: int, encoding: str = "utf-8-sig") -> str:
    """
    Read a source file with a size check.

    Undecodable bytes are replaced rather than rejected; line and token
    counting only needs a best-effort text view. The default encoding drops
    a leading UTF-8 byte order mark.

    Args:
        filepath: File to read
        max_bytes: Largest accepted file size in bytes
        encoding: Text encoding

    Returns:
        File contents as string

    Raises:
        FileAccessError: If the file is missing, too large, or unreadable
    """
    try:
        if not filepath.is_file():
            raise FileAccessError(filepath, "File not found")
        size = filepath.stat().st_size
    except OSError as e:
        raise FileAccessError(filepath, f"OS error: {e}")

    if size > max_bytes:
        raise FileAccessError(filepath, f"File size {size} exceeds limit of {max_bytes} bytes")

    try:
        with open(filepath, encoding=encoding, errors="replace", newline="") as f:
            return f.read()
    except OSError as e:
        raise FileAccessError(filepath, f"OS error: {e}")


def write_json(filepath: Path, data: Any) -> None:
    """
    Write data as indented JSON, creating parent directories.

    Raises:
        FileAccessError: If the file cannot be written
    """
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write("\n")
    except OSError as e:
        raise FileAccessError(filepath, f"Write failed: {e}")
