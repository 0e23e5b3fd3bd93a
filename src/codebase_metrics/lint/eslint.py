"""ESLint runner.

ESLint is invoked once per file with the source on stdin and the JSON
formatter on stdout. Exit status 1 only means "lint problems found".
"""

from __future__ import annotations

import json
import subprocess
import threading
from contextlib import nullcontext
from typing import Any, Optional, Sequence

from ..exceptions import LintCollaboratorError
from ..logging_config import get_logger
from ..metrics.models import LintIssue
from .base import BaseLinter

logger = get_logger(__name__)

DEFAULT_COMMAND = ("npx", "--no-install", "eslint")
SUCCESS_CODES = frozenset({0, 1})

# Keep stderr excerpts in error reasons short
_MAX_STDERR = 500


def parse_eslint_output(raw: str) -> list[LintIssue]:
    """Convert ESLint ``--format json`` output into LintIssues.

    Raises:
        ValueError: If the output is not the expected JSON shape
    """
    data = json.loads(raw) if raw.strip() else []
    if not isinstance(data, list):
        raise ValueError("expected a JSON array of file results")

    issues: list[LintIssue] = []
    for result in data[:1]:
        for msg in result.get("messages", []):
            issues.append(
                LintIssue(
                    line=int(msg.get("line") or 0),
                    column=int(msg.get("column") or 0),
                    rule=msg.get("ruleId") or "unknown",
                    severity="error" if msg.get("severity") == 2 else "warning",
                    message=str(msg.get("message", "")),
                )
            )
    return issues


class ESLintLinter(BaseLinter):
    """Lint collaborator backed by the ESLint command line."""

    name = "eslint"

    def __init__(
        self,
        command: Optional[Sequence[str]] = None,
        timeout_seconds: int = 60,
        serialized: bool = False,
        cwd: Optional[str] = None,
    ):
        self.command = list(command or DEFAULT_COMMAND)
        self.timeout_seconds = timeout_seconds
        self.cwd = cwd
        self._lock: Any = threading.Lock() if serialized else nullcontext()

    def build_command(self, path: str) -> list[str]:
        return [*self.command, "--stdin", "--stdin-filename", path, "--format", "json"]

    def lint(self, source: str, path: str) -> list[LintIssue]:
        cmd = self.build_command(path)
        try:
            with self._lock:
                result = subprocess.run(
                    cmd,
                    input=source,
                    capture_output=True,
                    text=True,
                    encoding="utf-8",
                    errors="replace",
                    timeout=self.timeout_seconds,
                    cwd=self.cwd,
                )
        except FileNotFoundError:
            raise LintCollaboratorError(path, f"Command not found: {self.command[0]}")
        except subprocess.TimeoutExpired:
            raise LintCollaboratorError(path, f"Timed out after {self.timeout_seconds}s")
        except OSError as e:
            raise LintCollaboratorError(path, f"Cannot run linter: {e}")

        if result.returncode not in SUCCESS_CODES:
            stderr = (result.stderr or "").strip()[:_MAX_STDERR]
            raise LintCollaboratorError(
                path, f"Exit code {result.returncode}" + (f": {stderr}" if stderr else "")
            )

        try:
            issues = parse_eslint_output(result.stdout)
        except (ValueError, AttributeError, TypeError) as e:
            raise LintCollaboratorError(path, f"Unparseable output: {e}")

        logger.debug(f"{path}: {len(issues)} lint issues")
        return issues
