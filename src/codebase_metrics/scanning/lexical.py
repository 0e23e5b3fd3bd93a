"""Line-based size scanner.

Counts physical line categories straight from source text. The comment and
logical classifications are line-granular heuristics, not token-aware: a
string literal containing ``//`` at the start of a line is counted as a
comment line.
"""

from ..metrics.models import SizeMetrics

COMMENT_PREFIXES = ("//", "/*", "*")
COMMENT_SUFFIX = "*/"
BRACE_ONLY_LINES = frozenset({"{", "}", "};"})
BYTE_ORDER_MARK = "\ufeff"


def is_comment_line(stripped: str) -> bool:
    return stripped.startswith(COMMENT_PREFIXES) or stripped.endswith(COMMENT_SUFFIX)


def is_logical_line(stripped: str) -> bool:
    if not stripped or stripped.startswith(COMMENT_PREFIXES):
        return False
    return stripped not in BRACE_ONLY_LINES


def scan_lines(content: str) -> SizeMetrics:
    """Count total, source, comment, blank and logical lines.

    Lines are split on ``\\n`` only; a trailing ``\\r`` disappears with the
    whitespace trim. A leading byte order mark is ignored. Empty text is a
    single blank line.
    """
    lines = content.removeprefix(BYTE_ORDER_MARK).split("\n")

    source = 0
    comments = 0
    logical = 0
    for line in lines:
        stripped = line.strip()
        if not stripped:
            continue
        source += 1
        if is_comment_line(stripped):
            comments += 1
        if is_logical_line(stripped):
            logical += 1

    return SizeMetrics(
        total_lines=len(lines),
        source_lines=source,
        comment_lines=comments,
        blank_lines=len(lines) - source,
        logical_lines=logical,
    )
