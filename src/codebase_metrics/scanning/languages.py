"""Language configurations: supported extensions and grammar selection.

The extension allow-list is fixed. Grammar candidates are tried in order by
the parser; the first one that yields an error-free tree wins.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class LanguageConfig:
    """Everything the parser needs to know about one file extension."""

    extension: str
    # Primary grammar, always tried first
    grammar: str
    # Grammar tried next when TypeScript is enabled
    extended_grammar: str | None = None


# tree-sitter-javascript parses JSX natively; the TSX grammar additionally
# accepts type annotations inside .js files.
LANGUAGES: dict[str, LanguageConfig] = {
    ".js": LanguageConfig(".js", "javascript", "tsx"),
    ".jsx": LanguageConfig(".jsx", "javascript", "tsx"),
    ".mjs": LanguageConfig(".mjs", "javascript", "tsx"),
    ".cjs": LanguageConfig(".cjs", "javascript", "tsx"),
    ".ts": LanguageConfig(".ts", "typescript"),
    ".tsx": LanguageConfig(".tsx", "tsx"),
}

SUPPORTED_EXTENSIONS: tuple[str, ...] = (".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs")

TYPESCRIPT_GRAMMARS = frozenset({"typescript", "tsx"})


def is_supported(path: Path) -> bool:
    """True if the file extension is on the allow-list (case-insensitive)."""
    return path.suffix.lower() in LANGUAGES


def grammar_candidates(extension: str, enable_typescript: bool = True) -> list[str]:
    """Ordered grammar names to try for a file extension.

    Args:
        extension: File extension including the dot (case-insensitive)
        enable_typescript: Allow the TypeScript and TSX grammars, including
            the TSX retry for JavaScript files

    Returns:
        Grammar names, possibly empty when the extension cannot be parsed
        with the enabled grammars
    """
    config = LANGUAGES.get(extension.lower())
    if config is None:
        return []

    candidates = []
    if enable_typescript or config.grammar not in TYPESCRIPT_GRAMMARS:
        candidates.append(config.grammar)
    if config.extended_grammar and enable_typescript:
        candidates.append(config.extended_grammar)
    return candidates
