"""Tree-sitter parser wrapper.

Provides one interface for parsing JavaScript, TypeScript and TSX sources.
A tree that contains ERROR or MISSING nodes is treated as a parse failure;
the metrics engine never walks partial trees. With JSX disabled, a clean
tree that contains JSX elements is rejected the same way.

Usage:
    parser = TreeSitterParser()
    tree = parser.parse(source, ".tsx", path="src/App.tsx")
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Callable, Optional

import tree_sitter
import tree_sitter_javascript
import tree_sitter_typescript

from ..exceptions import ParseStructureError
from ..logging_config import get_logger
from .languages import grammar_candidates

logger = get_logger(__name__)

JSX_DISABLED_REASON = "JSX syntax is disabled"

_GRAMMAR_LOADERS: dict[str, Callable[[], Any]] = {
    "javascript": tree_sitter_javascript.language,
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}

_languages: dict[str, tree_sitter.Language] = {}
_languages_lock = threading.Lock()


def get_language(name: str) -> tree_sitter.Language:
    """Load (once) and return the tree-sitter Language for a grammar name."""
    with _languages_lock:
        lang = _languages.get(name)
        if lang is None:
            loader = _GRAMMAR_LOADERS.get(name)
            if loader is None:
                raise KeyError(f"Unknown grammar: {name}")
            # tree-sitter >= 0.23 grammars return a PyCapsule; wrap in Language()
            lang = tree_sitter.Language(loader())
            _languages[name] = lang
        return lang


def get_supported_grammars() -> list[str]:
    """Get list of grammar names this parser can load."""
    return list(_GRAMMAR_LOADERS)


def describe_errors(root: Any, limit: int = 3) -> str:
    """Summarize the first ERROR/MISSING nodes of a tree for log messages."""
    found: list[str] = []
    stack = [root]
    while stack and len(found) < limit:
        node = stack.pop()
        if node.is_missing:
            line, col = node.start_point
            found.append(f"missing '{node.type}' at {line + 1}:{col + 1}")
            continue
        if node.type == "ERROR":
            line, col = node.start_point
            found.append(f"syntax error at {line + 1}:{col + 1}")
            continue
        if node.has_error:
            stack.extend(reversed(node.children))
    return "; ".join(found) or "syntax error"


def contains_jsx(root: Any) -> bool:
    """True if any node below root is JSX syntax."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type.startswith("jsx_"):
            return True
        stack.extend(node.named_children)
    return False


class TreeSitterParser:
    """Wrapper around tree-sitter for the ECMAScript family.

    Parser objects are kept per thread; a single TreeSitterParser can be
    shared by all batch workers.
    """

    def __init__(self, enable_jsx: bool = True, enable_typescript: bool = True) -> None:
        self.enable_jsx = enable_jsx
        self.enable_typescript = enable_typescript
        self._local = threading.local()

    def _parser_for(self, grammar: str) -> tree_sitter.Parser:
        parsers = getattr(self._local, "parsers", None)
        if parsers is None:
            parsers = {}
            self._local.parsers = parsers
        parser = parsers.get(grammar)
        if parser is None:
            parser = tree_sitter.Parser(get_language(grammar))
            parsers[grammar] = parser
        return parser

    def parse(self, source: str, extension: str, path: Optional[Path | str] = None) -> Any:
        """Parse source text and return an error-free syntax tree.

        Args:
            source: Source code text
            extension: File extension hint (e.g. ".jsx")
            path: File path, used only in error messages

        Returns:
            tree_sitter.Tree whose root node has no errors

        Raises:
            ParseStructureError: If no enabled grammar produces an error-free tree
        """
        label = path if path is not None else f"<source{extension}>"
        candidates = grammar_candidates(extension, enable_typescript=self.enable_typescript)
        if not candidates:
            raise ParseStructureError(label, f"No enabled grammar for extension '{extension}'")

        code = source.encode("utf-8", errors="replace")
        reasons = []
        for grammar in candidates:
            tree = self._parser_for(grammar).parse(code)
            if tree is None:
                reasons.append(f"{grammar}: parser returned no tree")
                continue
            if tree.root_node.has_error:
                reasons.append(f"{grammar}: {describe_errors(tree.root_node)}")
            elif not self.enable_jsx and contains_jsx(tree.root_node):
                reasons.append(f"{grammar}: {JSX_DISABLED_REASON}")
            else:
                return tree
            logger.debug(f"{label}: {grammar} grammar rejected source")

        raise ParseStructureError(label, "; ".join(reasons))

