"""Source scanning: file discovery, line scanning and tree-sitter parsing."""

from .discovery import discover_files
from .languages import LANGUAGES, SUPPORTED_EXTENSIONS, LanguageConfig, is_supported
from .lexical import scan_lines
from .treesitter_parser import TreeSitterParser, get_supported_grammars

__all__ = [
    "discover_files",
    "scan_lines",
    "LanguageConfig",
    "LANGUAGES",
    "SUPPORTED_EXTENSIONS",
    "is_supported",
    "TreeSitterParser",
    "get_supported_grammars",
]
