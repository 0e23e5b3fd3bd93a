"""Node taxonomy for the ECMAScript family.

Tree-sitter grammar node types are mapped onto a closed NodeKind
enumeration. Everything downstream of the walker (structural classifier,
complexity accumulator) dispatches on NodeKind only; grammar type names
never leak past ``classify()``.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal
from enum import Enum, auto
from typing import Optional


class NodeKind(Enum):
    # Functions and classes
    FUNCTION_DECLARATION = auto()
    FUNCTION_EXPRESSION = auto()
    ARROW_FUNCTION = auto()
    CLASS_METHOD = auto()
    OBJECT_METHOD = auto()
    CLASS_DECLARATION = auto()
    CLASS_EXPRESSION = auto()

    # Declarations and modules
    LEXICAL_DECLARATION = auto()
    VARIABLE_DECLARATION = auto()
    IMPORT = auto()
    EXPORT = auto()

    # Control flow
    BLOCK = auto()
    IF = auto()
    FOR = auto()
    FOR_IN = auto()
    WHILE = auto()
    DO_WHILE = auto()
    SWITCH = auto()
    SWITCH_CASE = auto()
    SWITCH_DEFAULT = auto()
    TRY = auto()
    CATCH = auto()
    TERNARY = auto()

    # Operator-bearing expressions
    BINARY = auto()
    UNARY = auto()
    UPDATE = auto()
    ASSIGNMENT = auto()
    AUGMENTED_ASSIGNMENT = auto()
    CALL = auto()
    MEMBER = auto()

    # Operands
    IDENTIFIER = auto()
    PRIVATE_IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()
    BOOLEAN = auto()
    NULL = auto()

    # Leaves that carry no metric
    REGEX = auto()
    COMMENT = auto()
    OTHER = auto()


GRAMMAR_KINDS: dict[str, NodeKind] = {
    "function_declaration": NodeKind.FUNCTION_DECLARATION,
    "generator_function_declaration": NodeKind.FUNCTION_DECLARATION,
    "function_expression": NodeKind.FUNCTION_EXPRESSION,
    "function": NodeKind.FUNCTION_EXPRESSION,
    "generator_function": NodeKind.FUNCTION_EXPRESSION,
    "arrow_function": NodeKind.ARROW_FUNCTION,
    "class_declaration": NodeKind.CLASS_DECLARATION,
    "abstract_class_declaration": NodeKind.CLASS_DECLARATION,
    "class": NodeKind.CLASS_EXPRESSION,
    "lexical_declaration": NodeKind.LEXICAL_DECLARATION,
    "variable_declaration": NodeKind.VARIABLE_DECLARATION,
    "import_statement": NodeKind.IMPORT,
    "export_statement": NodeKind.EXPORT,
    "statement_block": NodeKind.BLOCK,
    "if_statement": NodeKind.IF,
    "for_statement": NodeKind.FOR,
    "for_in_statement": NodeKind.FOR_IN,
    "while_statement": NodeKind.WHILE,
    "do_statement": NodeKind.DO_WHILE,
    "switch_statement": NodeKind.SWITCH,
    "switch_case": NodeKind.SWITCH_CASE,
    "switch_default": NodeKind.SWITCH_DEFAULT,
    "try_statement": NodeKind.TRY,
    "catch_clause": NodeKind.CATCH,
    "ternary_expression": NodeKind.TERNARY,
    "binary_expression": NodeKind.BINARY,
    "unary_expression": NodeKind.UNARY,
    "update_expression": NodeKind.UPDATE,
    "assignment_expression": NodeKind.ASSIGNMENT,
    "augmented_assignment_expression": NodeKind.AUGMENTED_ASSIGNMENT,
    "call_expression": NodeKind.CALL,
    "member_expression": NodeKind.MEMBER,
    "subscript_expression": NodeKind.MEMBER,
    "identifier": NodeKind.IDENTIFIER,
    "property_identifier": NodeKind.IDENTIFIER,
    "shorthand_property_identifier": NodeKind.IDENTIFIER,
    "shorthand_property_identifier_pattern": NodeKind.IDENTIFIER,
    "type_identifier": NodeKind.IDENTIFIER,
    "statement_identifier": NodeKind.IDENTIFIER,
    "private_property_identifier": NodeKind.PRIVATE_IDENTIFIER,
    "string": NodeKind.STRING,
    "number": NodeKind.NUMBER,
    "true": NodeKind.BOOLEAN,
    "false": NodeKind.BOOLEAN,
    "null": NodeKind.NULL,
    "regex": NodeKind.REGEX,
    "comment": NodeKind.COMMENT,
    "html_comment": NodeKind.COMMENT,
}

# export default class {} / export default function () {}
DEFAULT_EXPORT_DECLARATIONS: dict[str, NodeKind] = {
    "class": NodeKind.CLASS_DECLARATION,
    "function_expression": NodeKind.FUNCTION_DECLARATION,
    "function": NodeKind.FUNCTION_DECLARATION,
    "generator_function": NodeKind.FUNCTION_DECLARATION,
}

# Kinds that open a new scope for nesting depth
NESTING_KINDS = frozenset(
    {
        NodeKind.BLOCK,
        NodeKind.IF,
        NodeKind.FOR,
        NodeKind.FOR_IN,
        NodeKind.WHILE,
        NodeKind.DO_WHILE,
        NodeKind.SWITCH,
        NodeKind.TRY,
        NodeKind.CATCH,
        NodeKind.FUNCTION_DECLARATION,
        NodeKind.FUNCTION_EXPRESSION,
        NodeKind.ARROW_FUNCTION,
        NodeKind.CLASS_METHOD,
    }
)

# The walker does not descend into these
LEAF_KINDS = frozenset({NodeKind.STRING, NodeKind.NUMBER, NodeKind.REGEX})

LOOP_KINDS = frozenset({NodeKind.FOR, NodeKind.FOR_IN, NodeKind.WHILE, NodeKind.DO_WHILE})

RESERVED_WORDS = frozenset(
    {
        "break", "case", "catch", "class", "const", "continue", "debugger",
        "default", "delete", "do", "else", "export", "extends", "finally",
        "for", "function", "if", "import", "in", "instanceof", "new",
        "return", "super", "switch", "this", "throw", "try", "typeof",
        "var", "void", "while", "with", "yield", "let", "static", "async",
        "await", "true", "false", "null", "undefined",
    }
)  # fmt: skip


def node_text(node) -> str:
    """Source text of a tree-sitter node."""
    text = node.text
    return text.decode("utf-8", errors="replace") if text is not None else ""


def classify(node_type: str, parent_type: Optional[str] = None) -> NodeKind:
    """Map a grammar node type to its NodeKind.

    Two types depend on their parent. ``method_definition`` is a class
    method inside a class body and an object-literal method anywhere else.
    An anonymous class or function directly under ``export default`` is a
    declaration, not an expression.
    """
    if node_type == "method_definition":
        return NodeKind.CLASS_METHOD if parent_type == "class_body" else NodeKind.OBJECT_METHOD
    if parent_type == "export_statement" and node_type in DEFAULT_EXPORT_DECLARATIONS:
        return DEFAULT_EXPORT_DECLARATIONS[node_type]
    return GRAMMAR_KINDS.get(node_type, NodeKind.OTHER)


_ESCAPE_RE = re.compile(
    r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|[0-7]{1,3}|\r\n|.)", re.DOTALL
)
_SINGLE_CHAR_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v"}
_LINE_CONTINUATIONS = frozenset({"\n", "\r", "\r\n", "\u2028", "\u2029"})


def _unescape(match: re.Match) -> str:
    seq = match.group(1)
    if seq in _LINE_CONTINUATIONS:
        return ""
    if seq.startswith("u{"):
        return chr(min(int(seq[2:-1], 16), 0x10FFFF))
    if seq[0] in "ux" and len(seq) > 1:
        return chr(int(seq[1:], 16))
    if seq[0] in "01234567":
        return chr(int(seq, 8))
    return _SINGLE_CHAR_ESCAPES.get(seq, seq)


def decode_escapes(inner: str) -> str:
    """Apply JavaScript string escape sequences (``\\n``, ``\\u00e9``, ...)."""
    if "\\" not in inner:
        return inner
    decoded = _ESCAPE_RE.sub(_unescape, inner)
    # Join \uD83D\uDE00 style surrogate pairs into one code point
    try:
        return decoded.encode("utf-16", "surrogatepass").decode("utf-16")
    except UnicodeDecodeError:
        return decoded


def canonical_string(text: str) -> str:
    """Value of a string literal: quotes removed, escapes applied."""
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"":
        return decode_escapes(text[1:-1])
    return text


def _js_number_to_string(value: float) -> str:
    # Number::toString for finite doubles, from the shortest round-trip digits
    if value == 0:
        return "0"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"

    sign = "-" if value < 0 else ""
    _, digits, exponent = Decimal(repr(abs(value))).as_tuple()
    s = "".join(str(d) for d in digits).rstrip("0")
    exponent += len(digits) - len(s)
    s = s.lstrip("0")
    k = len(s)
    n = k + exponent

    if k <= n <= 21:
        return sign + s + "0" * (n - k)
    if 0 < n <= 21:
        return sign + s[:n] + "." + s[n:]
    if -6 < n <= 0:
        return sign + "0." + "0" * (-n) + s

    e = n - 1
    e_sign = "+" if e >= 0 else "-"
    mantissa = s if k == 1 else s[0] + "." + s[1:]
    return f"{sign}{mantissa}e{e_sign}{abs(e)}"


def canonical_number(text: str) -> Optional[str]:
    """Render a numeric literal the way JavaScript's ``String(n)`` would.

    Returns None for BigInt literals (``10n``), which are not operands.
    Unparseable text is returned unchanged.
    """
    raw = text.replace("_", "")
    if raw.endswith("n"):
        return None

    lowered = raw.lower()
    try:
        if lowered.startswith(("0x", "0o", "0b")):
            value = float(int(lowered, 0))
        elif len(raw) > 1 and raw[0] == "0" and raw.isdigit():
            # Legacy octal (017) unless a digit rules it out (089 is decimal)
            value = float(int(raw, 8)) if all(c in "01234567" for c in raw) else float(raw)
        else:
            value = float(raw)
    except OverflowError:
        return "Infinity"
    except ValueError:
        return text

    return _js_number_to_string(value)
