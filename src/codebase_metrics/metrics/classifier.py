"""Structural classifier: node kind to structural counter increments.

Multi-binding declarations count once per declarator, while import and
export statements count once per statement regardless of how many names
they bind.
"""

from __future__ import annotations

from typing import Any, Callable

from .accumulator import MetricsAccumulator
from .taxonomy import LOOP_KINDS, NodeKind, node_text


def _declaration_kind(node: Any, default: str) -> str:
    kind = node.child_by_field_name("kind")
    return node_text(kind) if kind is not None else default


def _count_declarators(node: Any) -> int:
    return sum(1 for child in node.named_children if child.type == "variable_declarator")


def _named_function(node: Any, acc: MetricsAccumulator) -> None:
    acc.named_functions += 1


def _anonymous_function(node: Any, acc: MetricsAccumulator) -> None:
    acc.anonymous_functions += 1


def _arrow_function(node: Any, acc: MetricsAccumulator) -> None:
    acc.arrow_functions += 1


def _class_method(node: Any, acc: MetricsAccumulator) -> None:
    acc.methods += 1


def _class_declaration(node: Any, acc: MetricsAccumulator) -> None:
    acc.classes += 1


def _lexical_declaration(node: Any, acc: MetricsAccumulator) -> None:
    count = _count_declarators(node)
    if _declaration_kind(node, "let") == "const":
        acc.constants += count
    else:
        acc.variables += count


def _variable_declaration(node: Any, acc: MetricsAccumulator) -> None:
    acc.variables += _count_declarators(node)


def _for_in(node: Any, acc: MetricsAccumulator) -> None:
    # for (const x of xs) binds one name; for (x of xs) binds none
    kind = node.child_by_field_name("kind")
    if kind is None:
        return
    if node_text(kind) == "const":
        acc.constants += 1
    else:
        acc.variables += 1


def _import(node: Any, acc: MetricsAccumulator) -> None:
    acc.imports += 1


def is_bare_reexport(node: Any) -> bool:
    """True for ``export * from '...'`` without a namespace name."""
    has_star = any(child.type == "*" for child in node.children)
    has_namespace = any(child.type == "namespace_export" for child in node.named_children)
    return has_star and not has_namespace


def _export(node: Any, acc: MetricsAccumulator) -> None:
    if not is_bare_reexport(node):
        acc.exports += 1


def _conditional(node: Any, acc: MetricsAccumulator) -> None:
    acc.conditionals += 1


def _loop(node: Any, acc: MetricsAccumulator) -> None:
    acc.loops += 1


StructuralHandler = Callable[[Any, MetricsAccumulator], None]

STRUCTURAL_HANDLERS: dict[NodeKind, list[StructuralHandler]] = {
    NodeKind.FUNCTION_DECLARATION: [_named_function],
    NodeKind.FUNCTION_EXPRESSION: [_anonymous_function],
    NodeKind.ARROW_FUNCTION: [_arrow_function],
    NodeKind.CLASS_METHOD: [_class_method],
    NodeKind.CLASS_DECLARATION: [_class_declaration],
    NodeKind.LEXICAL_DECLARATION: [_lexical_declaration],
    NodeKind.VARIABLE_DECLARATION: [_variable_declaration],
    NodeKind.IMPORT: [_import],
    NodeKind.EXPORT: [_export],
    NodeKind.IF: [_conditional],
}
for _kind in LOOP_KINDS:
    STRUCTURAL_HANDLERS[_kind] = [_loop]
STRUCTURAL_HANDLERS[NodeKind.FOR_IN].append(_for_in)


def classify_structure(kind: NodeKind, node: Any, acc: MetricsAccumulator) -> None:
    """Apply the structural counter increments for one node."""
    for handler in STRUCTURAL_HANDLERS.get(kind, ()):
        handler(node, acc)
