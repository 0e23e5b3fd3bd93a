"""McCabe decision points and Halstead operator/operand collection."""

from __future__ import annotations

from typing import Any, Callable, Optional

from .accumulator import MetricsAccumulator
from .taxonomy import (
    LOOP_KINDS,
    RESERVED_WORDS,
    NodeKind,
    canonical_number,
    canonical_string,
    node_text,
)

LOGICAL_CONNECTIVES = frozenset({"&&", "||"})

# Containers whose identifier children name a JSX tag or attribute
JSX_NAME_PARENTS = frozenset(
    {
        "jsx_opening_element",
        "jsx_closing_element",
        "jsx_self_closing_element",
        "jsx_attribute",
        "jsx_namespace_name",
    }
)
_JSX_NAME_CHAINS = frozenset({"member_expression", "nested_identifier"})


def operator_symbol(node: Any) -> Optional[str]:
    """The operator token of an expression node, or None if it has none."""
    op = node.child_by_field_name("operator")
    if op is not None:
        return node_text(op)
    for child in node.children:
        if not child.is_named:
            return child.type
    return None


def names_jsx_tag(node: Any, parent: Any) -> bool:
    """True if node is (part of) a JSX element or attribute name."""
    while parent is not None and parent.type in _JSX_NAME_CHAINS:
        parent = parent.parent
    return parent is not None and parent.type in JSX_NAME_PARENTS


# Bodies whose leading string statements are directives ('use strict')
_FUNCTION_TYPES = frozenset(
    {
        "function_declaration",
        "generator_function_declaration",
        "function_expression",
        "function",
        "generator_function",
        "arrow_function",
        "method_definition",
    }
)
_PROLOGUE_SKIPPABLE = frozenset({"comment", "hash_bang_line", "html_comment"})


def _is_string_statement(statement: Any) -> bool:
    named = statement.named_children
    return (
        statement.type == "expression_statement" and len(named) == 1 and named[0].type == "string"
    )


def is_directive(node: Any, parent: Any) -> bool:
    """True if a string literal is a directive in a program or function prologue."""
    if parent is None or not _is_string_statement(parent):
        return False
    body = parent.parent
    if body is None:
        return False
    if body.type == "statement_block":
        owner = body.parent
        if owner is None or owner.type not in _FUNCTION_TYPES:
            return False
    elif body.type != "program":
        return False

    for statement in body.named_children:
        if statement.id == parent.id:
            return True
        if statement.type in _PROLOGUE_SKIPPABLE:
            continue
        if not _is_string_statement(statement):
            return False
    return False


# -- McCabe -----------------------------------------------------------------


def _decision_point(node: Any, parent: Any, acc: MetricsAccumulator) -> None:
    acc.decision_points += 1


def _logical_connective(node: Any, parent: Any, acc: MetricsAccumulator) -> None:
    if operator_symbol(node) in LOGICAL_CONNECTIVES:
        acc.decision_points += 1


# -- Halstead operators -----------------------------------------------------


def _symbol_operator(node: Any, parent: Any, acc: MetricsAccumulator) -> None:
    symbol = operator_symbol(node)
    if symbol:
        acc.add_operator(symbol)


def _assignment_operator(node: Any, parent: Any, acc: MetricsAccumulator) -> None:
    acc.add_operator("=")


def _call_operator(node: Any, parent: Any, acc: MetricsAccumulator) -> None:
    acc.add_operator("()")


def _member_operator(node: Any, parent: Any, acc: MetricsAccumulator) -> None:
    if not names_jsx_tag(node, parent):
        acc.add_operator(".")


# -- Halstead operands ------------------------------------------------------


def _identifier_operand(node: Any, parent: Any, acc: MetricsAccumulator) -> None:
    name = node_text(node)
    if name in RESERVED_WORDS or names_jsx_tag(node, parent):
        return
    acc.add_operand(name)


def _private_identifier_operand(node: Any, parent: Any, acc: MetricsAccumulator) -> None:
    acc.add_operand(node_text(node).lstrip("#"))


def _string_operand(node: Any, parent: Any, acc: MetricsAccumulator) -> None:
    if is_directive(node, parent):
        return
    acc.add_operand(canonical_string(node_text(node)))


def _number_operand(node: Any, parent: Any, acc: MetricsAccumulator) -> None:
    value = canonical_number(node_text(node))
    if value is not None:
        acc.add_operand(value)


def _keyword_operand(node: Any, parent: Any, acc: MetricsAccumulator) -> None:
    # true / false / null
    acc.add_operand(node.type)


ComplexityHandler = Callable[[Any, Any, MetricsAccumulator], None]

COMPLEXITY_HANDLERS: dict[NodeKind, list[ComplexityHandler]] = {
    NodeKind.IF: [_decision_point],
    NodeKind.TERNARY: [_decision_point],
    NodeKind.SWITCH_CASE: [_decision_point],
    NodeKind.CATCH: [_decision_point],
    NodeKind.BINARY: [_logical_connective, _symbol_operator],
    NodeKind.UNARY: [_symbol_operator],
    NodeKind.UPDATE: [_symbol_operator],
    NodeKind.AUGMENTED_ASSIGNMENT: [_symbol_operator],
    NodeKind.ASSIGNMENT: [_assignment_operator],
    NodeKind.CALL: [_call_operator],
    NodeKind.MEMBER: [_member_operator],
    NodeKind.IDENTIFIER: [_identifier_operand],
    NodeKind.PRIVATE_IDENTIFIER: [_private_identifier_operand],
    NodeKind.STRING: [_string_operand],
    NodeKind.NUMBER: [_number_operand],
    NodeKind.BOOLEAN: [_keyword_operand],
    NodeKind.NULL: [_keyword_operand],
}
for _kind in LOOP_KINDS:
    COMPLEXITY_HANDLERS[_kind] = [_decision_point]


def accumulate_complexity(
    kind: NodeKind, node: Any, parent: Any, acc: MetricsAccumulator
) -> None:
    """Apply decision-point and Halstead rules for one node."""
    for handler in COMPLEXITY_HANDLERS.get(kind, ()):
        handler(node, parent, acc)
