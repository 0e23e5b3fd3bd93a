"""Single-pass syntax tree walker.

The walk is iterative: an explicit stack of enter/exit events replaces
recursion, so deeply nested sources cannot hit the interpreter's recursion
limit. Only named nodes are visited; comments are skipped and literal
nodes are treated as leaves.

Usage:
    acc = walk_tree(tree.root_node, path="src/app.js")
"""

from __future__ import annotations

from typing import Any, Optional

from ..exceptions import ParseStructureError
from ..logging_config import get_logger
from .accumulator import DepthToken, MetricsAccumulator
from .classifier import classify_structure
from .complexity import accumulate_complexity
from .taxonomy import LEAF_KINDS, NESTING_KINDS, NodeKind, classify

logger = get_logger(__name__)

DEFAULT_MAX_DEPTH = 5000

_ENTER = 0
_EXIT = 1


def _node_id(node: Any) -> int:
    node_id = getattr(node, "id", None)
    return node_id if node_id is not None else id(node)


class TreeWalker:
    """Walks one syntax tree and fills a MetricsAccumulator.

    Args:
        max_depth: Ancestor-path length treated as a malformed tree
        path: File path used in error messages
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH, path: Optional[str] = None) -> None:
        self.max_depth = max_depth
        self.path = path or "<tree>"

    def walk(self, root: Any, acc: Optional[MetricsAccumulator] = None) -> MetricsAccumulator:
        """Visit every named node once on entry and once on exit.

        Raises:
            ParseStructureError: If a node lacks a type, appears among its own
                ancestors, or the tree is deeper than max_depth
        """
        acc = acc if acc is not None else MetricsAccumulator()
        tokens: list[DepthToken] = []
        ancestors: list[Any] = []
        ancestor_ids: set[int] = set()

        # (event, node, parent, token)
        stack: list[tuple[int, Any, Any, Optional[DepthToken]]] = [(_ENTER, root, None, None)]
        try:
            while stack:
                event, node, parent, token = stack.pop()

                if event == _EXIT:
                    if token is not None:
                        token.release()
                    ancestor_ids.discard(_node_id(node))
                    ancestors.pop()
                    continue

                node_type = getattr(node, "type", None)
                if not node_type:
                    raise ParseStructureError(self.path, "Encountered a node without a type")

                parent_type = parent.type if parent is not None else None
                kind = classify(node_type, parent_type)
                if kind is NodeKind.COMMENT:
                    continue

                node_key = _node_id(node)
                if node_key in ancestor_ids:
                    raise ParseStructureError(
                        self.path, f"Cycle detected at '{node_type}' node"
                    )
                if len(ancestors) >= self.max_depth:
                    raise ParseStructureError(
                        self.path, f"Tree depth exceeds limit of {self.max_depth}"
                    )

                acc.ast_nodes += 1
                token = None
                if kind in NESTING_KINDS:
                    token = acc.nesting.acquire()
                    tokens.append(token)

                classify_structure(kind, node, acc)
                accumulate_complexity(kind, node, parent, acc)

                ancestors.append(node)
                ancestor_ids.add(node_key)
                stack.append((_EXIT, node, parent, token))

                if kind in LEAF_KINDS:
                    continue
                # Reversed so the first child is popped (entered) first
                for child in reversed(node.named_children):
                    stack.append((_ENTER, child, node, None))
        finally:
            # Release whatever an aborted walk left open; no-op on success
            for token in tokens:
                token.release()

        if acc.nesting.depth != 0:
            raise AssertionError(
                f"Nesting depth is {acc.nesting.depth} after walking {self.path}, expected 0"
            )
        return acc


def walk_tree(
    root: Any, path: Optional[str] = None, max_depth: int = DEFAULT_MAX_DEPTH
) -> MetricsAccumulator:
    """Walk a syntax tree and return the filled accumulator."""
    return TreeWalker(max_depth=max_depth, path=path).walk(root)
