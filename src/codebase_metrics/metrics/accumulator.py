"""Mutable per-analysis state carried through one tree walk.

A MetricsAccumulator is created per file and discarded after finalization;
nothing in here is shared between analyses.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field


class DepthToken:
    """Handle for one acquired nesting level.

    Releasing is idempotent: a token decrements its tracker at most once.
    """

    __slots__ = ("_tracker", "_released")

    def __init__(self, tracker: NestingTracker) -> None:
        self._tracker = tracker
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        self._tracker._exit()

    def __enter__(self) -> DepthToken:
        return self

    def __exit__(self, *exc) -> None:
        self.release()


class NestingTracker:
    """Current and peak nesting depth."""

    def __init__(self) -> None:
        self.depth = 0
        self.max_depth = 0

    def acquire(self) -> DepthToken:
        self.depth += 1
        if self.depth > self.max_depth:
            self.max_depth = self.depth
        return DepthToken(self)

    def _exit(self) -> None:
        self.depth -= 1


@dataclass
class MetricsAccumulator:
    """Raw counters filled in by the classifier and the complexity rules."""

    # Structural counters
    named_functions: int = 0
    anonymous_functions: int = 0
    arrow_functions: int = 0
    methods: int = 0
    classes: int = 0
    variables: int = 0
    constants: int = 0
    imports: int = 0
    exports: int = 0
    conditionals: int = 0
    loops: int = 0
    ast_nodes: int = 0

    # McCabe
    decision_points: int = 0

    # Halstead multisets; Counter keeps first-seen insertion order
    operators: Counter = field(default_factory=Counter)
    operands: Counter = field(default_factory=Counter)

    nesting: NestingTracker = field(default_factory=NestingTracker)

    @property
    def function_count(self) -> int:
        """Functions of all three categories plus class methods."""
        return self.named_functions + self.anonymous_functions + self.arrow_functions + self.methods

    def add_operator(self, symbol: str) -> None:
        self.operators[symbol] += 1

    def add_operand(self, token: str) -> None:
        self.operands[token] += 1
