"""Turns raw walk counters into a finished MetricsRecord.

Formulas:
    complexity         = 1 + decision_points
    calculated_length  = n1 * log2(n1) + n2 * log2(n2)    (zero base -> 1)
    volume             = N * log2(n)                      (0 when n == 0)
    difficulty         = (n1 / 2) * (N2 / n2)             (0 when n2 == 0)
    effort             = difficulty * volume
    time_to_program    = effort / 18
    delivered_bugs     = volume / 3000

Values stay unrounded here; rounding happens when records are serialized.
"""

from __future__ import annotations

import math
from collections import Counter
from typing import Optional

from .accumulator import MetricsAccumulator
from .models import (
    CyclomaticComplexity,
    HalsteadMetrics,
    MetricsRecord,
    RiskLevel,
    SizeMetrics,
    StaticAnalysisSummary,
    StructuralComplexity,
    round_half_up,
)

STROUD_NUMBER = 18
BUGS_DIVISOR = 3000


def risk_level(complexity: int) -> RiskLevel:
    return RiskLevel.from_complexity(complexity)


def average_complexity(complexity: int, function_count: int) -> float:
    if function_count == 0:
        return 0.0
    return round_half_up(complexity / function_count, 2)


def compute_halstead(operators: Counter, operands: Counter) -> HalsteadMetrics:
    """Compute Halstead measures from operator and operand multisets."""
    n1 = len(operators)
    n2 = len(operands)
    N1 = sum(operators.values())
    N2 = sum(operands.values())

    vocabulary = n1 + n2
    length = N1 + N2

    calculated_length = n1 * math.log2(n1 or 1) + n2 * math.log2(n2 or 1)
    volume = length * math.log2(vocabulary) if vocabulary > 0 else 0.0
    difficulty = (n1 / 2) * (N2 / n2) if n2 > 0 else 0.0
    effort = difficulty * volume

    return HalsteadMetrics(
        unique_operators=n1,
        unique_operands=n2,
        total_operators=N1,
        total_operands=N2,
        calculated_length=calculated_length,
        volume=volume,
        difficulty=difficulty,
        effort=effort,
        time_to_program=effort / STROUD_NUMBER,
        delivered_bugs=volume / BUGS_DIVISOR,
        operator_list=tuple(operators),
        operand_list=tuple(operands),
    )


def structure_from(acc: MetricsAccumulator) -> StructuralComplexity:
    return StructuralComplexity(
        named_functions=acc.named_functions,
        anonymous_functions=acc.anonymous_functions,
        arrow_functions=acc.arrow_functions,
        methods=acc.methods,
        classes=acc.classes,
        variables=acc.variables,
        constants=acc.constants,
        imports=acc.imports,
        exports=acc.exports,
        conditionals=acc.conditionals,
        loops=acc.loops,
        ast_nodes=acc.ast_nodes,
    )


def cyclomatic_from(acc: MetricsAccumulator) -> CyclomaticComplexity:
    complexity = 1 + acc.decision_points
    return CyclomaticComplexity(
        decision_points=acc.decision_points,
        max_nesting_depth=acc.nesting.max_depth,
        average_complexity=average_complexity(complexity, acc.function_count),
        risk_level=risk_level(complexity),
    )


def finalize(
    acc: MetricsAccumulator,
    size: SizeMetrics,
    file_path: str,
    static_analysis: Optional[StaticAnalysisSummary] = None,
    timestamp: str = "",
) -> MetricsRecord:
    """Build the immutable record for one file.

    Args:
        acc: Accumulator filled by a completed walk
        size: Line counts from the lexical scanner
        file_path: Absolute path recorded in the metadata
        static_analysis: Lint summary; an empty summary when omitted
        timestamp: ISO-8601 analysis time
    """
    return MetricsRecord(
        file_path=file_path,
        size=size,
        structure=structure_from(acc),
        cyclomatic=cyclomatic_from(acc),
        halstead=compute_halstead(acc.operators, acc.operands),
        static_analysis=static_analysis or StaticAnalysisSummary(),
        timestamp=timestamp,
    )
