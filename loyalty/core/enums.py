"""
loyalty/core/enums.py - Program Enumerations

Node kinds, per-kind configuration vocabularies and evaluation statuses.
Member values are the exact strings used in saved program files.
"""

from __future__ import annotations
from enum import Enum
from typing import Optional, Type, TypeVar

E = TypeVar("E", bound=Enum)


class NodeType(str, Enum):
    """Kinds of node in a program graph."""
    CONSTRAINT = "constraint"
    RULE = "rule"
    OPERATOR = "operator"
    DISTRIBUTION = "distribution"


class ComparisonOperator(str, Enum):
    """Comparison a constraint applies to an event attribute."""
    EQUAL = "EQUAL"
    GREATER_OR_EQUAL = "GREATER_OR_EQUAL"
    BETWEEN = "BETWEEN"
    IN = "IN"


class RuleType(str, Enum):
    """How a rule folds its dependency results into one activation signal."""
    CONDITIONAL = "CONDITIONAL"    # any input truthy
    THRESHOLD = "THRESHOLD"        # numeric sum >= threshold
    SEQUENTIAL = "SEQUENTIAL"      # every input truthy


class OperatorType(str, Enum):
    """Aggregation applied by an operator node."""
    SUM = "SUM"
    MAX = "MAX"
    SHARE = "SHARE"    # alias of SUM for now
    AND = "AND"
    OR = "OR"


class PointMappingType(str, Enum):
    """How a distribution turns event data into reward points."""
    VALUE_MULTIPLIER = "VALUE_MULTIPLIER"
    RATIO_MULTIPLIER = "RATIO_MULTIPLIER"
    FIXED_AMOUNT = "FIXED_AMOUNT"


class EvaluationStatus(str, Enum):
    """Outcome recorded in the evaluation log for a visited node."""
    MATCHED = "MATCHED"            # constraint/rule evaluated true
    NOT_MATCHED = "NOT_MATCHED"    # constraint/rule evaluated false
    EVALUATED = "EVALUATED"        # operator/distribution produced a value
    SKIPPED = "SKIPPED"            # unknown type or evaluator error


def parse_enum(enum_cls: Type[E], raw: object) -> Optional[E]:
    """
    Look up an enum member by value, returning None for anything unknown.

    Payloads come from user-edited documents, so an unrecognised string is a
    configuration defect to be reported, not an exception.
    """
    if isinstance(raw, enum_cls):
        return raw
    if not isinstance(raw, str):
        return None
    try:
        return enum_cls(raw)
    except ValueError:
        return None
