"""
loyalty/evaluators/checks.py - Node configuration checks

Static checks that a node's payload is complete enough to evaluate
meaningfully. They never affect evaluation, which tolerates incomplete
nodes by returning the neutral value; the program validator uses them to
report configuration defects up front.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, Mapping
import math

from loyalty.core.coercion import is_number, parse_float_prefix
from loyalty.core.enums import (
    ComparisonOperator,
    NodeType,
    OperatorType,
    PointMappingType,
    RuleType,
    parse_enum,
)


def validate_constraint_data(data: Mapping[str, Any]) -> bool:
    """
    Constraint needs a parameter, a known operator and a value of the right shape.

    BETWEEN takes exactly a [min, max] pair, as evaluation does; IN takes a list.
    """
    if not data.get("parameter") or data.get("value") is None:
        return False

    operator = parse_enum(ComparisonOperator, data.get("comparisonOperator"))
    if operator is None:
        return False

    value = data["value"]
    if operator is ComparisonOperator.BETWEEN:
        return isinstance(value, (list, tuple)) and len(value) == 2
    if operator is ComparisonOperator.IN:
        return isinstance(value, (list, tuple))
    return True


def validate_rule_data(data: Mapping[str, Any]) -> bool:
    """Rule needs a known ruleType; a THRESHOLD threshold must be numeric."""
    rule_type = parse_enum(RuleType, data.get("ruleType"))
    if rule_type is None:
        return False

    threshold = data.get("threshold")
    if rule_type is RuleType.THRESHOLD and threshold is not None:
        if isinstance(threshold, str):
            return not math.isnan(parse_float_prefix(threshold))
        return is_number(threshold)
    return True


def validate_operator_data(data: Mapping[str, Any]) -> bool:
    """Operator needs a known operatorType."""
    return parse_enum(OperatorType, data.get("operatorType")) is not None


_MAPPING_FIELDS = {
    PointMappingType.VALUE_MULTIPLIER: "multiplier",
    PointMappingType.RATIO_MULTIPLIER: "ratio",
    PointMappingType.FIXED_AMOUNT: "fixedAmount",
}


def validate_distribution_data(data: Mapping[str, Any]) -> bool:
    """Distribution needs a known pointMappingType and its non-negative factor."""
    mapping = parse_enum(PointMappingType, data.get("pointMappingType"))
    if mapping is None:
        return False

    factor = data.get(_MAPPING_FIELDS[mapping])
    return is_number(factor) and factor >= 0


NODE_CHECKS: Dict[NodeType, Callable[[Mapping[str, Any]], bool]] = {
    NodeType.CONSTRAINT: validate_constraint_data,
    NodeType.RULE: validate_rule_data,
    NodeType.OPERATOR: validate_operator_data,
    NodeType.DISTRIBUTION: validate_distribution_data,
}
