"""
loyalty/evaluators/constraint.py - Constraint evaluation

A constraint compares one event attribute against its configured value.
List-valued EQUAL and IN test membership of the raw attribute value;
every other comparison works on numerically coerced values.
"""

from __future__ import annotations
from typing import Any, Mapping, Union
import logging

from loyalty.core.coercion import to_number
from loyalty.core.enums import ComparisonOperator
from loyalty.core.model import ConstraintData, EventData, as_payload

logger = logging.getLogger(__name__)


def evaluate_constraint(
    data: Union[ConstraintData, Mapping[str, Any]],
    event_data: EventData,
) -> bool:
    """
    Evaluate a constraint against event data.

    Returns False when the node is inactive, is missing ``parameter``,
    ``comparisonOperator`` or ``value``, or the attribute is absent from
    the event. A configured ``value`` of None (JSON null) counts as missing
    rather than comparing as 0.
    """
    constraint = as_payload(data, ConstraintData)

    if not constraint.is_active:
        logger.debug(f"Constraint '{constraint.label}' is not active")
        return False

    if not constraint.parameter or not constraint.raw_operator or constraint.value is None:
        logger.debug(
            f"Constraint '{constraint.label}' missing required fields: "
            f"parameter={constraint.parameter!r}, "
            f"comparisonOperator={constraint.raw_operator!r}, value={constraint.value!r}"
        )
        return False

    attribute = event_data.get(constraint.parameter)
    if attribute is None:
        logger.debug(f"Parameter '{constraint.parameter}' not found in event data")
        return False

    result = _compare(constraint, attribute)
    logger.debug(
        f"Constraint '{constraint.label}': {constraint.parameter}={attribute!r} "
        f"{constraint.raw_operator} {constraint.value!r} -> {result}"
    )
    return result


def _compare(constraint: ConstraintData, attribute: Any) -> bool:
    operator = constraint.comparison_operator
    configured = constraint.value

    if operator is ComparisonOperator.GREATER_OR_EQUAL:
        return to_number(attribute) >= to_number(configured)

    if operator is ComparisonOperator.EQUAL:
        if isinstance(configured, (list, tuple)):
            return _contains(configured, attribute)
        return to_number(attribute) == to_number(configured)

    if operator is ComparisonOperator.BETWEEN:
        if not isinstance(configured, (list, tuple)) or len(configured) != 2:
            logger.debug("BETWEEN requires a [min, max] pair")
            return False
        low, high = to_number(configured[0]), to_number(configured[1])
        return low <= to_number(attribute) <= high

    if operator is ComparisonOperator.IN:
        if not isinstance(configured, (list, tuple)):
            logger.debug("IN requires a list value")
            return False
        return _contains(configured, attribute)

    logger.debug(f"Unknown comparison operator: {constraint.raw_operator}")
    return False


def _contains(values: Any, attribute: Any) -> bool:
    """Membership on raw values. A string never matches a number."""
    for candidate in values:
        if type(candidate) is bool or type(attribute) is bool:
            if type(candidate) is type(attribute) and candidate == attribute:
                return True
            continue
        if isinstance(candidate, str) != isinstance(attribute, str):
            continue
        if candidate == attribute:
            return True
    return False
