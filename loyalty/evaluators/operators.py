"""
loyalty/evaluators/operators.py - Operator evaluation

Operators aggregate dependency results. An inactive or untyped operator
yields None ("no opinion"), which downstream nodes filter out.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, List, Mapping, Sequence, Union
import logging

from loyalty.core.coercion import drop_missing, is_truthy, to_number
from loyalty.core.enums import OperatorType
from loyalty.core.model import OperatorData, as_payload

logger = logging.getLogger(__name__)


def _sum(results: List[Any]) -> float:
    return sum(to_number(r) for r in results)


def _max(results: List[Any]) -> float:
    if not results:
        return 0
    return max(to_number(r) for r in results)


def _and(results: List[Any]) -> bool:
    if not results:
        return False
    return all(is_truthy(r) for r in results)


def _or(results: List[Any]) -> bool:
    return any(is_truthy(r) for r in results)


# SHARE is reserved for proportional splits and currently sums.
_share = _sum

OPERATIONS: Dict[OperatorType, Callable[[List[Any]], Any]] = {
    OperatorType.SUM: _sum,
    OperatorType.MAX: _max,
    OperatorType.SHARE: _share,
    OperatorType.AND: _and,
    OperatorType.OR: _or,
}


def evaluate_operator(
    data: Union[OperatorData, Mapping[str, Any]],
    dependency_results: Sequence[Any],
) -> Any:
    """Apply the node's operator to its non-None dependency results."""
    operator = as_payload(data, OperatorData)

    if not operator.is_active or operator.operator_type is None:
        return None

    results = drop_missing(dependency_results)
    result = OPERATIONS[operator.operator_type](results)
    logger.debug(
        f"Operator '{operator.label}' {operator.operator_type.value} over {results!r} -> {result!r}"
    )
    return result
