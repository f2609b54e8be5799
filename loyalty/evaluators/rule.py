"""
loyalty/evaluators/rule.py - Rule evaluation

Rules are the gatekeepers of a program: they fold the results of their
dependencies into a single activation signal.
"""

from __future__ import annotations
from typing import Any, List, Mapping, Sequence, Union
import logging

from loyalty.core.coercion import drop_missing, is_truthy, to_number
from loyalty.core.enums import RuleType
from loyalty.core.model import RuleData, as_payload

logger = logging.getLogger(__name__)


def evaluate_rule(
    data: Union[RuleData, Mapping[str, Any]],
    dependency_results: Sequence[Any],
) -> bool:
    """
    Evaluate a rule over its dependency results.

    CONDITIONAL: any result truthy. THRESHOLD: numeric sum >= threshold.
    SEQUENTIAL: every result truthy. Inactive or untyped rules are False.
    """
    rule = as_payload(data, RuleData)

    if not rule.is_active:
        logger.debug(f"Rule '{rule.label}' is not active")
        return False

    if rule.rule_type is None:
        logger.debug(f"Rule '{rule.label}' has no valid ruleType")
        return False

    results = drop_missing(dependency_results)

    if rule.rule_type is RuleType.CONDITIONAL:
        result = _any_truthy(results)
    elif rule.rule_type is RuleType.THRESHOLD:
        total = sum(to_number(r) for r in results)
        result = total >= to_number(rule.threshold)
    elif rule.rule_type is RuleType.SEQUENTIAL:
        result = _all_truthy(results)
    else:
        result = False

    logger.debug(f"Rule '{rule.label}' {rule.rule_type.value} over {results!r} -> {result}")
    return result


def _any_truthy(results: List[Any]) -> bool:
    return any(is_truthy(r) for r in results)


def _all_truthy(results: List[Any]) -> bool:
    if not results:
        return False
    return all(is_truthy(r) for r in results)
