"""
loyalty/evaluators/distribution.py - Distribution evaluation

Distributions are terminal reward nodes. A distribution pays out only when
at least one of its dependencies is truthy.
"""

from __future__ import annotations
from typing import Any, Mapping, Optional, Sequence, Union
import logging

from loyalty.core.coercion import is_truthy, to_number
from loyalty.core.enums import PointMappingType
from loyalty.core.model import DistributionData, EventData, as_payload

logger = logging.getLogger(__name__)


def evaluate_distribution(
    data: Union[DistributionData, Mapping[str, Any]],
    dependency_results: Sequence[Any],
    event_data: EventData,
) -> float:
    """
    Calculate the points a distribution awards.

    VALUE_MULTIPLIER: base value * multiplier
    RATIO_MULTIPLIER: base value * ratio
    FIXED_AMOUNT: fixedAmount, whatever the event or inputs

    The base value is the numerically coerced event attribute named by
    ``baseValueField`` (0 when absent).
    """
    distribution = as_payload(data, DistributionData)

    if not distribution.is_active:
        logger.debug(f"Distribution '{distribution.label}' is not active")
        return 0

    if not any(is_truthy(r) for r in dependency_results):
        logger.debug(f"Distribution '{distribution.label}' not activated")
        return 0

    mapping = distribution.point_mapping_type
    if mapping is None:
        logger.debug(f"Distribution '{distribution.label}' has no valid pointMappingType")
        return 0

    if mapping is PointMappingType.VALUE_MULTIPLIER:
        base = base_value(distribution.base_value_field, event_data)
        result = base * to_number(distribution.multiplier)
    elif mapping is PointMappingType.RATIO_MULTIPLIER:
        base = base_value(distribution.base_value_field, event_data)
        result = base * to_number(distribution.ratio)
    else:
        result = to_number(distribution.fixed_amount)

    logger.debug(f"Distribution '{distribution.label}' {mapping.value} -> {result}")
    return result


def base_value(field_name: Optional[str], event_data: EventData) -> float:
    """Numeric value of an event attribute, 0 when unnamed or absent."""
    if not field_name:
        return 0
    value = event_data.get(field_name)
    if value is None:
        return 0
    return to_number(value)
