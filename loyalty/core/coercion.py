"""
loyalty/core/coercion.py - Shared value coercion

Numeric coercion and truthiness used by every evaluator. Strings are parsed the
way saved programs were authored against: a leading numeric prefix is taken
("12.5pts" -> 12.5) and anything unparseable becomes 0.
"""

from __future__ import annotations
from decimal import Decimal
from typing import Any, Iterable, List
import math
import re

_FLOAT_PREFIX = re.compile(
    r"^\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)


def parse_float_prefix(text: str) -> float:
    """Parse the longest numeric prefix of a string, or NaN if there is none."""
    match = _FLOAT_PREFIX.match(text)
    if not match:
        return math.nan
    token = match.group(1)
    if token.lstrip("+-") == "Infinity":
        return -math.inf if token.startswith("-") else math.inf
    return float(token)


def is_number(value: Any) -> bool:
    """True for real numbers. Booleans are not numbers here."""
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def to_number(value: Any) -> float:
    """
    Coerce a value to a number.

    - numbers are returned as-is
    - strings are parsed, falling back to 0
    - booleans become 1/0
    - anything else becomes 0
    """
    if isinstance(value, bool):
        return 1 if value else 0
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        parsed = parse_float_prefix(value)
        return 0 if math.isnan(parsed) else parsed
    return 0


def is_truthy(value: Any) -> bool:
    """
    Activation truthiness.

    Booleans as-is, numbers when > 0, strings when non-empty. Anything else
    is truthy unless it is None.
    """
    if isinstance(value, bool):
        return value
    if is_number(value):
        return value > 0
    if isinstance(value, str):
        return len(value) > 0
    return value is not None


def drop_missing(results: Iterable[Any]) -> List[Any]:
    """Remove None entries ("no opinion") from a list of dependency results."""
    return [r for r in results if r is not None]
