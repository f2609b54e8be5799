"""
Loyalty Node Evaluators

One evaluation strategy per node kind. Each takes the node's ``data``
(raw mapping or parsed payload) and, except for constraints, the already
computed results of the node's direct dependencies.
"""

from .constraint import evaluate_constraint
from .rule import evaluate_rule
from .operators import evaluate_operator, OPERATIONS
from .distribution import evaluate_distribution, base_value
from .checks import (
    validate_constraint_data,
    validate_rule_data,
    validate_operator_data,
    validate_distribution_data,
    NODE_CHECKS,
)

__all__ = [
    "evaluate_constraint",
    "evaluate_rule",
    "evaluate_operator",
    "OPERATIONS",
    "evaluate_distribution",
    "base_value",
    # Configuration checks
    "validate_constraint_data",
    "validate_rule_data",
    "validate_operator_data",
    "validate_distribution_data",
    "NODE_CHECKS",
]
