"""
Loyalty Evaluation Engine

Provides:
- EvaluationEngine: schedules and evaluates every node once per run
- EvaluationContext: isolated per-run node states and log buffer
- ResultAggregator: fired distributions and program totals
- DryTestResult: result types returned to callers
"""

from .results import (
    EvaluationLogEntry,
    DetailedDistribution,
    OverallProgramResult,
    DryTestResult,
    UNKNOWN_RULE_ID,
    UNKNOWN_RULE_LABEL,
)
from .context import (
    NodeEvaluationState,
    EvaluationContext,
)
from .aggregator import (
    ResultAggregator,
)
from .engine import (
    EvaluationEngine,
    evaluate_node,
    dry_test_program,
)

__all__ = [
    # Results
    "EvaluationLogEntry",
    "DetailedDistribution",
    "OverallProgramResult",
    "DryTestResult",
    "UNKNOWN_RULE_ID",
    "UNKNOWN_RULE_LABEL",
    # Context
    "NodeEvaluationState",
    "EvaluationContext",
    # Aggregator
    "ResultAggregator",
    # Engine
    "EvaluationEngine",
    "evaluate_node",
    "dry_test_program",
]
