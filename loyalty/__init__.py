"""
Loyalty Program Dry Test Engine

Evaluates a loyalty program graph (constraints, rules, operators,
distributions) against one event record and reports which distributions
fire, the points they award and a per-node audit trail.

Usage:
    from loyalty import dry_test_program

    result = dry_test_program(program, {"value": 200})
    result.to_dict()["overallProgramResult"]
"""

from .core import (
    NodeType,
    ComparisonOperator,
    RuleType,
    OperatorType,
    PointMappingType,
    EvaluationStatus,
    Program,
    ProgramNode,
    ProgramEdge,
    parse_program,
    parse_event_data,
)
from .errors import (
    DryTestError,
    ProgramSchemaError,
    GraphError,
    CircularDependencyError,
)
from .bootstrap import (
    AggregationPolicy,
    DryTestConfig,
    load_config,
    get_config,
    setup_logging,
)
from .engine import (
    EvaluationEngine,
    DryTestResult,
    DetailedDistribution,
    EvaluationLogEntry,
    dry_test_program,
)
from .validation import (
    validate_program,
    ProgramValidationResult,
)

__version__ = "1.0.0"

__all__ = [
    # Model
    "NodeType",
    "ComparisonOperator",
    "RuleType",
    "OperatorType",
    "PointMappingType",
    "EvaluationStatus",
    "Program",
    "ProgramNode",
    "ProgramEdge",
    "parse_program",
    "parse_event_data",
    # Errors
    "DryTestError",
    "ProgramSchemaError",
    "GraphError",
    "CircularDependencyError",
    # Config
    "AggregationPolicy",
    "DryTestConfig",
    "load_config",
    "get_config",
    "setup_logging",
    # Engine
    "EvaluationEngine",
    "DryTestResult",
    "DetailedDistribution",
    "EvaluationLogEntry",
    "dry_test_program",
    # Validation
    "validate_program",
    "ProgramValidationResult",
]
