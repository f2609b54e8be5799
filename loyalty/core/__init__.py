"""
core/ - Program model, enumerations and value coercion.
"""

from .enums import (
    NodeType,
    ComparisonOperator,
    RuleType,
    OperatorType,
    PointMappingType,
    EvaluationStatus,
    parse_enum,
)
from .coercion import (
    to_number,
    is_truthy,
    is_number,
    drop_missing,
    parse_float_prefix,
)
from .model import (
    EventData,
    NodePayload,
    ConstraintData,
    RuleData,
    OperatorData,
    DistributionData,
    ProgramNode,
    ProgramEdge,
    Program,
    ProgramLike,
    as_program,
    as_payload,
)
from .schema import (
    ProgramDocument,
    ProgramNodeModel,
    ProgramEdgeModel,
    EventDataDocument,
    parse_program,
    parse_event_data,
)

__all__ = [
    # Enums
    "NodeType",
    "ComparisonOperator",
    "RuleType",
    "OperatorType",
    "PointMappingType",
    "EvaluationStatus",
    "parse_enum",
    # Coercion
    "to_number",
    "is_truthy",
    "is_number",
    "drop_missing",
    "parse_float_prefix",
    # Model
    "EventData",
    "NodePayload",
    "ConstraintData",
    "RuleData",
    "OperatorData",
    "DistributionData",
    "ProgramNode",
    "ProgramEdge",
    "Program",
    "ProgramLike",
    "as_program",
    "as_payload",
    # Schema
    "ProgramDocument",
    "ProgramNodeModel",
    "ProgramEdgeModel",
    "EventDataDocument",
    "parse_program",
    "parse_event_data",
]
