"""
errors/ - Exception hierarchy for program evaluation.
"""

from .exceptions import (
    DryTestError,
    ProgramSchemaError,
    GraphError,
    CircularDependencyError,
)

__all__ = [
    "DryTestError",
    "ProgramSchemaError",
    "GraphError",
    "CircularDependencyError",
]
