"""
validation/ - Static program checks.
"""

from .program_validator import (
    IssueSeverity,
    ValidationIssue,
    ProgramValidationResult,
    ProgramValidator,
    validate_program,
)

__all__ = [
    "IssueSeverity",
    "ValidationIssue",
    "ProgramValidationResult",
    "ProgramValidator",
    "validate_program",
]
