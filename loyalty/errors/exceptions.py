"""
loyalty/errors/exceptions.py - Dry test exceptions

Only a circular dependency aborts a run. Everything else a program can get
wrong is reported in the evaluation log instead of raised.
"""

from __future__ import annotations

from typing import List, Optional


class DryTestError(Exception):
    """Base exception for program evaluation."""

    def __init__(self, message: str, node_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.node_id = node_id

    def __str__(self) -> str:
        parts = [self.message]
        if self.node_id:
            parts.append(f"[node_id={self.node_id}]")
        return " ".join(parts)


class ProgramSchemaError(DryTestError):
    """Raised when a program document or event record is structurally unusable."""


class GraphError(DryTestError):
    """Raised when the program graph has a structural issue."""


class CircularDependencyError(GraphError):
    """Raised when node dependencies form a cycle."""

    def __init__(self, cycle: List[str]):
        self.cycle = list(cycle)
        super().__init__(
            f"Circular dependency detected: {' -> '.join(self.cycle)}",
            node_id=self.cycle[0] if self.cycle else None,
        )

    def __str__(self) -> str:
        return self.message
