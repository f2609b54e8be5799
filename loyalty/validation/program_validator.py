"""
Loyalty Program Validator

Static checks run over a program before (or instead of) a dry test:
graph shape, cycles, node configuration and inactive nodes.

Findings are reported, never raised. A program with no ERROR issues is
valid; warnings and info are advisory.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional
import logging

from loyalty.core.model import Program, ProgramLike, as_program
from loyalty.evaluators.checks import NODE_CHECKS
from loyalty.graph.builder import DependencyGraph
from loyalty.graph.scheduler import TopologicalScheduler

logger = logging.getLogger(__name__)


class IssueSeverity(str, Enum):
    """Severity of a validation issue."""
    ERROR = "error"      # Program cannot be evaluated as intended
    WARNING = "warning"  # Suspicious, evaluation still meaningful
    INFO = "info"        # Informational only


@dataclass
class ValidationIssue:
    """A single finding about a program."""
    severity: IssueSeverity
    message: str
    node_id: Optional[str] = None
    edge_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {"type": self.severity.value, "message": self.message}
        if self.node_id:
            result["nodeId"] = self.node_id
        if self.edge_id:
            result["edgeId"] = self.edge_id
        return result


@dataclass
class ProgramValidationResult:
    """All issues found in a program."""
    issues: List[ValidationIssue] = field(default_factory=list)

    def _count(self, severity: IssueSeverity) -> int:
        return sum(1 for i in self.issues if i.severity == severity)

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == IssueSeverity.ERROR]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == IssueSeverity.WARNING]

    @property
    def is_valid(self) -> bool:
        return self._count(IssueSeverity.ERROR) == 0

    @property
    def summary(self) -> Dict[str, int]:
        return {
            "errors": self._count(IssueSeverity.ERROR),
            "warnings": self._count(IssueSeverity.WARNING),
            "info": self._count(IssueSeverity.INFO),
        }

    def issues_for_node(self, node_id: str) -> List[ValidationIssue]:
        return [i for i in self.issues if i.node_id == node_id]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "issues": [i.to_dict() for i in self.issues],
            "summary": self.summary,
        }


class ProgramValidator:
    """
    Runs every static check over one program.

    Usage:
        result = ProgramValidator(program).validate()
        if not result.is_valid:
            for issue in result.errors:
                print(issue.message)
    """

    def __init__(self, program: ProgramLike):
        self._program: Program = as_program(program)
        self._graph = DependencyGraph.build(self._program, log_dropped_edges=False)
        self._issues: List[ValidationIssue] = []

    def validate(self) -> ProgramValidationResult:
        self._issues = []

        self._check_duplicate_ids()
        self._check_dropped_edges()
        self._check_unconnected_nodes()
        self._check_cycles()
        self._check_entry_points()
        self._check_exit_points()
        self._check_node_configuration()
        self._check_components()

        result = ProgramValidationResult(issues=list(self._issues))
        logger.info(
            f"Program validated: {result.summary['errors']} errors, "
            f"{result.summary['warnings']} warnings, {result.summary['info']} info"
        )
        return result

    def _add(self, severity: IssueSeverity, message: str, **refs: Optional[str]) -> None:
        self._issues.append(ValidationIssue(severity=severity, message=message, **refs))

    def _name(self, node_id: str) -> str:
        node = self._program.get_node(node_id)
        return (node.label if node else "") or node_id

    def _check_duplicate_ids(self) -> None:
        for node_id in self._program.duplicate_ids:
            self._add(
                IssueSeverity.ERROR,
                f'Node id "{node_id}" is used by more than one node',
                node_id=node_id,
            )

    def _check_dropped_edges(self) -> None:
        for dropped in self._graph.dropped_edges:
            self._add(
                IssueSeverity.WARNING,
                f"Edge {dropped.edge.id} {dropped.reason}",
                edge_id=dropped.edge.id,
            )

    def _check_unconnected_nodes(self) -> None:
        for node_id in self._graph.isolated():
            self._add(
                IssueSeverity.WARNING,
                f'Node "{self._name(node_id)}" is not connected to any other node',
                node_id=node_id,
            )

    def _check_cycles(self) -> None:
        cycle = TopologicalScheduler(self._graph).find_cycle()
        if cycle:
            self._add(
                IssueSeverity.ERROR,
                "Program contains circular dependencies: " + " -> ".join(cycle),
                node_id=cycle[0],
            )

    def _check_entry_points(self) -> None:
        if not self._program:
            return
        roots = self._graph.roots()
        if not roots:
            self._add(
                IssueSeverity.ERROR,
                "Program has no entry point (no nodes without incoming connections)",
            )
        elif len(roots) > 1:
            self._add(
                IssueSeverity.WARNING,
                f"Program has {len(roots)} entry points, which may cause unexpected behavior",
            )

    def _check_exit_points(self) -> None:
        if self._program and not self._graph.sinks():
            self._add(
                IssueSeverity.WARNING,
                "Program has no exit point (no nodes without outgoing connections)",
            )

    def _check_node_configuration(self) -> None:
        for node in self._program:
            node_type = node.node_type
            if node_type is None:
                self._add(
                    IssueSeverity.ERROR,
                    f'Node "{node.label or node.id}" has unknown type "{node.type}"',
                    node_id=node.id,
                )
            elif not NODE_CHECKS[node_type](node.data):
                self._add(
                    IssueSeverity.ERROR,
                    f'{node_type.value.capitalize()} node "{node.label or node.id}" '
                    f"is not fully configured",
                    node_id=node.id,
                )

            if node.data.get("isActive") is False:
                self._add(
                    IssueSeverity.INFO,
                    f'Node "{node.label or node.id}" is inactive',
                    node_id=node.id,
                )

    def _check_components(self) -> None:
        components = self._graph.components()
        if len(components) > 1:
            self._add(
                IssueSeverity.WARNING,
                f"Program contains {len(components)} disconnected components",
            )


def validate_program(program: ProgramLike) -> ProgramValidationResult:
    """Validate a program and return every issue found."""
    return ProgramValidator(program).validate()
