"""
loyalty/engine/context.py - Per-run evaluation context

Everything a run mutates lives here: node states and the log buffer.
A context is created at the start of a run and dropped when it ends;
nothing carries over between runs.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from loyalty.core.enums import EvaluationStatus
from loyalty.core.model import EventData, Program
from loyalty.graph.builder import DependencyGraph
from .results import EvaluationLogEntry


@dataclass
class NodeEvaluationState:
    """Memoized evaluation state of one node."""
    node_id: str
    result: Any = None
    evaluated: bool = False
    dependencies: List[str] = field(default_factory=list)
    dependents: List[str] = field(default_factory=list)

    def record(self, result: Any) -> None:
        """Cache the node's result. A node is evaluated at most once per run."""
        if self.evaluated:
            raise RuntimeError(f"Node {self.node_id} already evaluated in this run")
        self.result = result
        self.evaluated = True


@dataclass
class EvaluationContext:
    """Isolated state for a single dry test run."""
    program: Program
    graph: DependencyGraph
    event_data: EventData
    order: List[str] = field(default_factory=list)
    node_states: Dict[str, NodeEvaluationState] = field(default_factory=dict)
    evaluation_log: List[EvaluationLogEntry] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        program: Program,
        graph: DependencyGraph,
        event_data: Optional[Mapping[str, Any]],
        order: Optional[List[str]] = None,
    ) -> "EvaluationContext":
        context = cls(
            program=program,
            graph=graph,
            event_data=dict(event_data or {}),
            order=list(order) if order is not None else graph.node_ids,
        )
        for node_id in graph.node_ids:
            context.node_states[node_id] = NodeEvaluationState(
                node_id=node_id,
                dependencies=graph.dependencies(node_id),
                dependents=graph.dependents(node_id),
            )
        return context

    def state(self, node_id: str) -> NodeEvaluationState:
        return self.node_states[node_id]

    def result_of(self, node_id: str) -> Any:
        state = self.node_states.get(node_id)
        return state.result if state else None

    def dependency_results(self, node_id: str) -> List[Any]:
        """Cached results of a node's direct dependencies, in edge order."""
        results = []
        for dep_id in self.node_states[node_id].dependencies:
            dep_state = self.node_states[dep_id]
            if not dep_state.evaluated:
                raise RuntimeError(
                    f"Dependency {dep_id} of {node_id} has not been evaluated"
                )
            results.append(dep_state.result)
        return results

    def log(
        self,
        node_id: str,
        node_type: str,
        status: EvaluationStatus,
        result: Any,
        details: str,
    ) -> EvaluationLogEntry:
        """Append one entry to the evaluation log."""
        node = self.program.get_node(node_id)
        entry = EvaluationLogEntry(
            node_id=node_id,
            node_label=(node.label if node else "") or "Unknown",
            node_type=node_type,
            evaluation_status=status,
            result_value=result,
            details=details,
        )
        self.evaluation_log.append(entry)
        return entry
