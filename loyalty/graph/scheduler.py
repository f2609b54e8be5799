"""
Loyalty Topological Scheduler

Computes a deterministic, dependency-respecting visitation order for a
dependency graph and rejects cycles.

The traversal is a depth-first walk over dependencies driven by an explicit
stack, with a three-state marker per node. Re-entering a node that is still
in progress is a cycle; the path from that node back to itself is reported.
Identical input (node order, edge order) always yields the identical order.
"""

from __future__ import annotations
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple
import logging

from loyalty.errors import CircularDependencyError
from .builder import DependencyGraph

logger = logging.getLogger(__name__)


class VisitMark(Enum):
    """Traversal state of a node."""
    UNVISITED = "unvisited"
    IN_PROGRESS = "in_progress"
    DONE = "done"


_EXHAUSTED = object()


class TopologicalScheduler:
    """
    Orders the nodes of a DependencyGraph so every dependency precedes its
    dependents.

    Roots are started in program node order and dependencies are followed in
    edge order, so among independent nodes the order is the document order.
    """

    def __init__(self, graph: DependencyGraph):
        self._graph = graph
        self._order: Optional[List[str]] = None

    def execution_order(self) -> List[str]:
        """
        Get node ids in evaluation order.

        Raises:
            CircularDependencyError: If any dependencies form a cycle.
        """
        if self._order is None:
            self._order = self._compute_order()
        return list(self._order)

    def find_cycle(self) -> Optional[List[str]]:
        """Return the first cycle found, or None for an acyclic graph."""
        try:
            self.execution_order()
        except CircularDependencyError as e:
            return e.cycle
        return None

    def _compute_order(self) -> List[str]:
        marks: Dict[str, VisitMark] = {
            node_id: VisitMark.UNVISITED for node_id in self._graph.node_ids
        }
        order: List[str] = []

        for start in self._graph.node_ids:
            if marks[start] is VisitMark.DONE:
                continue
            self._visit(start, marks, order)

        return order

    def _visit(self, start: str, marks: Dict[str, VisitMark], order: List[str]) -> None:
        """Walk everything ``start`` depends on, appending finished nodes to ``order``."""
        marks[start] = VisitMark.IN_PROGRESS
        path: List[str] = [start]
        stack: List[Tuple[str, Iterator[str]]] = [
            (start, iter(self._graph.dependencies(start)))
        ]

        while stack:
            node_id, pending = stack[-1]
            dep_id = next(pending, _EXHAUSTED)

            if dep_id is _EXHAUSTED:
                stack.pop()
                path.pop()
                marks[node_id] = VisitMark.DONE
                order.append(node_id)
                continue

            mark = marks[dep_id]
            if mark is VisitMark.DONE:
                continue
            if mark is VisitMark.IN_PROGRESS:
                cycle = path[path.index(dep_id):] + [dep_id]
                logger.error(f"Circular dependency detected: {' -> '.join(cycle)}")
                raise CircularDependencyError(cycle)

            marks[dep_id] = VisitMark.IN_PROGRESS
            path.append(dep_id)
            stack.append((dep_id, iter(self._graph.dependencies(dep_id))))


def compute_execution_order(graph: DependencyGraph) -> List[str]:
    """Convenience wrapper returning the evaluation order for a graph."""
    return TopologicalScheduler(graph).execution_order()
