"""
Loyalty Dependency Graph Builder

Converts a program's edge list into forward (dependents) and reverse
(dependencies) adjacency per node.

Edges that reference a node id not present in the program are dropped and
recorded as anomalies. A self-referencing edge is kept: it is a one-node
cycle and the scheduler must reject it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List
import logging

import networkx as nx

from loyalty.core.model import Program, ProgramEdge

logger = logging.getLogger(__name__)


@dataclass
class DroppedEdge:
    """An edge ignored because an endpoint does not exist."""
    edge: ProgramEdge
    missing: List[str] = field(default_factory=list)

    @property
    def reason(self) -> str:
        return "references unknown node(s): " + ", ".join(self.missing)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "edge_id": self.edge.id,
            "source": self.edge.source,
            "target": self.edge.target,
            "missing": list(self.missing),
        }


class DependencyGraph:
    """
    Dependency adjacency for one program.

    Adjacency lists keep edge order (and duplicate edges) exactly as given,
    since that order decides the order of dependency results handed to
    evaluators. The networkx view is used for structural queries.

    Usage:
        graph = DependencyGraph.build(program)
        graph.dependencies("rule-1")   # ["constraint-1", "constraint-2"]
    """

    def __init__(self, program: Program):
        self._program = program
        self._dependencies: Dict[str, List[str]] = {node_id: [] for node_id in program.node_ids}
        self._dependents: Dict[str, List[str]] = {node_id: [] for node_id in program.node_ids}
        self._dropped: List[DroppedEdge] = []
        self._graph = nx.DiGraph()
        self._graph.add_nodes_from(self._dependencies)

    @classmethod
    def build(cls, program: Program, log_dropped_edges: bool = True) -> "DependencyGraph":
        """Build the adjacency for every edge whose endpoints both exist."""
        graph = cls(program)
        for edge in program.edges:
            graph._add_edge(edge, log_dropped_edges)

        logger.debug(
            f"Dependency graph built: {graph.node_count} nodes, "
            f"{graph.edge_count} edges, {len(graph._dropped)} dropped"
        )
        return graph

    def _add_edge(self, edge: ProgramEdge, log_dropped: bool) -> None:
        missing = [
            node_id for node_id in (edge.source, edge.target)
            if node_id not in self._dependencies
        ]
        if missing:
            dropped = DroppedEdge(edge=edge, missing=missing)
            self._dropped.append(dropped)
            if log_dropped:
                logger.warning(f"Dropping edge {edge.id}: {dropped.reason}")
            return

        self._dependents[edge.source].append(edge.target)
        self._dependencies[edge.target].append(edge.source)
        self._graph.add_edge(edge.source, edge.target, edge_id=edge.id)

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    @property
    def program(self) -> Program:
        return self._program

    @property
    def graph(self) -> "nx.DiGraph":
        """Directed graph, edges pointing from dependency to dependent."""
        return self._graph

    @property
    def node_ids(self) -> List[str]:
        return list(self._dependencies)

    @property
    def node_count(self) -> int:
        return len(self._dependencies)

    @property
    def edge_count(self) -> int:
        return sum(len(deps) for deps in self._dependencies.values())

    @property
    def dropped_edges(self) -> List[DroppedEdge]:
        return list(self._dropped)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._dependencies

    def dependencies(self, node_id: str) -> List[str]:
        """Direct dependencies of a node, in edge order."""
        return list(self._dependencies.get(node_id, []))

    def dependents(self, node_id: str) -> List[str]:
        """Direct dependents of a node, in edge order."""
        return list(self._dependents.get(node_id, []))

    def roots(self) -> List[str]:
        """Nodes with no incoming edges."""
        return [n for n, deps in self._dependencies.items() if not deps]

    def sinks(self) -> List[str]:
        """Nodes with no outgoing edges."""
        return [n for n, deps in self._dependents.items() if not deps]

    def isolated(self) -> List[str]:
        """Nodes touched by no kept edge."""
        return [n for n in self._dependencies if self._graph.degree(n) == 0]

    def components(self) -> List[List[str]]:
        """Weakly connected components, each in program node order."""
        order = {n: i for i, n in enumerate(self._dependencies)}
        comps = [
            sorted(c, key=order.__getitem__)
            for c in nx.weakly_connected_components(self._graph)
        ]
        return sorted(comps, key=lambda c: order[c[0]])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": {
                node_id: {
                    "dependencies": list(self._dependencies[node_id]),
                    "dependents": list(self._dependents[node_id]),
                }
                for node_id in self._dependencies
            },
            "dropped_edges": [d.to_dict() for d in self._dropped],
        }


def build_dependency_graph(
    program: Program,
    log_dropped_edges: bool = True,
) -> DependencyGraph:
    """Convenience wrapper for DependencyGraph.build."""
    return DependencyGraph.build(program, log_dropped_edges=log_dropped_edges)
