"""
Loyalty Graph

Provides:
- DependencyGraph: per-node dependency/dependent adjacency
- TopologicalScheduler: deterministic evaluation order with cycle detection
"""

from .builder import (
    DependencyGraph,
    DroppedEdge,
    build_dependency_graph,
)
from .scheduler import (
    TopologicalScheduler,
    VisitMark,
    compute_execution_order,
)

__all__ = [
    # Builder
    "DependencyGraph",
    "DroppedEdge",
    "build_dependency_graph",
    # Scheduler
    "TopologicalScheduler",
    "VisitMark",
    "compute_execution_order",
]
