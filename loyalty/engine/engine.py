"""
Loyalty Evaluation Engine

Orchestrates a dry test: builds the dependency graph, schedules every node,
evaluates each exactly once with its dependencies' cached results, records
one log entry per node and hands the finished context to the aggregator.

A circular dependency aborts the run before any node is evaluated. Every
other defect is contained to the node that has it.
"""

from __future__ import annotations
from typing import Any, List, Mapping, Optional, Tuple
import logging
import time

from loyalty.bootstrap.config import DryTestConfig
from loyalty.core.enums import EvaluationStatus, NodeType
from loyalty.core.model import EventData, ProgramLike, ProgramNode, as_program
from loyalty.evaluators import (
    evaluate_constraint,
    evaluate_distribution,
    evaluate_operator,
    evaluate_rule,
)
from loyalty.graph.builder import DependencyGraph
from loyalty.graph.scheduler import TopologicalScheduler
from .aggregator import ResultAggregator
from .context import EvaluationContext
from .results import DryTestResult

logger = logging.getLogger(__name__)

NodeOutcome = Tuple[Any, EvaluationStatus, str]


def evaluate_node(
    node: ProgramNode,
    dependency_results: List[Any],
    event_data: EventData,
) -> NodeOutcome:
    """
    Dispatch one node to the evaluator for its kind.

    Returns (result, status, details). Unknown kinds are SKIPPED with a
    None result. Evaluator exceptions propagate to the caller.
    """
    node_type = node.node_type

    if node_type is NodeType.CONSTRAINT:
        result = evaluate_constraint(node.data, event_data)
        status = EvaluationStatus.MATCHED if result else EvaluationStatus.NOT_MATCHED
        return result, status, f"Constraint {'passed' if result else 'failed'}"

    if node_type is NodeType.RULE:
        result = evaluate_rule(node.data, dependency_results)
        status = EvaluationStatus.MATCHED if result else EvaluationStatus.NOT_MATCHED
        return result, status, f"Rule {'activated' if result else 'not activated'}"

    if node_type is NodeType.OPERATOR:
        result = evaluate_operator(node.data, dependency_results)
        return result, EvaluationStatus.EVALUATED, f"Operator result: {result}"

    if node_type is NodeType.DISTRIBUTION:
        result = evaluate_distribution(node.data, dependency_results, event_data)
        return result, EvaluationStatus.EVALUATED, f"Distribution calculated: {result}"

    return None, EvaluationStatus.SKIPPED, f"Unknown node type: {node.type}"


class EvaluationEngine:
    """
    Evaluates loyalty programs against event data.

    The engine holds configuration only. Each call to ``run`` builds its own
    EvaluationContext, so one engine can serve concurrent callers.

    Without ``config`` the built-in DryTestConfig defaults apply. Environment
    and file settings only take effect when passed in explicitly, e.g.
    ``EvaluationEngine(load_config())``.

    Usage:
        engine = EvaluationEngine()
        result = engine.run(program, {"value": 200})
        result.overall_program_result.total_calculated_points
    """

    def __init__(self, config: Optional[DryTestConfig] = None):
        self._config = config if config is not None else DryTestConfig()
        self._aggregator = ResultAggregator(self._config.aggregation_policy)

    @property
    def config(self) -> DryTestConfig:
        return self._config

    def run(
        self,
        program: ProgramLike,
        event_data: Optional[Mapping[str, Any]] = None,
    ) -> DryTestResult:
        """
        Evaluate a program against one event record.

        Raises:
            CircularDependencyError: If node dependencies form a cycle.
        """
        start_time = time.time()
        context = self.prepare(program, event_data)

        for node_id in context.order:
            self._evaluate(node_id, context)

        result = self._aggregator.aggregate(context)

        logger.info(
            f"Dry test complete: {len(context.evaluation_log)} nodes, "
            f"{len(result.detailed_distributions)} distributions, "
            f"{result.total_points} points "
            f"({int((time.time() - start_time) * 1000)}ms)"
        )
        return result

    def prepare(
        self,
        program: ProgramLike,
        event_data: Optional[Mapping[str, Any]] = None,
    ) -> EvaluationContext:
        """Build graph, order and a fresh context without evaluating anything."""
        program = as_program(program)
        graph = DependencyGraph.build(
            program, log_dropped_edges=self._config.log_dropped_edges
        )
        order = TopologicalScheduler(graph).execution_order()

        return EvaluationContext.create(program, graph, event_data, order=order)

    def _evaluate(self, node_id: str, context: EvaluationContext) -> None:
        state = context.state(node_id)
        if state.evaluated:
            return

        node = context.program.get_node(node_id)
        dependency_results = context.dependency_results(node_id)

        try:
            result, status, details = evaluate_node(
                node, dependency_results, context.event_data
            )
        except Exception as e:
            logger.warning(f"Evaluation of node {node_id} failed: {e}")
            result, status, details = None, EvaluationStatus.SKIPPED, f"Evaluation error: {e}"

        state.record(result)
        context.log(node_id, node.type, status, result, details)
        logger.debug(f"{node.type} {node_id}: {status.value} ({details})")


def dry_test_program(
    program: ProgramLike,
    event_data: Optional[Mapping[str, Any]] = None,
    config: Optional[DryTestConfig] = None,
) -> DryTestResult:
    """Evaluate a program against one event record with a one-off engine."""
    return EvaluationEngine(config).run(program, event_data)
