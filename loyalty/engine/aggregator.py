"""
Loyalty Result Aggregator

Reduces the per-node results of a finished run into the final report:
the distributions that fired, the rule behind each, and the program total.
"""

from __future__ import annotations
from typing import Any, Iterable, List, Optional
import logging

from loyalty.bootstrap.config import AggregationPolicy
from loyalty.core.coercion import is_number, is_truthy
from loyalty.core.enums import NodeType
from loyalty.core.model import ProgramNode
from .context import EvaluationContext
from .results import (
    DetailedDistribution,
    DryTestResult,
    OverallProgramResult,
    UNKNOWN_RULE_ID,
    UNKNOWN_RULE_LABEL,
)

logger = logging.getLogger(__name__)


class ResultAggregator:
    """
    Builds a DryTestResult from an evaluated context.

    The program total follows ``policy``; the default sums the amounts of
    the fired distributions so the total always matches the audit trail.
    """

    def __init__(self, policy: AggregationPolicy = AggregationPolicy.DISTRIBUTIONS):
        self._policy = policy

    @property
    def policy(self) -> AggregationPolicy:
        return self._policy

    def aggregate(self, context: EvaluationContext) -> DryTestResult:
        distributions = self.extract_distributions(context)
        total = self.total_points(context, distributions)

        return DryTestResult(
            overall_program_result=OverallProgramResult(
                triggered=total > 0,
                total_calculated_points=total,
            ),
            detailed_distributions=distributions,
            evaluation_log=list(context.evaluation_log),
        )

    def extract_distributions(self, context: EvaluationContext) -> List[DetailedDistribution]:
        """Every distribution node whose result is a positive number."""
        distributions = []

        for node in context.program:
            if node.node_type is not NodeType.DISTRIBUTION:
                continue
            state = context.node_states.get(node.id)
            if state is None or not state.evaluated:
                continue
            if not is_number(state.result) or state.result <= 0:
                continue

            rule = self.find_triggering_rule(node.id, context)
            distributions.append(DetailedDistribution(
                distribution_id=node.id,
                distribution_label=node.label,
                distribution_type=_distribution_type(node),
                calculated_amount=state.result,
                triggered_by_rule_id=rule.id if rule else UNKNOWN_RULE_ID,
                triggered_by_rule_label=(rule.label if rule else "") or UNKNOWN_RULE_LABEL,
                conditions_met=True,
            ))

        return distributions

    def find_triggering_rule(
        self,
        distribution_id: str,
        context: EvaluationContext,
    ) -> Optional[ProgramNode]:
        """First direct dependency that is a rule with a truthy result."""
        state = context.node_states.get(distribution_id)
        if state is None:
            return None

        for dep_id in state.dependencies:
            dep_node = context.program.get_node(dep_id)
            if dep_node is None or dep_node.node_type is not NodeType.RULE:
                continue
            dep_state = context.node_states[dep_id]
            if dep_state.evaluated and is_truthy(dep_state.result):
                return dep_node

        return None

    def total_points(
        self,
        context: EvaluationContext,
        distributions: List[DetailedDistribution],
    ) -> float:
        if self._policy is AggregationPolicy.ROOT_NODES:
            return _numeric_sum(context.result_of(n) for n in context.graph.roots())
        if self._policy is AggregationPolicy.ALL_NODES:
            return _numeric_sum(
                s.result for s in context.node_states.values() if s.evaluated
            )
        return sum(d.calculated_amount for d in distributions)


def _numeric_sum(results: Iterable[Any]) -> float:
    return sum(r for r in results if is_number(r))


def _distribution_type(node: ProgramNode) -> str:
    return node.data.get("distributionType") or "unknown"
