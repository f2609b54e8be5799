"""
Loyalty Dry Test Results

Result types returned by a dry test: the per-node audit trail, the
distributions that fired and the program-level outcome.

``to_dict()`` on each type produces the camelCase shape consumed by the
reporting UI.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from loyalty.core.enums import EvaluationStatus

UNKNOWN_RULE_ID = "unknown"
UNKNOWN_RULE_LABEL = "Unknown Rule"


# =============================================================================
# EVALUATION LOG
# =============================================================================

@dataclass
class EvaluationLogEntry:
    """One visited node. Exactly one entry per node per run."""
    node_id: str
    node_label: str
    node_type: str
    evaluation_status: EvaluationStatus
    result_value: Any = None
    details: str = ""

    @property
    def matched(self) -> bool:
        return self.evaluation_status == EvaluationStatus.MATCHED

    @property
    def skipped(self) -> bool:
        return self.evaluation_status == EvaluationStatus.SKIPPED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodeId": self.node_id,
            "nodeLabel": self.node_label,
            "nodeType": self.node_type,
            "evaluationStatus": self.evaluation_status.value,
            "resultValue": self.result_value,
            "details": self.details,
        }


# =============================================================================
# DISTRIBUTIONS
# =============================================================================

@dataclass
class DetailedDistribution:
    """A distribution that awarded points, and the rule that let it fire."""
    distribution_id: str
    distribution_label: str
    distribution_type: str
    calculated_amount: float
    triggered_by_rule_id: str = UNKNOWN_RULE_ID
    triggered_by_rule_label: str = UNKNOWN_RULE_LABEL
    conditions_met: bool = True

    @property
    def has_known_trigger(self) -> bool:
        return self.triggered_by_rule_id != UNKNOWN_RULE_ID

    def to_dict(self) -> Dict[str, Any]:
        return {
            "distributionId": self.distribution_id,
            "distributionLabel": self.distribution_label,
            "distributionType": self.distribution_type,
            "calculatedAmount": self.calculated_amount,
            "triggeredByRuleId": self.triggered_by_rule_id,
            "triggeredByRuleLabel": self.triggered_by_rule_label,
            "conditionsMet": self.conditions_met,
        }


# =============================================================================
# DRY TEST RESULT
# =============================================================================

@dataclass
class OverallProgramResult:
    """Program-level outcome."""
    triggered: bool = False
    total_calculated_points: float = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "triggered": self.triggered,
            "totalCalculatedPoints": self.total_calculated_points,
        }


@dataclass
class DryTestResult:
    """Complete result of evaluating one program against one event record."""
    overall_program_result: OverallProgramResult = field(default_factory=OverallProgramResult)
    detailed_distributions: List[DetailedDistribution] = field(default_factory=list)
    evaluation_log: List[EvaluationLogEntry] = field(default_factory=list)

    @property
    def triggered(self) -> bool:
        return self.overall_program_result.triggered

    @property
    def total_points(self) -> float:
        return self.overall_program_result.total_calculated_points

    def get_log_entry(self, node_id: str) -> Optional[EvaluationLogEntry]:
        """Find the log entry for a node."""
        for entry in self.evaluation_log:
            if entry.node_id == node_id:
                return entry
        return None

    def get_summary(self) -> Dict[str, Any]:
        statuses: Dict[str, int] = {s.value: 0 for s in EvaluationStatus}
        for entry in self.evaluation_log:
            statuses[entry.evaluation_status.value] += 1
        return {
            "triggered": self.triggered,
            "total_points": self.total_points,
            "distributions_fired": len(self.detailed_distributions),
            "nodes_evaluated": len(self.evaluation_log),
            "statuses": statuses,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overallProgramResult": self.overall_program_result.to_dict(),
            "detailedDistributions": [d.to_dict() for d in self.detailed_distributions],
            "evaluationLog": [e.to_dict() for e in self.evaluation_log],
        }
