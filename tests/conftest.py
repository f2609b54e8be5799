"""
Loyalty Test Configuration and Fixtures

Builders for program nodes/edges and a few reference programs shared by
the unit and integration suites.
"""

import pytest
from typing import Any, Dict, List, Optional

from loyalty.bootstrap.config import DryTestConfig, reset_config
from loyalty.core.model import Program, ProgramEdge, ProgramNode


def node(node_id: str, node_type: str, label: Optional[str] = None, active: bool = True, **data: Any) -> ProgramNode:
    """Build a ProgramNode with camelCase payload keys."""
    payload: Dict[str, Any] = {"label": label or node_id, "isActive": active}
    payload.update(data)
    return ProgramNode(id=node_id, type=node_type, data=payload)


def edge(source: str, target: str, edge_id: Optional[str] = None) -> ProgramEdge:
    return ProgramEdge(id=edge_id or f"e-{source}-{target}", source=source, target=target)


def program(nodes: List[ProgramNode], edges: List[ProgramEdge]) -> Program:
    return Program(nodes=nodes, edges=edges)


@pytest.fixture(autouse=True)
def _fresh_config(monkeypatch):
    """Keep the process-wide config and LOYALTY_* env out of each test."""
    for key in (
        "LOYALTY_ENVIRONMENT",
        "LOYALTY_AGGREGATION_POLICY",
        "LOYALTY_LOG_DROPPED_EDGES",
        "LOYALTY_LOG_LEVEL",
        "LOYALTY_LOG_FORMAT",
        "LOYALTY_LOG_FILE",
        "LOYALTY_JSON_LOGS",
    ):
        monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def config():
    """Default configuration."""
    return DryTestConfig()


@pytest.fixture
def linear_program():
    """A(value >= 100) -> B(CONDITIONAL) -> C(VALUE_MULTIPLIER x2 on value)."""
    return program(
        [
            node("A", "constraint", "Big spend", parameter="value",
                 comparisonOperator="GREATER_OR_EQUAL", value=100),
            node("B", "rule", "Spend rule", ruleType="CONDITIONAL"),
            node("C", "distribution", "Double points", pointMappingType="VALUE_MULTIPLIER",
                 multiplier=2, baseValueField="value"),
        ],
        [edge("A", "B"), edge("B", "C")],
    )


@pytest.fixture
def diamond_program():
    """
    Two constraints feed an AND operator, which feeds a rule and a
    fixed-amount distribution.

        c1 ─┐
            ├─> and ─> rule ─> bonus
        c2 ─┘
    """
    return program(
        [
            node("c1", "constraint", "Purchase", parameter="tx_type",
                 comparisonOperator="IN", value=["purchase", "order"]),
            node("c2", "constraint", "Mid value", parameter="value",
                 comparisonOperator="BETWEEN", value=[10, 500]),
            node("and", "operator", "Both", operatorType="AND"),
            node("rule", "rule", "Qualifying purchase", ruleType="SEQUENTIAL"),
            node("bonus", "distribution", "Welcome bonus", pointMappingType="FIXED_AMOUNT",
                 fixedAmount=50),
        ],
        [edge("c1", "and"), edge("c2", "and"), edge("and", "rule"), edge("rule", "bonus")],
    )
