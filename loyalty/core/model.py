"""
Loyalty Program Graph Model

In-memory representation of a program: typed nodes, directed edges and the
per-kind payloads carried in each node's ``data``.

The dict form of every type keeps the camelCase field names used by saved
program files so documents round-trip without translation.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Type, TypeVar, Union
import logging

from .enums import (
    NodeType,
    ComparisonOperator,
    RuleType,
    OperatorType,
    PointMappingType,
    parse_enum,
)

logger = logging.getLogger(__name__)

# Attribute name -> string or number. No schema; absent means absent.
EventData = Mapping[str, Any]


# =============================================================================
# NODE PAYLOADS
# =============================================================================

@dataclass
class NodePayload:
    """Fields every node carries."""
    label: str = ""
    is_active: bool = True

    @staticmethod
    def _common(data: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "label": data.get("label") or "",
            "is_active": bool(data.get("isActive", False)),
        }


@dataclass
class ConstraintData(NodePayload):
    """Compares one event attribute against a configured value."""
    parameter: Optional[str] = None
    comparison_operator: Optional[ComparisonOperator] = None
    raw_operator: Optional[str] = None
    value: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ConstraintData":
        raw_operator = data.get("comparisonOperator")
        return cls(
            **cls._common(data),
            parameter=data.get("parameter") or None,
            comparison_operator=parse_enum(ComparisonOperator, raw_operator),
            raw_operator=raw_operator,
            value=data.get("value"),
        )


@dataclass
class RuleData(NodePayload):
    """Gatekeeper folding dependency results into a boolean."""
    rule_type: Optional[RuleType] = None
    threshold: Any = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RuleData":
        return cls(
            **cls._common(data),
            rule_type=parse_enum(RuleType, data.get("ruleType")),
            threshold=data.get("threshold") or 0,
        )


@dataclass
class OperatorData(NodePayload):
    """Aggregates dependency results."""
    operator_type: Optional[OperatorType] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OperatorData":
        return cls(
            **cls._common(data),
            operator_type=parse_enum(OperatorType, data.get("operatorType")),
        )


@dataclass
class DistributionData(NodePayload):
    """Terminal reward node."""
    point_mapping_type: Optional[PointMappingType] = None
    multiplier: Any = 0
    ratio: Any = 0
    fixed_amount: Any = 0
    base_value_field: Optional[str] = None
    distribution_type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DistributionData":
        return cls(
            **cls._common(data),
            point_mapping_type=parse_enum(PointMappingType, data.get("pointMappingType")),
            multiplier=data.get("multiplier") or 0,
            ratio=data.get("ratio") or 0,
            fixed_amount=data.get("fixedAmount") or 0,
            base_value_field=data.get("baseValueField") or None,
            distribution_type=data.get("distributionType") or None,
        )


PAYLOAD_TYPES = {
    NodeType.CONSTRAINT: ConstraintData,
    NodeType.RULE: RuleData,
    NodeType.OPERATOR: OperatorData,
    NodeType.DISTRIBUTION: DistributionData,
}


# =============================================================================
# NODES AND EDGES
# =============================================================================

@dataclass
class ProgramNode:
    """
    A typed unit of the rule graph.

    ``type`` keeps the raw string from the document so that nodes of an
    unknown kind can still be carried through a run and reported.
    """
    id: str
    type: str
    data: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if isinstance(self.data, Mapping):
            self.data = dict(self.data)
        else:
            logger.warning(
                f"Node {self.id} has non-mapping data ({type(self.data).__name__}); treating it as empty"
            )
            self.data = {}

    @property
    def node_type(self) -> Optional[NodeType]:
        return parse_enum(NodeType, self.type)

    @property
    def label(self) -> str:
        return self.data.get("label") or ""

    @property
    def is_active(self) -> bool:
        return bool(self.data.get("isActive", False))

    def payload(self) -> Optional[NodePayload]:
        """Parse ``data`` into the payload type for this node's kind."""
        node_type = self.node_type
        if node_type is None:
            return None
        return PAYLOAD_TYPES[node_type].from_dict(self.data)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "type": self.type, "data": dict(self.data)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProgramNode":
        return cls(
            id=data["id"],
            type=data.get("type", ""),
            data=data.get("data") or {},
        )


@dataclass
class ProgramEdge:
    """Directed edge: ``source`` is evaluated before ``target``."""
    id: str
    source: str
    target: str

    @property
    def is_self_loop(self) -> bool:
        return self.source == self.target

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "source": self.source, "target": self.target}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProgramEdge":
        return cls(
            id=data.get("id") or f"{data['source']}->{data['target']}",
            source=data["source"],
            target=data["target"],
        )


@dataclass
class Program:
    """
    A complete program graph. Node order is the order given in the document.

    Node ids are expected to be unique. When a document repeats one, the first
    definition is the node; later ones are recorded in ``duplicate_ids`` and
    take no part in lookup, iteration or evaluation.
    """
    nodes: List[ProgramNode] = field(default_factory=list)
    edges: List[ProgramEdge] = field(default_factory=list)

    def __post_init__(self):
        self._index: Dict[str, ProgramNode] = {}
        self._duplicates: List[str] = []
        for node in self.nodes:
            if node.id in self._index:
                logger.warning(f"Duplicate node id {node.id}; keeping the first definition")
                self._duplicates.append(node.id)
                continue
            self._index[node.id] = node

    def __iter__(self) -> Iterator[ProgramNode]:
        """Distinct nodes, in document order."""
        return iter(self._index.values())

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def get_node(self, node_id: str) -> Optional[ProgramNode]:
        """Look up a node by id."""
        return self._index.get(node_id)

    @property
    def node_ids(self) -> List[str]:
        return list(self._index)

    @property
    def duplicate_ids(self) -> List[str]:
        return list(self._duplicates)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Program":
        return cls(
            nodes=[ProgramNode.from_dict(n) for n in data.get("nodes", [])],
            edges=[ProgramEdge.from_dict(e) for e in data.get("edges", [])],
        )


ProgramLike = Union[Program, Mapping[str, Any]]


def as_program(program: ProgramLike) -> Program:
    """Accept a Program or its dict form."""
    if isinstance(program, Program):
        return program
    return Program.from_dict(program)


P = TypeVar("P", bound=NodePayload)


def as_payload(data: Union[NodePayload, Mapping[str, Any]], payload_cls: Type[P]) -> P:
    """Accept a payload object or a node's raw ``data`` mapping."""
    if isinstance(data, payload_cls):
        return data
    if isinstance(data, ProgramNode):
        return payload_cls.from_dict(data.data)
    return payload_cls.from_dict(data)
