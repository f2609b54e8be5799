"""
loyalty/core/schema.py - Pydantic Document Models

Validates the persisted program file shape ({nodes, edges}) and event data
records before they are turned into the in-memory graph model.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError

from ..errors import ProgramSchemaError
from .model import Program, ProgramEdge, ProgramNode


# =============================================================================
# Program Document Schemas
# =============================================================================


class ProgramNodeModel(BaseModel):
    """A node as stored in a program document."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1, description="Node id, unique within the program")
    type: str = Field(..., description="constraint | rule | operator | distribution")
    data: Dict[str, Any] = Field(default_factory=dict, description="Type-specific payload")


class ProgramEdgeModel(BaseModel):
    """An edge as stored in a program document."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Edge id")
    source: str = Field(..., description="Node evaluated first")
    target: str = Field(..., description="Node that depends on source")


class ProgramDocument(BaseModel):
    """Top-level program document."""

    model_config = ConfigDict(extra="ignore")

    nodes: List[ProgramNodeModel] = Field(default_factory=list)
    edges: List[ProgramEdgeModel] = Field(default_factory=list)

    def to_program(self) -> Program:
        return Program(
            nodes=[ProgramNode(id=n.id, type=n.type, data=dict(n.data)) for n in self.nodes],
            edges=[ProgramEdge(id=e.id, source=e.source, target=e.target) for e in self.edges],
        )


class EventDataDocument(BaseModel):
    """Flat event record: attribute name -> string or number."""

    attributes: Dict[str, Union[str, int, float]] = Field(default_factory=dict)


# =============================================================================
# Parsing helpers
# =============================================================================


def _load(payload: Union[str, bytes, Mapping[str, Any]], what: str) -> Any:
    if isinstance(payload, (str, bytes)):
        try:
            return json.loads(payload)
        except json.JSONDecodeError as e:
            raise ProgramSchemaError(f"{what} is not valid JSON: {e}")
    return payload


def parse_program(payload: Union[str, bytes, Mapping[str, Any]]) -> Program:
    """
    Validate a program document and build a Program.

    Raises:
        ProgramSchemaError: If the document is not valid JSON, does not match
            the program shape, or repeats a node id.
    """
    data = _load(payload, "Program document")
    try:
        document = ProgramDocument.model_validate(data)
    except PydanticValidationError as e:
        raise ProgramSchemaError(f"Program document doesn't match schema: {e}")

    seen = set()
    for node in document.nodes:
        if node.id in seen:
            raise ProgramSchemaError(f"Duplicate node id: {node.id}", node_id=node.id)
        seen.add(node.id)

    return document.to_program()


def parse_event_data(payload: Union[str, bytes, Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Validate an event data record.

    Raises:
        ProgramSchemaError: If the record is not a flat mapping of strings/numbers.
    """
    data = _load(payload, "Event data")
    try:
        document = EventDataDocument.model_validate({"attributes": data})
    except PydanticValidationError as e:
        raise ProgramSchemaError(f"Event data doesn't match schema: {e}")
    return dict(document.attributes)
