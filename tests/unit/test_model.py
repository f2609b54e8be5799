"""
Unit tests for the loyalty program model and document schema.
"""

import json

import pytest

from loyalty.core import (
    ComparisonOperator,
    ConstraintData,
    DistributionData,
    NodeType,
    OperatorData,
    PointMappingType,
    Program,
    ProgramEdge,
    ProgramNode,
    RuleData,
    RuleType,
    as_payload,
    as_program,
    parse_enum,
    parse_event_data,
    parse_program,
)
from loyalty.errors import DryTestError, ProgramSchemaError


PROGRAM_DOC = {
    "nodes": [
        {"id": "A", "type": "constraint",
         "data": {"label": "Big spend", "isActive": True, "parameter": "value",
                  "comparisonOperator": "GREATER_OR_EQUAL", "value": 100}},
        {"id": "B", "type": "rule", "data": {"label": "Rule", "isActive": True, "ruleType": "CONDITIONAL"}},
    ],
    "edges": [{"id": "e1", "source": "A", "target": "B"}],
}


class TestParseEnum:
    """Test lenient enum lookup."""

    def test_known_value(self):
        assert parse_enum(NodeType, "rule") is NodeType.RULE

    def test_member_passthrough(self):
        assert parse_enum(RuleType, RuleType.THRESHOLD) is RuleType.THRESHOLD

    def test_unknown_value(self):
        assert parse_enum(ComparisonOperator, "LESS_THAN") is None

    def test_non_string(self):
        assert parse_enum(NodeType, None) is None
        assert parse_enum(NodeType, 3) is None


class TestPayloads:
    """Test payload parsing from camelCase node data."""

    def test_constraint_payload(self):
        data = ConstraintData.from_dict({
            "label": "Spend", "isActive": True, "parameter": "value",
            "comparisonOperator": "BETWEEN", "value": [1, 2],
        })
        assert data.label == "Spend"
        assert data.is_active is True
        assert data.comparison_operator is ComparisonOperator.BETWEEN
        assert data.raw_operator == "BETWEEN"
        assert data.value == [1, 2]

    def test_unknown_operator_keeps_raw(self):
        data = ConstraintData.from_dict({"comparisonOperator": "LIKE"})
        assert data.comparison_operator is None
        assert data.raw_operator == "LIKE"

    def test_is_active_defaults_false(self):
        """Test a node without isActive is inactive."""
        assert RuleData.from_dict({"ruleType": "CONDITIONAL"}).is_active is False

    def test_rule_threshold_default(self):
        assert RuleData.from_dict({"ruleType": "THRESHOLD"}).threshold == 0

    def test_operator_payload(self):
        data = OperatorData.from_dict({"operatorType": "MAX", "isActive": True})
        assert data.operator_type.value == "MAX"

    def test_distribution_payload(self):
        data = DistributionData.from_dict({
            "pointMappingType": "FIXED_AMOUNT", "fixedAmount": 25,
            "distributionType": "bonus",
        })
        assert data.point_mapping_type is PointMappingType.FIXED_AMOUNT
        assert data.fixed_amount == 25
        assert data.multiplier == 0
        assert data.distribution_type == "bonus"

    def test_as_payload_accepts_node(self):
        node = ProgramNode(id="r", type="rule", data={"ruleType": "SEQUENTIAL", "isActive": True})
        assert as_payload(node, RuleData).rule_type is RuleType.SEQUENTIAL

    def test_as_payload_passthrough(self):
        payload = RuleData(label="x", is_active=True, rule_type=RuleType.CONDITIONAL)
        assert as_payload(payload, RuleData) is payload


class TestProgram:
    """Test the in-memory program graph."""

    def test_from_dict(self):
        program = Program.from_dict(PROGRAM_DOC)
        assert program.node_ids == ["A", "B"]
        assert len(program) == 2
        assert "A" in program
        assert "Z" not in program
        assert program.get_node("B").node_type is NodeType.RULE
        assert program.get_node("Z") is None

    def test_node_payload(self):
        program = Program.from_dict(PROGRAM_DOC)
        payload = program.get_node("A").payload()
        assert isinstance(payload, ConstraintData)
        assert payload.parameter == "value"

    def test_unknown_type_has_no_payload(self):
        node = ProgramNode(id="x", type="webhook")
        assert node.node_type is None
        assert node.payload() is None

    def test_edge_default_id(self):
        edge = ProgramEdge.from_dict({"source": "a", "target": "b"})
        assert edge.id == "a->b"

    def test_self_loop(self):
        assert ProgramEdge(id="e", source="a", target="a").is_self_loop

    def test_to_dict(self):
        program = Program.from_dict(PROGRAM_DOC)
        assert program.to_dict() == PROGRAM_DOC

    def test_as_program(self):
        program = Program.from_dict(PROGRAM_DOC)
        assert as_program(program) is program
        assert as_program(PROGRAM_DOC).node_ids == ["A", "B"]

    @pytest.mark.parametrize("raw", ["oops", ["label", "x"], 42])
    def test_non_mapping_data_is_empty(self, raw):
        """Test malformed node data does not raise and reads as unconfigured."""
        node = ProgramNode.from_dict({"id": "bad", "type": "rule", "data": raw})
        assert node.data == {}
        assert node.is_active is False
        assert node.payload().rule_type is None

    def test_duplicate_ids_keep_first(self):
        program = Program(nodes=[
            ProgramNode(id="a", type="rule", data={"label": "first"}),
            ProgramNode(id="b", type="rule"),
            ProgramNode(id="a", type="rule", data={"label": "second"}),
        ])
        assert program.node_ids == ["a", "b"]
        assert len(program) == 2
        assert [n.label for n in program] == ["first", ""]
        assert program.get_node("a").label == "first"
        assert program.duplicate_ids == ["a"]


class TestParseProgram:
    """Test document validation."""

    def test_valid_document(self):
        program = parse_program(PROGRAM_DOC)
        assert program.node_ids == ["A", "B"]
        assert program.edges[0].source == "A"

    def test_json_string(self):
        program = parse_program(json.dumps(PROGRAM_DOC))
        assert len(program) == 2

    def test_invalid_json(self):
        with pytest.raises(ProgramSchemaError, match="not valid JSON"):
            parse_program("{nodes: ")

    def test_missing_edge_field(self):
        doc = {"nodes": [], "edges": [{"id": "e1", "source": "A"}]}
        with pytest.raises(ProgramSchemaError):
            parse_program(doc)

    def test_duplicate_node_id(self):
        doc = {"nodes": [{"id": "A", "type": "rule"}, {"id": "A", "type": "rule"}]}
        with pytest.raises(ProgramSchemaError) as exc_info:
            parse_program(doc)
        assert exc_info.value.node_id == "A"

    def test_schema_error_is_dry_test_error(self):
        with pytest.raises(DryTestError):
            parse_program({"nodes": "not a list"})

    def test_unknown_node_type_is_accepted(self):
        """Test unknown kinds pass the schema; they are reported at run time."""
        program = parse_program({"nodes": [{"id": "x", "type": "webhook"}]})
        assert program.get_node("x").type == "webhook"


class TestParseEventData:
    """Test event record validation."""

    def test_flat_record(self):
        assert parse_event_data({"value": 200, "tx_type": "purchase"}) == {
            "value": 200, "tx_type": "purchase",
        }

    def test_json_string(self):
        assert parse_event_data('{"value": 1.5}') == {"value": 1.5}

    def test_nested_values_rejected(self):
        with pytest.raises(ProgramSchemaError):
            parse_event_data({"items": [{"sku": "a"}]})
