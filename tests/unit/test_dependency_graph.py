"""
Unit tests for the loyalty dependency graph builder.
"""

import logging

import pytest

from conftest import edge, node, program
from loyalty.graph import DependencyGraph, build_dependency_graph


class TestDependencyGraph:
    """Test adjacency construction."""

    def test_linear_adjacency(self, linear_program):
        graph = DependencyGraph.build(linear_program)

        assert graph.node_ids == ["A", "B", "C"]
        assert graph.dependencies("B") == ["A"]
        assert graph.dependents("B") == ["C"]
        assert graph.dependencies("A") == []
        assert graph.dependents("C") == []
        assert graph.edge_count == 2

    def test_edge_order_preserved(self, diamond_program):
        """Test dependencies are listed in edge order."""
        graph = DependencyGraph.build(diamond_program)
        assert graph.dependencies("and") == ["c1", "c2"]

    def test_duplicate_edges_kept(self):
        prog = program(
            [node("a", "constraint"), node("b", "rule")],
            [edge("a", "b", "e1"), edge("a", "b", "e2")],
        )
        graph = DependencyGraph.build(prog)
        assert graph.dependencies("b") == ["a", "a"]
        assert graph.edge_count == 2

    def test_unknown_endpoint_dropped(self):
        """Test edges to unknown nodes are dropped and recorded."""
        prog = program(
            [node("a", "constraint"), node("b", "rule")],
            [edge("a", "b"), edge("ghost", "b", "e-ghost"), edge("a", "nowhere", "e-nowhere")],
        )
        graph = DependencyGraph.build(prog)

        assert graph.dependencies("b") == ["a"]
        assert graph.dependents("a") == ["b"]
        assert [d.edge.id for d in graph.dropped_edges] == ["e-ghost", "e-nowhere"]
        assert graph.dropped_edges[0].missing == ["ghost"]
        assert "ghost" in graph.dropped_edges[0].reason

    def test_dropped_edge_logged(self, caplog):
        prog = program([node("a", "constraint")], [edge("a", "ghost", "e1")])
        with caplog.at_level(logging.WARNING, logger="loyalty.graph.builder"):
            DependencyGraph.build(prog)
        assert "Dropping edge e1" in caplog.text

    def test_dropped_edge_logging_disabled(self, caplog):
        prog = program([node("a", "constraint")], [edge("a", "ghost", "e1")])
        with caplog.at_level(logging.WARNING, logger="loyalty.graph.builder"):
            graph = DependencyGraph.build(prog, log_dropped_edges=False)
        assert "Dropping edge" not in caplog.text
        assert len(graph.dropped_edges) == 1

    def test_self_loop_kept(self):
        prog = program([node("a", "rule")], [edge("a", "a")])
        graph = DependencyGraph.build(prog)
        assert graph.dependencies("a") == ["a"]
        assert graph.dropped_edges == []

    def test_unknown_lookup_is_empty(self, linear_program):
        graph = DependencyGraph.build(linear_program)
        assert graph.dependencies("Z") == []
        assert "Z" not in graph
        assert "A" in graph


class TestGraphStructure:
    """Test structural queries."""

    def test_roots_and_sinks(self, diamond_program):
        graph = DependencyGraph.build(diamond_program)
        assert graph.roots() == ["c1", "c2"]
        assert graph.sinks() == ["bonus"]

    def test_isolated(self):
        prog = program(
            [node("a", "constraint"), node("b", "rule"), node("lonely", "operator")],
            [edge("a", "b")],
        )
        graph = DependencyGraph.build(prog)
        assert graph.isolated() == ["lonely"]

    def test_components(self):
        prog = program(
            [node("a", "constraint"), node("x", "constraint"), node("b", "rule"), node("y", "rule")],
            [edge("a", "b"), edge("x", "y")],
        )
        graph = DependencyGraph.build(prog)
        assert graph.components() == [["a", "b"], ["x", "y"]]

    def test_networkx_view(self, linear_program):
        graph = DependencyGraph.build(linear_program)
        assert graph.graph.has_edge("A", "B")
        assert graph.graph.number_of_nodes() == 3

    def test_to_dict(self, linear_program):
        data = build_dependency_graph(linear_program).to_dict()
        assert data["nodes"]["B"] == {"dependencies": ["A"], "dependents": ["C"]}
        assert data["dropped_edges"] == []
