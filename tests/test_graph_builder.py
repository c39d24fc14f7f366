"""Tests for GraphBuilder and the dangling reference policies."""

from __future__ import annotations

import logging

import pytest

from specgraph.entities import Component, ComponentType, Plan, TestCase
from specgraph.errors import ConfigError
from specgraph.graph import (
    DanglingPolicy,
    DanglingReference,
    Edge,
    GraphBuilder,
    GraphConfig,
    build_combined_graph,
    build_component_graph,
    build_plan_graph,
    topological_sort,
)

MATERIALIZE = GraphConfig(dangling_references=DanglingPolicy.MATERIALIZE)


class TestGraphConfig:
    def test_default_is_drop(self):
        assert GraphConfig().dangling_references is DanglingPolicy.DROP
        assert GraphConfig.from_dict({}).dangling_references is DanglingPolicy.DROP

    def test_from_dict_is_case_insensitive(self):
        config = GraphConfig.from_dict({"dangling_references": "Materialize"})
        assert config.dangling_references is DanglingPolicy.MATERIALIZE

    def test_unknown_policy_raises(self):
        with pytest.raises(ConfigError, match="dangling_references"):
            GraphConfig.from_dict({"dangling_references": "ignore"})


class TestBuildPlanGraph:
    def test_edges_point_from_dependency_to_dependent(self, sample_plans):
        graph = build_plan_graph(sample_plans)
        assert graph.nodes == ["pln-001-bootstrap", "pln-002-auth-flow", "pln-003-dashboard"]
        assert graph.edges == [
            Edge("pln-001-bootstrap", "pln-002-auth-flow"),
            Edge("pln-002-auth-flow", "pln-003-dashboard"),
        ]
        assert graph.dangling == []

    def test_empty_input(self):
        graph = build_plan_graph([])
        assert graph.nodes == []
        assert graph.edges == []
        assert graph.cycles == []

    def test_duplicate_ids_first_wins(self, caplog):
        plans = [
            Plan(number=1, slug="a", name="first"),
            Plan(number=1, slug="a", name="second", depends_on=["pln-002-b"]),
            Plan(number=2, slug="b"),
        ]
        with caplog.at_level(logging.WARNING, logger="specgraph"):
            graph = build_plan_graph(plans)
        assert graph.nodes == ["pln-001-a", "pln-002-b"]
        assert graph.edges == []
        assert "Duplicate entity ID pln-001-a" in caplog.text

    def test_to_dict(self, sample_plans):
        data = build_plan_graph(sample_plans).to_dict()
        assert data["edges"][0] == {"from": "pln-001-bootstrap", "to": "pln-002-auth-flow"}
        assert data["metadata"] == {"node_count": 3, "edge_count": 2, "cycle_count": 0}


class TestBuildComponentGraph:
    def test_component_ids_use_type_prefix(self, sample_components):
        graph = build_component_graph(sample_components)
        assert graph.nodes == ["lib-001-core", "svc-001-auth", "app-001-web"]
        assert topological_sort(graph) == ["lib-001-core", "svc-001-auth", "app-001-web"]

    def test_tool_prefix(self):
        graph = build_component_graph([Component(type=ComponentType.TOOL, number=7, slug="cli")])
        assert graph.nodes == ["tol-007-cli"]


class TestBuildCombinedGraph:
    def test_test_case_links_come_last(self, sample_plans, sample_components):
        graph = build_combined_graph(sample_plans, sample_components)
        assert graph.node_count == 6
        assert graph.edges[-1] == Edge("svc-001-auth", "pln-002-auth-flow")
        assert graph.edge_count == 5

    def test_duplicate_plan_test_cases_are_not_linked(self, sample_components):
        plans = [
            Plan(number=1, slug="a"),
            Plan(
                number=1,
                slug="a",
                depends_on=["pln-002-b"],
                test_cases=[TestCase(id="tc", components=["lib-001-core"])],
            ),
            Plan(number=2, slug="b"),
        ]
        graph = build_combined_graph(plans, sample_components)
        assert Edge("lib-001-core", "pln-001-a") not in graph.edges
        assert Edge("pln-002-b", "pln-001-a") not in graph.edges

    def test_unknown_test_case_component_is_dangling(self):
        plans = [
            Plan(
                number=1,
                slug="a",
                test_cases=[TestCase(id="tc", components=["svc-009-gone"])],
            )
        ]
        graph = build_combined_graph(plans, [])
        assert graph.edges == []
        assert graph.dangling == [
            DanglingReference("svc-009-gone", "pln-001-a", "svc-009-gone", "test_case")
        ]


class TestDanglingPolicy:
    """References to unknown IDs are validated when build() runs."""

    @pytest.fixture
    def plans(self):
        return [
            Plan(number=1, slug="a", depends_on=["pln-099-missing"]),
            Plan(number=2, slug="b", depends_on=["pln-001-a"]),
        ]

    def test_drop_omits_edge_and_records(self, plans, caplog):
        with caplog.at_level(logging.WARNING, logger="specgraph"):
            graph = build_plan_graph(plans)
        assert graph.nodes == ["pln-001-a", "pln-002-b"]
        assert graph.edges == [Edge("pln-001-a", "pln-002-b")]
        assert graph.dangling == [
            DanglingReference("pln-099-missing", "pln-001-a", "pln-099-missing", "depends_on")
        ]
        assert "pln-099-missing" in caplog.text
        assert "edge dropped" in caplog.text

    def test_drop_keeps_ordering_consistent(self, plans):
        assert topological_sort(build_plan_graph(plans)) == ["pln-001-a", "pln-002-b"]

    def test_materialize_adds_implicit_node_after_declared(self, plans):
        graph = build_plan_graph(plans, MATERIALIZE)
        assert graph.nodes == ["pln-001-a", "pln-002-b", "pln-099-missing"]
        assert Edge("pln-099-missing", "pln-001-a") in graph.edges
        assert len(graph.dangling) == 1

    def test_materialize_orders_implicit_node_first(self, plans):
        order = topological_sort(build_plan_graph(plans, MATERIALIZE))
        assert order == ["pln-099-missing", "pln-001-a", "pln-002-b"]

    def test_materialize_reuses_one_node_for_repeated_reference(self):
        plans = [
            Plan(number=1, slug="a", depends_on=["pln-099-missing"]),
            Plan(number=2, slug="b", depends_on=["pln-099-missing"]),
        ]
        graph = build_plan_graph(plans, MATERIALIZE)
        assert graph.nodes.count("pln-099-missing") == 1
        assert len(graph.dangling) == 2

    def test_builder_api(self):
        builder = GraphBuilder()
        assert builder.add_node("x") is True
        assert builder.add_node("x") is False
        builder.add_dependency("x", "y")
        graph = builder.build()
        assert graph.nodes == ["x"]
        assert graph.dangling[0].missing_id == "y"
