"""Tests for the graph engine: cycles, ordering, batches and depth."""

from __future__ import annotations

import pytest

from specgraph.errors import CycleDetectedError
from specgraph.graph import (
    Edge,
    Graph,
    analyze_cycles,
    analyze_depth,
    compute_depths,
    detect_cycles,
    execution_batches,
    find_cycle_in_path,
    topological_sort,
)
from tests.helpers import make_graph


def _cycle_closes(graph: Graph, cycle: list[str]) -> bool:
    edges = {(e.source, e.target) for e in graph.edges}
    pairs = zip(cycle, cycle[1:] + cycle[:1])
    return all(pair in edges for pair in pairs)


# ─────────────────────────────────────────────────────────────────────────────
# Cycle detection
# ─────────────────────────────────────────────────────────────────────────────


class TestDetectCycles:
    """Cycle detection never fails and is deterministic."""

    def test_acyclic_graph_has_no_cycles(self, diamond):
        assert detect_cycles(diamond) == []

    def test_empty_graph(self):
        assert detect_cycles(Graph()) == []

    def test_two_cycle_contains_both_nodes(self, two_cycle):
        cycles = detect_cycles(two_cycle)
        assert cycles == [["A", "B"]]
        assert _cycle_closes(two_cycle, cycles[0])

    def test_self_loop(self):
        graph = make_graph(["A", "B"], [("A", "A"), ("A", "B")])
        assert detect_cycles(graph) == [["A"]]

    def test_cycle_is_path_slice_not_whole_path(self):
        graph = make_graph(["R", "A", "B"], [("R", "A"), ("A", "B"), ("B", "A")])
        assert detect_cycles(graph) == [["A", "B"]]

    def test_every_reported_cycle_is_closed(self):
        graph = make_graph(
            ["A", "B", "C", "D"],
            [("A", "B"), ("B", "C"), ("C", "A"), ("C", "D"), ("D", "C")],
        )
        cycles = detect_cycles(graph)
        assert cycles
        for cycle in cycles:
            assert _cycle_closes(graph, cycle)

    def test_deterministic(self):
        graph = make_graph(
            ["A", "B", "C", "D"],
            [("A", "B"), ("B", "A"), ("C", "D"), ("D", "C"), ("B", "C")],
        )
        assert detect_cycles(graph) == detect_cycles(graph)
        assert detect_cycles(graph) == [["A", "B"], ["C", "D"]]

    def test_duplicate_edges_collapse(self):
        graph = make_graph(["A", "B"], [("A", "B"), ("A", "B"), ("B", "A")])
        assert detect_cycles(graph) == [["A", "B"]]

    def test_edges_to_unknown_nodes_are_ignored(self):
        graph = Graph(nodes=["A"], edges=[Edge("A", "ghost"), Edge("ghost", "A")])
        assert detect_cycles(graph) == []

    def test_deep_chain_does_not_recurse(self):
        nodes = [f"n{i}" for i in range(5000)]
        edges = list(zip(nodes, nodes[1:])) + [(nodes[-1], nodes[0])]
        cycles = detect_cycles(make_graph(nodes, edges))
        assert len(cycles) == 1
        assert len(cycles[0]) == 5000


class TestCycleAnalysis:
    def test_summary(self, two_cycle):
        analysis = analyze_cycles(two_cycle)
        assert analysis.has_cycles
        assert analysis.total_cycles == 1
        assert analysis.max_cycle_length == 2
        assert analysis.affected_nodes == ["A", "B"]

    def test_to_dict(self, linear_chain):
        data = analyze_cycles(linear_chain).to_dict()
        assert data == {
            "has_cycles": False,
            "cycles": [],
            "summary": {"total_cycles": 0, "max_cycle_length": 0, "affected_nodes": []},
        }


class TestFindCycleInPath:
    def test_repeated_node(self):
        assert find_cycle_in_path(["A", "B", "A"]) is True

    def test_no_repeat(self):
        assert find_cycle_in_path(["A", "B", "C"]) is False

    def test_short_paths(self):
        assert find_cycle_in_path([]) is False
        assert find_cycle_in_path(["A"]) is False


# ─────────────────────────────────────────────────────────────────────────────
# Topological sort
# ─────────────────────────────────────────────────────────────────────────────


class TestTopologicalSort:
    def test_linear_chain(self, linear_chain):
        assert topological_sort(linear_chain) == ["A", "B", "C"]

    def test_diamond_respects_edges(self, diamond):
        order = topological_sort(diamond)
        assert sorted(order) == sorted(diamond.nodes)
        position = {node: i for i, node in enumerate(order)}
        for edge in diamond.edges:
            assert position[edge.source] < position[edge.target]

    def test_zero_in_degree_nodes_keep_input_order(self):
        graph = make_graph(["C", "A", "B"], [])
        assert topological_sort(graph) == ["C", "A", "B"]

    def test_empty_graph(self):
        assert topological_sort(Graph()) == []

    def test_cycle_raises_with_cycles(self, two_cycle):
        with pytest.raises(CycleDetectedError) as exc_info:
            topological_sort(two_cycle)
        assert exc_info.value.cycles == [["A", "B"]]
        assert "A -> B -> A" in str(exc_info.value)

    def test_partial_cycle_still_raises(self):
        graph = make_graph(["X", "A", "B"], [("X", "A"), ("A", "B"), ("B", "A")])
        with pytest.raises(CycleDetectedError):
            topological_sort(graph)

    def test_duplicate_edges_do_not_block(self):
        graph = make_graph(["A", "B"], [("A", "B"), ("A", "B")])
        assert topological_sort(graph) == ["A", "B"]


# ─────────────────────────────────────────────────────────────────────────────
# Execution batches
# ─────────────────────────────────────────────────────────────────────────────


class TestExecutionBatches:
    def test_linear_chain(self, linear_chain):
        assert execution_batches(linear_chain) == [["A"], ["B"], ["C"]]

    def test_diamond(self, diamond):
        assert execution_batches(diamond) == [["A"], ["B", "C"], ["D"]]

    def test_partition_properties(self):
        graph = make_graph(
            ["A", "B", "C", "D", "E", "F"],
            [("A", "C"), ("B", "C"), ("C", "D"), ("A", "E"), ("E", "F"), ("D", "F")],
        )
        batches = execution_batches(graph)
        flat = [node for batch in batches for node in batch]
        assert sorted(flat) == sorted(graph.nodes)
        assert len(flat) == len(set(flat))

        batch_of = {node: i for i, batch in enumerate(batches) for node in batch}
        for edge in graph.edges:
            assert batch_of[edge.source] < batch_of[edge.target]

    def test_within_batch_input_order(self):
        graph = make_graph(["Z", "Y", "X"], [])
        assert execution_batches(graph) == [["Z", "Y", "X"]]

    def test_empty_graph(self):
        assert execution_batches(Graph()) == []

    def test_cycle_raises(self, two_cycle):
        with pytest.raises(CycleDetectedError) as exc_info:
            execution_batches(two_cycle)
        assert exc_info.value.cycles == [["A", "B"]]
        assert "create execution batches" in str(exc_info.value)


# ─────────────────────────────────────────────────────────────────────────────
# Depth
# ─────────────────────────────────────────────────────────────────────────────


class TestDepth:
    def test_linear_chain(self, linear_chain):
        analysis = analyze_depth(linear_chain)
        assert analysis.depths == {"A": 1, "B": 2, "C": 3}
        assert analysis.max_depth == 3
        assert analysis.critical_path == ["C"]
        assert analysis.average_depth == pytest.approx(2.0)

    def test_diamond(self, diamond):
        depths = compute_depths(diamond)
        assert depths["D"] == 3
        assert depths["B"] == depths["C"] == 2

    def test_roots_have_depth_one(self, diamond):
        depths = compute_depths(diamond)
        for root in diamond.roots():
            assert depths[root] == 1

    def test_edge_property(self):
        graph = make_graph(
            ["A", "B", "C", "D"],
            [("A", "B"), ("B", "C"), ("A", "C"), ("C", "D"), ("A", "D")],
        )
        depths = compute_depths(graph)
        for edge in graph.edges:
            assert depths[edge.target] >= depths[edge.source] + 1
        assert depths == {"A": 1, "B": 2, "C": 3, "D": 4}

    def test_critical_path_lists_all_deepest_nodes(self):
        graph = make_graph(["A", "B", "C"], [("A", "B"), ("A", "C")])
        assert analyze_depth(graph).critical_path == ["B", "C"]

    def test_empty_graph(self):
        analysis = analyze_depth(Graph())
        assert analysis.depths == {}
        assert analysis.max_depth == 0
        assert analysis.average_depth == 0.0
        assert analysis.critical_path == []

    def test_cyclic_graph_terminates(self, two_cycle):
        depths = compute_depths(two_cycle)
        assert set(depths) == {"A", "B"}
        assert all(d >= 1 for d in depths.values())

    def test_cycle_below_a_root(self):
        graph = make_graph(["R", "A", "B"], [("R", "A"), ("A", "B"), ("B", "A")])
        depths = compute_depths(graph)
        assert depths["R"] == 1
        assert set(depths) == {"R", "A", "B"}

    def test_deep_chain(self):
        nodes = [f"n{i}" for i in range(5000)]
        analysis = analyze_depth(make_graph(nodes, list(zip(nodes, nodes[1:]))))
        assert analysis.max_depth == 5000
        assert analysis.critical_path == ["n4999"]
