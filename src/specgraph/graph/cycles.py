"""Cycle detection over dependency graphs.

Depth-first traversal with an on-path marker set. Reaching a node that is
already on the current path closes a cycle: the slice of the path from
that node's position to the current node.

The walk is iterative (an explicit stack of frames) and visits nodes and
successors in input order, so the same graph always yields the same
cycle list. Cyclic input is the expected case here, never an error.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

from specgraph.graph.model import Graph


@dataclass
class _Frame:
    node: str
    successors: Iterator[str]


def detect_cycles(graph: Graph) -> list[list[str]]:
    """Find cycles in a graph.

    Args:
        graph: Any graph, including disconnected or cyclic ones.

    Returns:
        One cycle per back edge found, each without a repeated closing
        node. Empty for an acyclic graph.
    """
    adjacency = graph.successors()
    visited: set[str] = set()
    path: list[str] = []
    position: dict[str, int] = {}  # on-path marker: node -> index in path
    cycles: list[list[str]] = []

    for start in graph.nodes:
        if start in visited:
            continue

        visited.add(start)
        position[start] = len(path)
        path.append(start)
        stack = [_Frame(start, iter(adjacency[start]))]

        while stack:
            frame = stack[-1]
            for succ in frame.successors:
                if succ in position:
                    cycles.append(path[position[succ] :])
                elif succ not in visited:
                    visited.add(succ)
                    position[succ] = len(path)
                    path.append(succ)
                    stack.append(_Frame(succ, iter(adjacency[succ])))
                    break
            else:
                stack.pop()
                path.pop()
                del position[frame.node]

    return cycles


def find_cycle_in_path(path: list[str]) -> bool:
    """True if a walk revisits any node."""
    if len(path) < 2:
        return False
    seen: set[str] = set()
    for node in path:
        if node in seen:
            return True
        seen.add(node)
    return False


@dataclass
class CycleAnalysis:
    """Cycle detection result with summary statistics.

    Attributes:
        cycles: Cycles in detection order.
        affected_nodes: Every node that appears in some cycle, first-seen order.
    """

    cycles: list[list[str]] = field(default_factory=list)

    @property
    def has_cycles(self) -> bool:
        return len(self.cycles) > 0

    @property
    def total_cycles(self) -> int:
        return len(self.cycles)

    @property
    def max_cycle_length(self) -> int:
        return max((len(c) for c in self.cycles), default=0)

    @property
    def affected_nodes(self) -> list[str]:
        return list(dict.fromkeys(node for cycle in self.cycles for node in cycle))

    def to_dict(self) -> dict[str, Any]:
        return {
            "has_cycles": self.has_cycles,
            "cycles": [list(c) for c in self.cycles],
            "summary": {
                "total_cycles": self.total_cycles,
                "max_cycle_length": self.max_cycle_length,
                "affected_nodes": self.affected_nodes,
            },
        }


def analyze_cycles(graph: Graph) -> CycleAnalysis:
    """Detect cycles and wrap them with summary statistics."""
    return CycleAnalysis(cycles=detect_cycles(graph))


__all__ = ["CycleAnalysis", "analyze_cycles", "detect_cycles", "find_cycle_in_path"]
