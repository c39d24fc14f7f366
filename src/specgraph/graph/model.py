"""Graph model - Nodes, edges and dangling references.

This module defines the plain data structures every analysis stage
consumes:
- Edge: A directed dependency (source must resolve before target)
- DanglingReference: A reference whose endpoint names no known entity
- Graph: Node list plus edge list, with cycles attached by the resolver

Nodes are canonical ID strings; they carry no identity beyond their value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Edge:
    """A directed dependency edge.

    Attributes:
        source: The depended-upon node ID.
        target: The dependent node ID.
    """

    source: str
    target: str

    def to_dict(self) -> dict[str, str]:
        return {"from": self.source, "to": self.target}

    def __str__(self) -> str:
        return f"{self.source} -> {self.target}"


@dataclass(frozen=True)
class DanglingReference:
    """A dependency reference naming an ID that has no node.

    Captured by the GraphBuilder when an edge endpoint cannot be resolved.

    Attributes:
        source_id: ID of the referenced (missing or present) upstream node.
        target_id: ID of the dependent node.
        missing_id: The endpoint that does not exist.
        kind: Relationship kind ("depends_on", "test_case").
    """

    source_id: str
    target_id: str
    missing_id: str
    kind: str

    def to_dict(self) -> dict[str, str]:
        return {
            "from": self.source_id,
            "to": self.target_id,
            "missing": self.missing_id,
            "kind": self.kind,
        }

    def __str__(self) -> str:
        return f"{self.source_id} --[{self.kind}]--> {self.target_id} ({self.missing_id} missing)"


@dataclass
class Graph:
    """A dependency graph snapshot.

    Attributes:
        nodes: Node IDs, no duplicates, in insertion order.
        edges: Edges in insertion order; duplicates are harmless.
        cycles: Cycles found by the CycleDetector, when attached.
        dangling: References the builder could not resolve.
    """

    nodes: list[str] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    cycles: list[list[str]] = field(default_factory=list)
    dangling: list[DanglingReference] = field(default_factory=list)

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    @property
    def has_cycles(self) -> bool:
        return len(self.cycles) > 0

    def successors(self) -> dict[str, list[str]]:
        """Adjacency list keyed by node, in edge order.

        Duplicate edges are collapsed and edges touching unknown nodes
        are skipped, so every key and value is a member of ``nodes``.
        """
        adjacency: dict[str, dict[str, None]] = {node: {} for node in self.nodes}
        for edge in self.edges:
            if edge.source in adjacency and edge.target in adjacency:
                adjacency[edge.source][edge.target] = None
        return {node: list(targets) for node, targets in adjacency.items()}

    def predecessors(self) -> dict[str, list[str]]:
        """Reverse adjacency list, with the same filtering as successors()."""
        reverse: dict[str, dict[str, None]] = {node: {} for node in self.nodes}
        for edge in self.edges:
            if edge.source in reverse and edge.target in reverse:
                reverse[edge.target][edge.source] = None
        return {node: list(sources) for node, sources in reverse.items()}

    def roots(self) -> list[str]:
        """Nodes with no incoming edges, in node order."""
        preds = self.predecessors()
        return [node for node in self.nodes if not preds[node]]

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": list(self.nodes),
            "edges": [e.to_dict() for e in self.edges],
            "cycles": [list(c) for c in self.cycles],
            "dangling": [d.to_dict() for d in self.dangling],
            "metadata": {
                "node_count": self.node_count,
                "edge_count": self.edge_count,
                "cycle_count": len(self.cycles),
            },
        }


__all__ = ["DanglingReference", "Edge", "Graph"]
