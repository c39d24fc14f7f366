"""Depth analysis - longest dependency chain per node.

``depth(n)`` is 1 for a root (no predecessors) and otherwise
``1 + max(depth(p))`` over its predecessors. Depths are memoized, so
diamond-shaped graphs with shared ancestors stay linear.

On cyclic input a predecessor that is still being resolved further up
the stack is skipped, which bounds the walk instead of looping.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

from specgraph.graph.model import Graph


@dataclass
class DepthAnalysis:
    """Depth metrics for a graph.

    Attributes:
        depths: Node ID -> depth (roots are 1).
        max_depth: Largest depth, 0 for an empty graph.
        average_depth: Mean depth over all nodes, 0.0 for an empty graph.
        critical_path: Nodes whose depth equals max_depth, in node order.
    """

    depths: dict[str, int] = field(default_factory=dict)
    max_depth: int = 0
    average_depth: float = 0.0
    critical_path: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "max_depth": self.max_depth,
            "average_depth": self.average_depth,
            "depths": dict(self.depths),
            "critical_path": list(self.critical_path),
        }


@dataclass
class _Frame:
    node: str
    predecessors: Iterator[str]


def compute_depths(graph: Graph) -> dict[str, int]:
    """Compute the depth of every node.

    Roots are resolved first, then any node not yet reached (members of
    cycles with no root upstream), both in node order.
    """
    preds = graph.predecessors()
    roots = [node for node in graph.nodes if not preds[node]]
    depths: dict[str, int] = {node: 1 for node in roots}
    in_progress: set[str] = set()

    for start in graph.nodes:
        if start in depths:
            continue

        in_progress.add(start)
        stack = [_Frame(start, iter(preds[start]))]

        while stack:
            frame = stack[-1]
            for pred in frame.predecessors:
                if pred in depths or pred in in_progress:
                    continue
                in_progress.add(pred)
                stack.append(_Frame(pred, iter(preds[pred])))
                break
            else:
                node = frame.node
                depths[node] = 1 + max((depths[p] for p in preds[node] if p in depths), default=0)
                in_progress.discard(node)
                stack.pop()

    return {node: depths[node] for node in graph.nodes}


def analyze_depth(graph: Graph) -> DepthAnalysis:
    """Compute depths plus max/average depth and the critical path."""
    depths = compute_depths(graph)
    if not depths:
        return DepthAnalysis()

    max_depth = max(depths.values())
    average = sum(depths.values()) / len(depths)
    critical = [node for node, depth in depths.items() if depth == max_depth]
    return DepthAnalysis(
        depths=depths,
        max_depth=max_depth,
        average_depth=average,
        critical_path=critical,
    )


__all__ = ["DepthAnalysis", "analyze_depth", "compute_depths"]
