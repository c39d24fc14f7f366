"""Execution ordering - topological sort and parallel batches.

Both functions prescribe an order to act on, so unlike the cycle and
depth analyzers they refuse cyclic input outright: an incomplete result
raises CycleDetectedError carrying the cycles, never a partial order.
"""

from __future__ import annotations

from collections import deque

from specgraph.errors import CycleDetectedError
from specgraph.graph.cycles import detect_cycles
from specgraph.graph.model import Graph


def _in_degrees(graph: Graph, adjacency: dict[str, list[str]]) -> dict[str, int]:
    degrees = {node: 0 for node in graph.nodes}
    for targets in adjacency.values():
        for target in targets:
            degrees[target] += 1
    return degrees


def topological_sort(graph: Graph) -> list[str]:
    """Order all nodes so every edge points forward (Kahn's algorithm).

    Zero in-degree nodes seed a FIFO queue in input order; successors join
    the queue as their last predecessor is emitted.

    Raises:
        CycleDetectedError: If fewer nodes than exist could be ordered.
    """
    adjacency = graph.successors()
    in_degree = _in_degrees(graph, adjacency)

    queue = deque(node for node in graph.nodes if in_degree[node] == 0)
    order: list[str] = []

    while queue:
        node = queue.popleft()
        order.append(node)
        for succ in adjacency[node]:
            in_degree[succ] -= 1
            if in_degree[succ] == 0:
                queue.append(succ)

    if len(order) < graph.node_count:
        raise CycleDetectedError(detect_cycles(graph), action="determine execution order")

    return order


def execution_batches(graph: Graph) -> list[list[str]]:
    """Partition nodes into batches that can each be processed in parallel.

    Every batch holds all remaining nodes whose predecessors are in earlier
    batches. Within a batch nodes keep their input order.

    Raises:
        CycleDetectedError: If a step finds no ready node while nodes remain.
    """
    adjacency = graph.successors()
    unresolved = _in_degrees(graph, adjacency)
    remaining = list(graph.nodes)
    batches: list[list[str]] = []

    while remaining:
        batch = [node for node in remaining if unresolved[node] == 0]
        if not batch:
            raise CycleDetectedError(detect_cycles(graph), action="create execution batches")

        done = set(batch)
        remaining = [node for node in remaining if node not in done]
        for node in batch:
            for succ in adjacency[node]:
                unresolved[succ] -= 1
        batches.append(batch)

    return batches


__all__ = ["execution_batches", "topological_sort"]
