"""Dependency resolution - graphs, execution order and batches.

DependencyResolver is the entry point tool handlers and the CLI use. It
loads a fresh entity snapshot on every call, builds the relevant graph,
and hands it to the engine. Ordering operations raise CycleDetectedError
with the offending cycles instead of returning a partial answer.
"""

from __future__ import annotations

import logging
from typing import Iterator

from specgraph.entities import ComponentType, EntityKind, parse_id
from specgraph.errors import CycleDetectedError, EntityNotFoundError
from specgraph.graph.builder import GraphConfig, build_component_graph, build_plan_graph
from specgraph.graph.cycles import detect_cycles
from specgraph.graph.model import Graph
from specgraph.graph.ordering import execution_batches, topological_sort
from specgraph.repository import SpecRepository

logger = logging.getLogger(__name__)

EXECUTION_KINDS = ("plans", "components")


class DependencyResolver:
    """Resolve plan and component dependencies from a spec repository."""

    def __init__(self, repository: SpecRepository, config: GraphConfig | None = None) -> None:
        self.repository = repository
        self.config = config or GraphConfig()

    # ─────────────────────────────────────────────────────────────────────
    # Graphs
    # ─────────────────────────────────────────────────────────────────────

    def generate_plan_dependency_graph(self) -> Graph:
        """Plan graph with its cycles attached."""
        graph = build_plan_graph(self.repository.list_plans(), self.config)
        graph.cycles = detect_cycles(graph)
        return graph

    def generate_component_dependency_graph(self) -> Graph:
        """Component graph with its cycles attached."""
        graph = build_component_graph(self.repository.list_components(), self.config)
        graph.cycles = detect_cycles(graph)
        return graph

    def _graph_for(self, kind: str) -> Graph:
        if kind == "plans":
            return self.generate_plan_dependency_graph()
        if kind == "components":
            return self.generate_component_dependency_graph()
        raise ValueError(f"kind must be one of {EXECUTION_KINDS}, got {kind!r}")

    # ─────────────────────────────────────────────────────────────────────
    # Ordering
    # ─────────────────────────────────────────────────────────────────────

    def get_optimal_execution_order(self, kind: str) -> list[str]:
        """Topological order of all plans or all components.

        Args:
            kind: "plans" or "components".

        Raises:
            CycleDetectedError: If the graph has cycles.
            ValueError: If kind is not recognised.
        """
        graph = self._graph_for(kind)
        if graph.has_cycles:
            raise CycleDetectedError(graph.cycles, action="determine execution order")
        return topological_sort(graph)

    def get_plan_execution_batches(self) -> list[list[str]]:
        """Plan batches that can each be worked on in parallel.

        Raises:
            CycleDetectedError: If the plan graph has cycles.
        """
        graph = self.generate_plan_dependency_graph()
        if graph.has_cycles:
            raise CycleDetectedError(graph.cycles, action="create execution batches")
        return execution_batches(graph)

    # ─────────────────────────────────────────────────────────────────────
    # Single-entity resolution
    # ─────────────────────────────────────────────────────────────────────

    def resolve_plan_dependencies(self, plan_id: str) -> list[str]:
        """Transitive dependencies of one plan, dependencies first, plan last.

        Raises:
            EntityNotFoundError: If plan_id does not exist.
        """
        lookup = {plan.id: plan.depends_on for plan in self.repository.list_plans()}
        return _resolve_closure(plan_id, lookup, "plan")

    def resolve_component_dependencies(self, component_id: str) -> list[str]:
        """Transitive dependencies of one component, dependencies first.

        Raises:
            EntityNotFoundError: If component_id does not exist.
        """
        lookup = {c.id: c.depends_on for c in self.repository.list_components()}
        return _resolve_closure(component_id, lookup, "component")

    def resolve_dependencies(self, entity_id: str) -> list[str]:
        """Transitive dependencies of a plan or component, chosen by ID prefix.

        Raises:
            EntityNotFoundError: If the ID is not a known plan or component.
        """
        parsed = parse_id(entity_id)
        if parsed is not None and parsed[0] == EntityKind.PLAN.prefix:
            return self.resolve_plan_dependencies(entity_id)
        if parsed is not None and ComponentType.from_prefix(parsed[0]) is not None:
            return self.resolve_component_dependencies(entity_id)
        raise EntityNotFoundError(entity_id, "entity")


def _resolve_closure(root_id: str, lookup: dict[str, list[str]], kind: str) -> list[str]:
    """Post-order walk of depends_on starting at root_id.

    Unknown dependency IDs are skipped; a visited set makes cycles safe.
    """
    if root_id not in lookup:
        raise EntityNotFoundError(root_id, kind)

    resolved: list[str] = []
    visited = {root_id}
    stack: list[tuple[str, Iterator[str]]] = [(root_id, iter(lookup[root_id]))]

    while stack:
        node, deps = stack[-1]
        for dep in deps:
            if dep in visited:
                continue
            visited.add(dep)
            if dep not in lookup:
                logger.warning("%s depends on unknown %s %s", node, kind, dep)
                continue
            stack.append((dep, iter(lookup[dep])))
            break
        else:
            resolved.append(node)
            stack.pop()

    return resolved


__all__ = ["EXECUTION_KINDS", "DependencyResolver"]
