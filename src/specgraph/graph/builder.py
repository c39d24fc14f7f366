"""Graph Builder - Constructs a dependency Graph from spec entities.

One node is emitted per entity and one edge per dependency reference,
pointing from the depended-upon entity to the dependent one. Plan test
cases contribute ``component -> plan`` edges to the same edge list.

Edges are validated against the node set when build() is called; what
happens to references naming unknown IDs is decided by GraphConfig.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

from specgraph.entities import Component, Plan
from specgraph.errors import ConfigError
from specgraph.graph.model import DanglingReference, Edge, Graph

logger = logging.getLogger(__name__)


class DanglingPolicy(Enum):
    """What to do with a reference whose endpoint is not a known node.

    - DROP: omit the edge and record it as dangling
    - MATERIALIZE: add the missing endpoint as an implicit node
    """

    DROP = "drop"
    MATERIALIZE = "materialize"


@dataclass
class GraphConfig:
    """
    Graph construction settings.

    Attributes:
        dangling_references: Policy for unresolved references (default: DROP)
    """

    dangling_references: DanglingPolicy = DanglingPolicy.DROP

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GraphConfig:
        """
        Create GraphConfig from the [graph] config section.

        Raises:
            ConfigError: If the policy name is unknown
        """
        raw = data.get("dangling_references", DanglingPolicy.DROP.value)
        try:
            policy = DanglingPolicy(str(raw).lower())
        except ValueError:
            allowed = ", ".join(p.value for p in DanglingPolicy)
            raise ConfigError(
                f"graph.dangling_references must be one of: {allowed} (got {raw!r})"
            ) from None
        return cls(dangling_references=policy)


@dataclass
class _PendingEdge:
    source: str
    target: str
    kind: str


@dataclass
class GraphBuilder:
    """Builder for dependency graphs.

    Usage:
        builder = GraphBuilder()
        builder.add_plans(plans)
        graph = builder.build()
    """

    config: GraphConfig = field(default_factory=GraphConfig)

    _nodes: dict[str, None] = field(default_factory=dict, init=False, repr=False)
    _pending: list[_PendingEdge] = field(default_factory=list, init=False, repr=False)

    def add_node(self, node_id: str) -> bool:
        """Register a node. Returns False (and logs) on a duplicate ID."""
        if node_id in self._nodes:
            logger.warning("Duplicate entity ID %s ignored", node_id)
            return False
        self._nodes[node_id] = None
        return True

    def add_dependency(self, depended_on: str, dependent: str, kind: str = "depends_on") -> None:
        """Queue an edge ``depended_on -> dependent``."""
        self._pending.append(_PendingEdge(depended_on, dependent, kind))

    def add_entity(self, entity_id: str, depends_on: Iterable[str]) -> None:
        """Add one node plus an edge for each of its dependencies."""
        if not self.add_node(entity_id):
            return
        for dep_id in depends_on:
            self.add_dependency(dep_id, entity_id)

    def add_plans(self, plans: Iterable[Plan]) -> None:
        for plan in plans:
            self.add_entity(plan.id, plan.depends_on)

    def add_components(self, components: Iterable[Component]) -> None:
        for component in components:
            self.add_entity(component.id, component.depends_on)

    def add_test_case_links(self, plans: Iterable[Plan]) -> None:
        """Add ``component -> plan`` edges for every test-case component reference.

        Only the first plan with a given ID is linked, matching add_plans().
        """
        linked: set[str] = set()
        for plan in plans:
            if plan.id in linked:
                continue
            linked.add(plan.id)
            for component_id in plan.component_references():
                self.add_dependency(component_id, plan.id, kind="test_case")

    def build(self) -> Graph:
        """Validate queued edges and return the Graph.

        Returns:
            A Graph whose edges only reference nodes in its node list.
        """
        nodes = dict(self._nodes)
        edges: list[Edge] = []
        dangling: list[DanglingReference] = []
        materialize = self.config.dangling_references is DanglingPolicy.MATERIALIZE

        for pending in self._pending:
            missing = [
                endpoint
                for endpoint in dict.fromkeys((pending.source, pending.target))
                if endpoint not in self._nodes
            ]
            for missing_id in missing:
                dangling.append(
                    DanglingReference(pending.source, pending.target, missing_id, pending.kind)
                )
                if materialize:
                    nodes.setdefault(missing_id, None)
                    logger.warning(
                        "Unknown reference %s (%s -> %s): added as implicit node",
                        missing_id,
                        pending.source,
                        pending.target,
                    )
                else:
                    logger.warning(
                        "Unknown reference %s (%s -> %s): edge dropped",
                        missing_id,
                        pending.source,
                        pending.target,
                    )
            if missing and not materialize:
                continue
            edges.append(Edge(pending.source, pending.target))

        graph = Graph(nodes=list(nodes), edges=edges, dangling=dangling)
        logger.debug(
            "Built graph: %d nodes, %d edges, %d dangling",
            graph.node_count,
            graph.edge_count,
            len(dangling),
        )
        return graph


# =============================================================================
# Convenience constructors
# =============================================================================


def build_plan_graph(plans: Iterable[Plan], config: GraphConfig | None = None) -> Graph:
    """Graph of plans linked by their depends_on references."""
    builder = GraphBuilder(config or GraphConfig())
    builder.add_plans(plans)
    return builder.build()


def build_component_graph(
    components: Iterable[Component], config: GraphConfig | None = None
) -> Graph:
    """Graph of components linked by their depends_on references."""
    builder = GraphBuilder(config or GraphConfig())
    builder.add_components(components)
    return builder.build()


def build_combined_graph(
    plans: list[Plan],
    components: list[Component],
    config: GraphConfig | None = None,
) -> Graph:
    """Plans and components in one graph, with test-case links.

    Edge order: plan dependencies, component dependencies, then
    ``component -> plan`` test-case links.
    """
    builder = GraphBuilder(config or GraphConfig())
    builder.add_plans(plans)
    builder.add_components(components)
    builder.add_test_case_links(plans)
    return builder.build()


__all__ = [
    "DanglingPolicy",
    "GraphBuilder",
    "GraphConfig",
    "build_combined_graph",
    "build_component_graph",
    "build_plan_graph",
]
