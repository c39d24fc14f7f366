"""Dependency health scoring.

Combines cycle, depth and size signals into one 0-100 score. Each
penalty reports its own issue and recommendation so callers can show
exactly why a graph lost points.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any

from specgraph.config.loader import coerce_int
from specgraph.graph.depth import DepthAnalysis
from specgraph.graph.model import Graph

WELL_STRUCTURED = "Well-structured dependency graph"


@dataclass
class HealthThresholds:
    """
    Scoring knobs for score_health().

    Attributes:
        cycle_penalty: Points lost per cycle (default: 5)
        max_cycle_penalty: Cap on the cycle penalty (default: 30)
        depth_threshold: Max depth before penalties start (default: 10)
        depth_penalty: Points lost per level above the threshold (default: 2)
        max_depth_penalty: Cap on the depth penalty (default: 20)
        size_threshold: Node count before penalties start (default: 100)
        size_step: Extra nodes per point lost (default: 20)
        max_size_penalty: Cap on the size penalty (default: 15)
        well_structured_depth: Max depth for the positive note (default: 5)
    """

    cycle_penalty: int = 5
    max_cycle_penalty: int = 30
    depth_threshold: int = 10
    depth_penalty: int = 2
    max_depth_penalty: int = 20
    size_threshold: int = 100
    size_step: int = 20
    max_size_penalty: int = 15
    well_structured_depth: int = 5

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HealthThresholds:
        """
        Create HealthThresholds from the [health] config section.

        Unknown keys (such as fail_under) are ignored; values are coerced
        to int so environment overrides given as strings work.

        Raises:
            ConfigError: If a threshold is not an integer
        """
        defaults = cls()
        values = {
            f.name: coerce_int("health", f.name, data.get(f.name, getattr(defaults, f.name)))
            for f in fields(cls)
        }
        return cls(**values)


@dataclass
class HealthScore:
    """Composite health of a dependency graph."""

    score: int = 100
    issues: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "issues": list(self.issues),
            "recommendations": list(self.recommendations),
        }


def score_health(
    graph: Graph,
    cycles: list[list[str]],
    depth: DepthAnalysis,
    thresholds: HealthThresholds | None = None,
) -> HealthScore:
    """Score a graph from its cycles and depth analysis.

    Never raises; a cyclic graph simply scores lower.
    """
    t = thresholds or HealthThresholds()
    issues: list[str] = []
    recommendations: list[str] = []
    score = 100

    if cycles:
        score -= min(t.max_cycle_penalty, len(cycles) * t.cycle_penalty)
        issues.append(f"{len(cycles)} circular dependencies detected")
        recommendations.append("Resolve circular dependencies to improve maintainability")

    if depth.max_depth > t.depth_threshold:
        score -= min(t.max_depth_penalty, (depth.max_depth - t.depth_threshold) * t.depth_penalty)
        issues.append(
            f"Maximum dependency depth is {depth.max_depth} (recommended: ≤{t.depth_threshold})"
        )
        recommendations.append("Consider flattening deep dependency chains")

    node_count = graph.node_count
    if node_count > t.size_threshold:
        step = max(t.size_step, 1)
        score -= min(t.max_size_penalty, (node_count - t.size_threshold) // step)
        issues.append(f"High complexity: {node_count} nodes in dependency graph")
        recommendations.append("Consider breaking down large specifications")

    if not cycles and depth.max_depth <= t.well_structured_depth:
        issues.append(WELL_STRUCTURED)

    return HealthScore(
        score=max(0, min(100, score)),
        issues=issues,
        recommendations=recommendations,
    )


__all__ = ["HealthScore", "HealthThresholds", "WELL_STRUCTURED", "score_health"]
