"""Dependency analysis over the combined plan/component graph.

The combined graph holds every plan and component, their depends_on
edges, and a ``component -> plan`` edge for each component a plan's test
cases exercise. The graph is built once per request and passed by value
to the cycle, depth and health stages.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from specgraph.analysis.base import AnalysisResult, BaseAnalyzer
from specgraph.graph.builder import GraphConfig
from specgraph.graph.cycles import CycleAnalysis, find_cycle_in_path
from specgraph.graph.depth import DepthAnalysis, analyze_depth
from specgraph.graph.health import HealthScore, HealthThresholds, score_health
from specgraph.graph.model import Graph
from specgraph.repository import SpecRepository


@dataclass
class DependencyReport:
    """Everything DependencyAnalyzer.analyze() computes."""

    graph: Graph
    cycles: CycleAnalysis
    depth: DepthAnalysis
    health: HealthScore

    def to_dict(self) -> dict[str, Any]:
        return {
            "graph": self.graph.to_dict(),
            "cycles": self.cycles.to_dict(),
            "depth": self.depth.to_dict(),
            "health": self.health.to_dict(),
        }


class DependencyAnalyzer(BaseAnalyzer[DependencyReport]):
    """Graph, cycles, depth and health of the combined dependency graph."""

    name = "DependencyAnalyzer"
    version = "2.0.0"

    def __init__(
        self,
        repository: SpecRepository,
        config: GraphConfig | None = None,
        thresholds: HealthThresholds | None = None,
    ) -> None:
        super().__init__(repository, config)
        self.thresholds = thresholds or HealthThresholds()

    def analyze(self) -> AnalysisResult[DependencyReport]:
        def run() -> DependencyReport:
            graph = self.combined_graph()
            cycles = CycleAnalysis(cycles=graph.cycles)
            depth = analyze_depth(graph)
            health = score_health(graph, cycles.cycles, depth, self.thresholds)
            return DependencyReport(graph=graph, cycles=cycles, depth=depth, health=health)

        return self.safe_analyze(run)

    def generate_graph(self) -> AnalysisResult[Graph]:
        return self.safe_analyze(self.combined_graph)

    def detect_cycles(self) -> AnalysisResult[CycleAnalysis]:
        return self.safe_analyze(lambda: CycleAnalysis(cycles=self.combined_graph().cycles))

    def analyze_depth(self) -> AnalysisResult[DepthAnalysis]:
        return self.safe_analyze(lambda: analyze_depth(self.combined_graph()))

    def analyze_dependency_health(self) -> HealthScore:
        """Health score of the combined graph.

        When the analysis itself fails the score is 0 and the failure
        messages are reported as issues.
        """
        result = self.analyze()
        if not result.success or result.data is None:
            return HealthScore(
                score=0,
                issues=result.errors or ["Analysis failed"],
                recommendations=["Fix analysis errors before assessing dependency health"],
            )
        return result.data.health


class CycleAnalyzer(BaseAnalyzer[CycleAnalysis]):
    """Cycle detection across plans and components."""

    name = "CycleAnalyzer"
    version = "2.0.0"

    def analyze(self) -> AnalysisResult[CycleAnalysis]:
        return self.detect_all_cycles()

    def detect_all_cycles(self) -> AnalysisResult[CycleAnalysis]:
        return self.safe_analyze(lambda: CycleAnalysis(cycles=self.combined_graph().cycles))

    @staticmethod
    def find_cycle_in_path(path: list[str]) -> bool:
        """True if the walk revisits a node."""
        return find_cycle_in_path(path)


__all__ = ["CycleAnalyzer", "DependencyAnalyzer", "DependencyReport"]
