"""Graph module - Dependency graph engine.

Exports:
- Graph, Edge, DanglingReference: Graph data structures
- GraphBuilder, GraphConfig, DanglingPolicy: Graph construction
- detect_cycles, analyze_cycles, CycleAnalysis: Cycle detection
- topological_sort, execution_batches: Execution ordering
- analyze_depth, DepthAnalysis: Depth and critical path
- score_health, HealthScore, HealthThresholds: Composite health score
"""

from specgraph.graph.builder import (
    DanglingPolicy,
    GraphBuilder,
    GraphConfig,
    build_combined_graph,
    build_component_graph,
    build_plan_graph,
)
from specgraph.graph.cycles import CycleAnalysis, analyze_cycles, detect_cycles, find_cycle_in_path
from specgraph.graph.depth import DepthAnalysis, analyze_depth, compute_depths
from specgraph.graph.health import WELL_STRUCTURED, HealthScore, HealthThresholds, score_health
from specgraph.graph.model import DanglingReference, Edge, Graph
from specgraph.graph.ordering import execution_batches, topological_sort

__all__ = [
    "WELL_STRUCTURED",
    "CycleAnalysis",
    "DanglingPolicy",
    "DanglingReference",
    "DepthAnalysis",
    "Edge",
    "Graph",
    "GraphBuilder",
    "GraphConfig",
    "HealthScore",
    "HealthThresholds",
    "analyze_cycles",
    "analyze_depth",
    "build_combined_graph",
    "build_component_graph",
    "build_plan_graph",
    "compute_depths",
    "detect_cycles",
    "execution_batches",
    "find_cycle_in_path",
    "score_health",
    "topological_sort",
]
