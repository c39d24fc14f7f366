"""Analysis module - Service layer over the graph engine.

Exports:
- DependencyResolver: Graphs, execution order, batches, single-entity closure
- BaseAnalyzer, AnalysisResult: Analyzer plumbing and result envelope
- DependencyAnalyzer, CycleAnalyzer: Combined-graph analysis and health
- OrphanDetector: Entities nothing references
- CoverageAnalyzer: Coverage report and recommendations
"""

from specgraph.analysis.base import (
    AnalysisMetadata,
    AnalysisResult,
    BaseAnalyzer,
    EntitySnapshot,
    to_jsonable,
)
from specgraph.analysis.coverage import (
    CoverageAnalysis,
    CoverageAnalyzer,
    CoverageReport,
    build_coverage_report,
)
from specgraph.analysis.dependency import CycleAnalyzer, DependencyAnalyzer, DependencyReport
from specgraph.analysis.orphans import OrphanAnalysis, OrphanDetector, find_orphans
from specgraph.analysis.resolver import EXECUTION_KINDS, DependencyResolver

__all__ = [
    "EXECUTION_KINDS",
    "AnalysisMetadata",
    "AnalysisResult",
    "BaseAnalyzer",
    "CoverageAnalysis",
    "CoverageAnalyzer",
    "CoverageReport",
    "CycleAnalyzer",
    "DependencyAnalyzer",
    "DependencyReport",
    "DependencyResolver",
    "EntitySnapshot",
    "OrphanAnalysis",
    "OrphanDetector",
    "build_coverage_report",
    "find_orphans",
    "to_jsonable",
]
