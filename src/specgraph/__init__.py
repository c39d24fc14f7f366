"""
specgraph - Dependency graph analysis for specification documents

specgraph reads requirements, plans and components, links them through
their dependency references, and answers the questions a planner asks:
what order to build things in, what can run in parallel, where the
cycles are, and how healthy the dependency structure is overall.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("specgraph")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__author__ = "Anspar"
__license__ = "MIT"

from specgraph.analysis import DependencyAnalyzer, DependencyResolver
from specgraph.errors import CycleDetectedError, SpecGraphError
from specgraph.graph import Edge, Graph, GraphBuilder, GraphConfig

__all__ = [
    "__version__",
    "CycleDetectedError",
    "DependencyAnalyzer",
    "DependencyResolver",
    "Edge",
    "Graph",
    "GraphBuilder",
    "GraphConfig",
    "SpecGraphError",
]
