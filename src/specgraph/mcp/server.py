"""specgraph.mcp.server - MCP server implementation.

Creates and runs the MCP server exposing the dependency resolver and
analyzers as tools. Every tool call reloads the workspace, so the spec
files on disk are the single source of truth.

Tools never raise: domain errors become ``{"success": False, ...}``
payloads, with the offending cycles attached for CycleDetectedError.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

try:
    from mcp.server.fastmcp import FastMCP

    MCP_AVAILABLE = True
except ImportError:
    MCP_AVAILABLE = False
    FastMCP = None

from specgraph.analysis import (
    EXECUTION_KINDS,
    AnalysisResult,
    CoverageAnalyzer,
    CycleAnalyzer,
    DependencyAnalyzer,
    DependencyResolver,
    OrphanDetector,
)
from specgraph.errors import CycleDetectedError, SpecGraphError
from specgraph.workspace import Workspace, load_workspace

logger = logging.getLogger(__name__)

MCP_SERVER_INSTRUCTIONS = """\
specgraph analyzes the dependency graph between implementation plans
and components described in a spec directory.

Typical workflow:
1. analyze_dependency_health - overall score and the issues behind it
2. detect_cycles - list circular dependencies to break
3. get_plan_execution_batches - plans that can be worked on in parallel
4. resolve_dependencies - what must be done before a given plan or component

Ordering tools fail with the offending cycles when the graph is not a DAG.
"""


# ─────────────────────────────────────────────────────────────────────────────
# Payload helpers
# ─────────────────────────────────────────────────────────────────────────────


def _error_payload(error: SpecGraphError) -> dict[str, Any]:
    """Convert a domain error into a tool response."""
    payload: dict[str, Any] = {"success": False, "error": str(error), "code": error.code}
    if isinstance(error, CycleDetectedError):
        payload["cycles"] = error.cycles
    return payload


def _result_payload(result: AnalysisResult) -> dict[str, Any]:
    return result.to_dict()


# ─────────────────────────────────────────────────────────────────────────────
# Resolver tools
# ─────────────────────────────────────────────────────────────────────────────


def _generate_plan_dependency_graph(resolver: DependencyResolver) -> dict[str, Any]:
    """Plan graph with cycles attached."""
    try:
        graph = resolver.generate_plan_dependency_graph()
    except SpecGraphError as e:
        return _error_payload(e)
    return {"success": True, "graph": graph.to_dict()}


def _generate_component_dependency_graph(resolver: DependencyResolver) -> dict[str, Any]:
    """Component graph with cycles attached."""
    try:
        graph = resolver.generate_component_dependency_graph()
    except SpecGraphError as e:
        return _error_payload(e)
    return {"success": True, "graph": graph.to_dict()}


def _get_optimal_execution_order(resolver: DependencyResolver, kind: str) -> dict[str, Any]:
    """Topological order of plans or components."""
    if kind not in EXECUTION_KINDS:
        return {
            "success": False,
            "error": f"kind must be one of {', '.join(EXECUTION_KINDS)}",
        }
    try:
        order = resolver.get_optimal_execution_order(kind)
    except SpecGraphError as e:
        return _error_payload(e)
    return {"success": True, "kind": kind, "order": order}


def _get_plan_execution_batches(resolver: DependencyResolver) -> dict[str, Any]:
    """Plan batches, each safe to work on in parallel."""
    try:
        batches = resolver.get_plan_execution_batches()
    except SpecGraphError as e:
        return _error_payload(e)
    return {
        "success": True,
        "batches": batches,
        "batch_count": len(batches),
    }


def _resolve_dependencies(resolver: DependencyResolver, entity_id: str) -> dict[str, Any]:
    """Transitive dependencies of one plan or component."""
    try:
        resolved = resolver.resolve_dependencies(entity_id)
    except SpecGraphError as e:
        return _error_payload(e)
    return {"success": True, "entity_id": entity_id, "dependencies": resolved}


# ─────────────────────────────────────────────────────────────────────────────
# Analyzer tools
# ─────────────────────────────────────────────────────────────────────────────


def _analyze_dependency_health(analyzer: DependencyAnalyzer) -> dict[str, Any]:
    health = analyzer.analyze_dependency_health()
    return {"success": True, **health.to_dict()}


def _detect_cycles(analyzer: CycleAnalyzer) -> dict[str, Any]:
    return _result_payload(analyzer.detect_all_cycles())


def _analyze_depth(analyzer: DependencyAnalyzer) -> dict[str, Any]:
    return _result_payload(analyzer.analyze_depth())


def _detect_orphans(detector: OrphanDetector) -> dict[str, Any]:
    return _result_payload(detector.detect_orphans())


def _get_coverage_report(analyzer: CoverageAnalyzer) -> dict[str, Any]:
    return _result_payload(analyzer.analyze())


# ─────────────────────────────────────────────────────────────────────────────
# Server
# ─────────────────────────────────────────────────────────────────────────────


def create_server(
    working_dir: Path | None = None,
    config_path: Path | None = None,
    spec_dir: Path | None = None,
) -> FastMCP:
    """Create the MCP server with all tools registered.

    Args:
        working_dir: Directory the config search starts from.
        config_path: Explicit config file.
        spec_dir: Spec directory override.

    Returns:
        FastMCP server instance.
    """
    if not MCP_AVAILABLE:
        raise ImportError("MCP dependencies not installed. Install with: pip install specgraph[mcp]")

    if working_dir is None:
        working_dir = Path.cwd()

    mcp = FastMCP("specgraph", instructions=MCP_SERVER_INSTRUCTIONS)

    _state: dict[str, Any] = {
        "working_dir": working_dir,
        "config_path": config_path,
        "spec_dir": spec_dir,
    }

    def _workspace() -> Workspace:
        return load_workspace(
            config_path=_state["config_path"],
            spec_dir=_state["spec_dir"],
            start_path=_state["working_dir"],
        )

    def _call(handler: Callable[[Workspace], dict[str, Any]]) -> dict[str, Any]:
        try:
            return handler(_workspace())
        except SpecGraphError as e:
            logger.warning("Tool call failed: %s", e)
            return _error_payload(e)

    # ─────────────────────────────────────────────────────────────────────
    # Register Tools
    # ─────────────────────────────────────────────────────────────────────

    @mcp.tool()
    def generate_plan_dependency_graph() -> dict[str, Any]:
        """Build the plan dependency graph.

        Returns nodes, edges (from = depended-upon, to = dependent),
        cycles and dangling references.
        """
        return _call(lambda ws: _generate_plan_dependency_graph(ws.resolver()))

    @mcp.tool()
    def generate_component_dependency_graph() -> dict[str, Any]:
        """Build the component dependency graph.

        Returns nodes, edges, cycles and dangling references.
        """
        return _call(lambda ws: _generate_component_dependency_graph(ws.resolver()))

    @mcp.tool()
    def get_optimal_execution_order(kind: str = "plans") -> dict[str, Any]:
        """Order plans or components so every dependency comes first.

        Args:
            kind: "plans" or "components".

        Returns:
            The order, or the cycles that make ordering impossible.
        """
        return _call(lambda ws: _get_optimal_execution_order(ws.resolver(), kind))

    @mcp.tool()
    def get_plan_execution_batches() -> dict[str, Any]:
        """Group plans into batches; plans within a batch can run in parallel."""
        return _call(lambda ws: _get_plan_execution_batches(ws.resolver()))

    @mcp.tool()
    def analyze_dependency_health() -> dict[str, Any]:
        """Score the combined dependency graph from 0 to 100.

        Returns the score, the issues that cost points, and recommendations.
        """
        return _call(lambda ws: _analyze_dependency_health(ws.dependency_analyzer()))

    @mcp.tool()
    def detect_cycles() -> dict[str, Any]:
        """Find every circular dependency across plans and components."""
        return _call(lambda ws: _detect_cycles(ws.cycle_analyzer()))

    @mcp.tool()
    def analyze_depth() -> dict[str, Any]:
        """Dependency depth per node, maximum and average depth, critical path."""
        return _call(lambda ws: _analyze_depth(ws.dependency_analyzer()))

    @mcp.tool()
    def resolve_dependencies(entity_id: str) -> dict[str, Any]:
        """Everything a plan or component depends on, transitively.

        Args:
            entity_id: Plan or component ID (e.g. "pln-001-auth-flow").

        Returns:
            Dependencies in resolution order, ending with the entity itself.
        """
        return _call(lambda ws: _resolve_dependencies(ws.resolver(), entity_id))

    @mcp.tool()
    def detect_orphans() -> dict[str, Any]:
        """Find plans, components and requirements that nothing references."""
        return _call(lambda ws: _detect_orphans(ws.orphan_detector()))

    @mcp.tool()
    def get_coverage_report() -> dict[str, Any]:
        """Coverage of requirements, plans and components, with recommendations."""
        return _call(lambda ws: _get_coverage_report(ws.coverage_analyzer()))

    return mcp


def run_server(
    working_dir: Path | None = None,
    transport: str = "stdio",
    config_path: Path | None = None,
    spec_dir: Path | None = None,
) -> None:
    """Run the MCP server.

    Args:
        working_dir: Directory the config search starts from.
        transport: Transport type ('stdio', 'sse' or 'streamable-http').
        config_path: Explicit config file.
        spec_dir: Spec directory override.
    """
    mcp = create_server(working_dir=working_dir, config_path=config_path, spec_dir=spec_dir)
    mcp.run(transport=transport)
