"""
specgraph.workspace - Resolve a project into ready-to-use analyzers.

A Workspace bundles the effective configuration, the spec directory and
the typed config views. The CLI builds one per invocation; the MCP
server builds one per tool call so edits on disk are always picked up.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from specgraph.analysis import (
    CoverageAnalyzer,
    CycleAnalyzer,
    DependencyAnalyzer,
    DependencyResolver,
    OrphanDetector,
)
from specgraph.config import coerce_int, find_project_root, get_config, get_spec_directory
from specgraph.graph import GraphConfig, HealthThresholds
from specgraph.repository import DirectoryRepository, SpecRepository


@dataclass
class Workspace:
    """Everything needed to run an analysis against one spec directory."""

    config: dict[str, Any]
    spec_dir: Path
    repository: SpecRepository
    graph_config: GraphConfig
    thresholds: HealthThresholds
    fail_under: int = 0

    @property
    def log_level(self) -> str:
        return str(self.config.get("logging", {}).get("level", "warning"))

    def resolver(self) -> DependencyResolver:
        return DependencyResolver(self.repository, self.graph_config)

    def dependency_analyzer(self) -> DependencyAnalyzer:
        return DependencyAnalyzer(self.repository, self.graph_config, self.thresholds)

    def cycle_analyzer(self) -> CycleAnalyzer:
        return CycleAnalyzer(self.repository, self.graph_config)

    def orphan_detector(self) -> OrphanDetector:
        return OrphanDetector(self.repository, self.graph_config)

    def coverage_analyzer(self) -> CoverageAnalyzer:
        return CoverageAnalyzer(self.repository, self.graph_config)


def load_workspace(
    config_path: Path | None = None,
    spec_dir: Path | None = None,
    start_path: Path | None = None,
) -> Workspace:
    """Resolve config and spec directory into a Workspace.

    Args:
        config_path: Explicit config file (skips the upward search)
        spec_dir: Spec directory override (``--spec-dir``)
        start_path: Where the config search starts (default: cwd)

    Raises:
        ConfigError: If the config file or one of its values is invalid
    """
    config = get_config(config_path, start_path=start_path)
    root = find_project_root(config_path, start_path)
    directory = get_spec_directory(config, root, spec_dir)
    health = config.get("health", {})
    return Workspace(
        config=config,
        spec_dir=directory,
        repository=DirectoryRepository.from_config(directory, config.get("specs", {})),
        graph_config=GraphConfig.from_dict(config.get("graph", {})),
        thresholds=HealthThresholds.from_dict(health),
        fail_under=coerce_int("health", "fail_under", health.get("fail_under", 0)),
    )


__all__ = ["Workspace", "load_workspace"]
