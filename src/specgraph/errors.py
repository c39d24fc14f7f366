"""
specgraph.errors - Exception hierarchy.

All errors raised by specgraph derive from SpecGraphError so callers
(the CLI, the MCP layer) can catch one type and render it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


def format_cycle(cycle: list[str]) -> str:
    """Render a cycle as ``a -> b -> a``.

    Cycles are stored without repeating the first node; the closing
    node is added here for display.
    """
    if not cycle:
        return ""
    return " -> ".join([*cycle, cycle[0]])


class SpecGraphError(Exception):
    """Base class for all specgraph errors."""

    code = "SPECGRAPH_ERROR"

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": str(self)}


class CycleDetectedError(SpecGraphError):
    """The graph is not a DAG, so no ordering can be prescribed.

    Attributes:
        cycles: The offending cycles, each a list of node IDs.
    """

    code = "CYCLE_DETECTED"

    def __init__(self, cycles: list[list[str]], action: str = "resolve dependencies") -> None:
        self.cycles = [list(c) for c in cycles]
        self.action = action
        if self.cycles:
            rendered = ", ".join(format_cycle(c) for c in self.cycles)
            message = f"Cannot {action} due to circular dependencies: {rendered}"
        else:
            message = f"Cannot {action} - circular dependency detected"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["cycles"] = self.cycles
        return data


class AnalysisFailure(SpecGraphError):
    """Unexpected fault during graph construction or traversal.

    Attributes:
        source: Name of the stage that failed (e.g. "DependencyAnalyzer").
        message: Description of the fault.
    """

    code = "ANALYSIS_FAILURE"

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        self.message = message
        super().__init__(f"[{source}] {message}")

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["source"] = self.source
        return data


class EntityNotFoundError(SpecGraphError):
    """A plan or component ID does not exist."""

    code = "NOT_FOUND"

    def __init__(self, entity_id: str, kind: str = "entity") -> None:
        self.entity_id = entity_id
        self.kind = kind
        super().__init__(f"{kind.capitalize()} with ID '{entity_id}' not found")


class ConfigError(SpecGraphError):
    """Configuration file or value is invalid."""

    code = "CONFIG_ERROR"


class SpecLoadError(SpecGraphError):
    """A spec file could not be read or parsed."""

    code = "SPEC_LOAD_ERROR"

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}")

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["path"] = str(self.path)
        return data


__all__ = [
    "AnalysisFailure",
    "ConfigError",
    "CycleDetectedError",
    "EntityNotFoundError",
    "SpecGraphError",
    "SpecLoadError",
    "format_cycle",
]
