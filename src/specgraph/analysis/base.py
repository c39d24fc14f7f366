"""Analyzer base class and the shared result envelope.

Every analyzer returns an AnalysisResult instead of raising: unexpected
faults are caught by safe_analyze() and reported as an AnalysisFailure
message tagged with the analyzer's name.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, TypeVar

from specgraph.entities import Component, Plan, Requirement
from specgraph.errors import AnalysisFailure
from specgraph.graph.builder import GraphConfig, build_combined_graph
from specgraph.graph.cycles import detect_cycles
from specgraph.graph.model import Graph
from specgraph.repository import SpecRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


def to_jsonable(value: Any) -> Any:
    """Convert analysis data (dataclasses with to_dict, containers) to JSON types."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


@dataclass
class AnalysisMetadata:
    """Where and how long an analysis ran."""

    source: str
    version: str
    execution_time_ms: float = 0.0


@dataclass
class AnalysisResult(Generic[T]):
    """Outcome of one analyzer call.

    Attributes:
        success: False when the analysis raised.
        data: The analysis payload (None on failure).
        metadata: Analyzer name, version and timing.
        warnings: Non-fatal findings (e.g. dangling references).
        errors: Failure messages.
    """

    success: bool
    data: T | None
    metadata: AnalysisMetadata
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "data": to_jsonable(self.data),
            "metadata": {
                "source": self.metadata.source,
                "version": self.metadata.version,
                "execution_time_ms": round(self.metadata.execution_time_ms, 3),
            },
            "warnings": list(self.warnings),
            "errors": list(self.errors),
        }


@dataclass
class EntitySnapshot:
    """All entities loaded for one analysis request."""

    plans: list[Plan]
    components: list[Component]
    requirements: list[Requirement]


class BaseAnalyzer(ABC, Generic[T]):
    """Common plumbing for analyzers.

    Subclasses set ``name`` and ``version`` and implement analyze().
    Public methods wrap their work in safe_analyze(); private helpers
    raise normally so they can be composed.
    """

    name = "BaseAnalyzer"
    version = "1.0.0"

    def __init__(self, repository: SpecRepository, config: GraphConfig | None = None) -> None:
        self.repository = repository
        self.config = config or GraphConfig()
        self._warnings: list[str] = []

    @abstractmethod
    def analyze(self) -> AnalysisResult[T]:
        """Run the analyzer's main analysis."""

    def warn(self, message: str) -> None:
        """Record a warning for the result currently being produced."""
        self._warnings.append(message)

    def safe_analyze(self, operation: Callable[[], Any]) -> AnalysisResult[Any]:
        """Run operation, timing it and converting faults into a failed result."""
        self._warnings = []
        start = time.perf_counter()
        try:
            data = operation()
        except Exception as e:
            elapsed = (time.perf_counter() - start) * 1000
            failure = e if isinstance(e, AnalysisFailure) else AnalysisFailure(self.name, str(e))
            logger.warning(
                "%s failed: %s", self.name, failure, exc_info=logger.isEnabledFor(logging.DEBUG)
            )
            return AnalysisResult(
                success=False,
                data=None,
                metadata=AnalysisMetadata(self.name, self.version, elapsed),
                errors=[str(failure)],
            )
        elapsed = (time.perf_counter() - start) * 1000
        return AnalysisResult(
            success=True,
            data=data,
            metadata=AnalysisMetadata(self.name, self.version, elapsed),
            warnings=list(self._warnings),
        )

    def get_entities(self) -> EntitySnapshot:
        """Load a fresh snapshot of all entities.

        Raises:
            AnalysisFailure: If the repository cannot be read
        """
        try:
            return EntitySnapshot(
                plans=self.repository.list_plans(),
                components=self.repository.list_components(),
                requirements=self.repository.list_requirements(),
            )
        except Exception as e:
            raise AnalysisFailure(self.name, f"Failed to retrieve entities: {e}") from e

    def combined_graph(self) -> Graph:
        """Build the combined plan/component graph with cycles attached.

        Dangling references are recorded as warnings on the current result.
        """
        snapshot = self.get_entities()
        graph = build_combined_graph(snapshot.plans, snapshot.components, self.config)
        graph.cycles = detect_cycles(graph)
        for ref in graph.dangling:
            self.warn(f"Dangling reference: {ref}")
        return graph


__all__ = [
    "AnalysisMetadata",
    "AnalysisResult",
    "BaseAnalyzer",
    "EntitySnapshot",
    "to_jsonable",
]
