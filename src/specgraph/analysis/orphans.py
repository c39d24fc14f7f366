"""Orphan detection - entities nothing else points at.

A plan is orphaned when no plan depends on it and it does not target a
requirement criterion. A component is orphaned when no plan test case
exercises it and no component depends on it. A requirement is orphaned
when none of its criteria are targeted by a plan.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from specgraph.analysis.base import AnalysisResult, BaseAnalyzer, EntitySnapshot


@dataclass
class OrphanAnalysis:
    """Orphaned entity IDs, plans first, then components, then requirements."""

    orphans: list[str] = field(default_factory=list)
    by_type: dict[str, int] = field(
        default_factory=lambda: {"requirements": 0, "plans": 0, "components": 0}
    )

    @property
    def total_orphans(self) -> int:
        return len(self.orphans)

    def to_dict(self) -> dict[str, Any]:
        return {
            "orphans": list(self.orphans),
            "summary": {
                "total_orphans": self.total_orphans,
                "by_type": dict(self.by_type),
            },
        }


def find_orphans(snapshot: EntitySnapshot) -> OrphanAnalysis:
    """Classify every entity in snapshot as referenced or orphaned."""
    result = OrphanAnalysis()

    referenced_plans = {plan.id for plan in snapshot.plans if plan.criteria_id}
    for plan in snapshot.plans:
        referenced_plans.update(plan.depends_on)
    for plan in snapshot.plans:
        if plan.id not in referenced_plans:
            result.orphans.append(plan.id)
            result.by_type["plans"] += 1

    referenced_components = {
        cid for plan in snapshot.plans for cid in plan.component_references()
    }
    for component in snapshot.components:
        referenced_components.update(component.depends_on)
    for component in snapshot.components:
        if component.id not in referenced_components:
            result.orphans.append(component.id)
            result.by_type["components"] += 1

    targeted = {plan.criteria_id for plan in snapshot.plans if plan.criteria_id}
    for requirement in snapshot.requirements:
        if not any(c.id in targeted for c in requirement.criteria):
            result.orphans.append(requirement.id)
            result.by_type["requirements"] += 1

    return result


class OrphanDetector(BaseAnalyzer[OrphanAnalysis]):
    """Find plans, components and requirements that nothing references."""

    name = "OrphanDetector"
    version = "2.0.0"

    def analyze(self) -> AnalysisResult[OrphanAnalysis]:
        return self.detect_orphans()

    def detect_orphans(self) -> AnalysisResult[OrphanAnalysis]:
        return self.safe_analyze(lambda: find_orphans(self.get_entities()))

    def find_unreferenced_entities(self) -> AnalysisResult[list[str]]:
        """Just the orphaned IDs."""
        return self.safe_analyze(lambda: find_orphans(self.get_entities()).orphans)


__all__ = ["OrphanAnalysis", "OrphanDetector", "find_orphans"]
