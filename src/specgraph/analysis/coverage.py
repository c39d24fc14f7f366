"""Coverage analysis - how much of the spec set is linked up.

Coverage rules per category:

- requirement: at least one of its criteria is targeted by a plan
  (otherwise it is *uncovered*);
- plan: targets a known criterion, or another plan depends on it
  (otherwise it is *orphaned*);
- component: exercised by a plan test case or depended on by another
  component (otherwise it is *orphaned*).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from specgraph.analysis.base import AnalysisResult, BaseAnalyzer, EntitySnapshot

LOW_OVERALL = 70
LOW_REQUIREMENTS = 80
LOW_COMPONENTS = 90


def _percentage(covered: int, total: int) -> int:
    """Integer percentage, rounding halves up."""
    return (covered * 200 + total) // (2 * total) if total else 0


@dataclass
class CategoryCoverage:
    total: int = 0
    covered: int = 0

    @property
    def percentage(self) -> int:
        return _percentage(self.covered, self.total)

    def to_dict(self) -> dict[str, Any]:
        return {"total": self.total, "covered": self.covered, "percentage": self.percentage}


@dataclass
class CoverageReport:
    """
    Coverage of a spec set.

    Attributes:
        requirements: Requirement totals
        plans: Plan totals
        components: Component totals
        uncovered: Requirement IDs without a targeting plan
        orphaned: Plan and component IDs nothing references
    """

    requirements: CategoryCoverage = field(default_factory=CategoryCoverage)
    plans: CategoryCoverage = field(default_factory=CategoryCoverage)
    components: CategoryCoverage = field(default_factory=CategoryCoverage)
    uncovered: list[str] = field(default_factory=list)
    orphaned: list[str] = field(default_factory=list)

    @property
    def total_specs(self) -> int:
        return self.requirements.total + self.plans.total + self.components.total

    @property
    def covered_specs(self) -> int:
        return self.requirements.covered + self.plans.covered + self.components.covered

    @property
    def coverage_percentage(self) -> int:
        return _percentage(self.covered_specs, self.total_specs)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_specs": self.total_specs,
            "covered_specs": self.covered_specs,
            "coverage_percentage": self.coverage_percentage,
            "uncovered_specs": list(self.uncovered),
            "orphaned_specs": list(self.orphaned),
            "by_category": {
                "requirements": self.requirements.to_dict(),
                "plans": self.plans.to_dict(),
                "components": self.components.to_dict(),
            },
        }


@dataclass
class CoverageAnalysis:
    """A coverage report plus what to do about it."""

    report: CoverageReport
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "report": self.report.to_dict(),
            "recommendations": list(self.recommendations),
        }


def build_coverage_report(snapshot: EntitySnapshot) -> CoverageReport:
    report = CoverageReport()
    plans = snapshot.plans

    targeted = {plan.criteria_id for plan in plans if plan.criteria_id}
    report.requirements.total = len(snapshot.requirements)
    for requirement in snapshot.requirements:
        if any(c.id in targeted for c in requirement.criteria):
            report.requirements.covered += 1
        else:
            report.uncovered.append(requirement.id)

    criteria_ids = {c.id for r in snapshot.requirements for c in r.criteria}
    depended_on = {dep for plan in plans for dep in plan.depends_on}
    report.plans.total = len(plans)
    for plan in plans:
        if (plan.criteria_id and plan.criteria_id in criteria_ids) or plan.id in depended_on:
            report.plans.covered += 1
        else:
            report.orphaned.append(plan.id)

    referenced = {cid for plan in plans for cid in plan.component_references()}
    referenced.update(dep for c in snapshot.components for dep in c.depends_on)
    report.components.total = len(snapshot.components)
    for component in snapshot.components:
        if component.id in referenced:
            report.components.covered += 1
        else:
            report.orphaned.append(component.id)

    return report


def recommend(report: CoverageReport) -> list[str]:
    """Recommendations for a coverage report."""
    recommendations: list[str] = []

    if report.coverage_percentage < LOW_OVERALL:
        recommendations.append(
            f"Coverage is below {LOW_OVERALL}%. Consider adding more comprehensive test coverage."
        )
    if report.orphaned:
        recommendations.append(f"{len(report.orphaned)} orphaned specifications need attention.")
    if report.uncovered:
        recommendations.append(f"{len(report.uncovered)} specifications lack proper coverage.")
    if report.requirements.percentage < LOW_REQUIREMENTS:
        recommendations.append(
            "Requirements coverage is low. Ensure all requirements have associated plans."
        )
    if report.components.percentage < LOW_COMPONENTS:
        recommendations.append(
            "Component coverage could be improved. Verify all components are properly tested."
        )

    if not recommendations:
        recommendations.append(
            "Coverage looks good! Consider maintaining or improving current levels."
        )
    return recommendations


class CoverageAnalyzer(BaseAnalyzer[CoverageAnalysis]):
    """Report how well requirements, plans and components are linked."""

    name = "CoverageAnalyzer"
    version = "2.0.0"

    def analyze(self) -> AnalysisResult[CoverageAnalysis]:
        def run() -> CoverageAnalysis:
            report = build_coverage_report(self.get_entities())
            return CoverageAnalysis(report=report, recommendations=recommend(report))

        return self.safe_analyze(run)

    def generate_report(self) -> AnalysisResult[CoverageReport]:
        return self.safe_analyze(lambda: build_coverage_report(self.get_entities()))

    def find_uncovered(self) -> AnalysisResult[list[str]]:
        return self.safe_analyze(lambda: build_coverage_report(self.get_entities()).uncovered)

    def find_orphans(self) -> AnalysisResult[list[str]]:
        return self.safe_analyze(lambda: build_coverage_report(self.get_entities()).orphaned)


__all__ = [
    "CategoryCoverage",
    "CoverageAnalysis",
    "CoverageAnalyzer",
    "CoverageReport",
    "build_coverage_report",
    "recommend",
]
