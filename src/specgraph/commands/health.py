"""
specgraph.commands.health - Dependency health score.

Scores the combined dependency graph from 0 to 100 and lists the issues
that cost points. Exits non-zero when the score is below
``[health] fail_under`` so the command can gate CI.
"""

from __future__ import annotations

import argparse

from specgraph.commands.context import (
    context_from_args,
    print_json,
    report_error,
    report_failure,
)
from specgraph.errors import SpecGraphError
from specgraph.graph import WELL_STRUCTURED, HealthScore


def run(args: argparse.Namespace) -> int:
    """Run the health command."""
    try:
        ctx = context_from_args(args)
        result = ctx.dependency_analyzer().analyze()
    except SpecGraphError as e:
        return report_error(e, args)
    if not result.success or result.data is None:
        return report_failure(result.errors, args)

    health = result.data.health
    fail_under = ctx.fail_under
    healthy = health.score >= fail_under

    if args.json:
        data = health.to_dict()
        data["fail_under"] = fail_under
        data["healthy"] = healthy
        print_json(data)
    else:
        _print_text_report(health, fail_under, healthy)

    return 0 if healthy else 1


def _print_text_report(health: HealthScore, fail_under: int, healthy: bool) -> None:
    print(f"Dependency health: {health.score}/100")
    print("-" * 40)
    for issue in health.issues:
        icon = "✓" if issue == WELL_STRUCTURED else "✗"
        print(f"  {icon} {issue}")

    if health.recommendations:
        print("\nRecommendations:")
        for recommendation in health.recommendations:
            print(f"  - {recommendation}")

    print()
    print("=" * 40)
    if healthy:
        print(f"✓ HEALTHY: score {health.score} (minimum {fail_under})")
    else:
        print(f"✗ UNHEALTHY: score {health.score} is below {fail_under}")
    print("=" * 40)
