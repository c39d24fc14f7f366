"""
specgraph.commands.analyze - Structural analysis commands.

Handles ``cycles``, ``depth``, ``orphans`` and ``coverage``. With
``--json`` the full analyzer result envelope is printed (success, data,
metadata, warnings, errors).
"""

from __future__ import annotations

import argparse

from specgraph.analysis import AnalysisResult
from specgraph.commands.context import (
    context_from_args,
    print_json,
    report_error,
    report_failure,
)
from specgraph.errors import SpecGraphError, format_cycle


def run_cycles(args: argparse.Namespace) -> int:
    """Detect cycles in the combined graph. Exit 1 when any exist."""
    try:
        result = context_from_args(args).cycle_analyzer().detect_all_cycles()
    except SpecGraphError as e:
        return report_error(e, args)
    if not result.success or result.data is None:
        return report_failure(result.errors, args)

    analysis = result.data
    if args.json:
        print_json(result.to_dict())
    elif analysis.has_cycles:
        print(f"✗ {analysis.total_cycles} circular dependencies detected")
        for cycle in analysis.cycles:
            print(f"    {format_cycle(cycle)}")
        print(f"  Longest cycle: {analysis.max_cycle_length} nodes")
        print(f"  Affected nodes: {len(analysis.affected_nodes)}")
    else:
        print("✓ No circular dependencies")
    _print_warnings(result, args)
    return 1 if analysis.has_cycles else 0


def run_depth(args: argparse.Namespace) -> int:
    """Depth analysis of the combined graph."""
    try:
        result = context_from_args(args).dependency_analyzer().analyze_depth()
    except SpecGraphError as e:
        return report_error(e, args)
    if not result.success or result.data is None:
        return report_failure(result.errors, args)

    depth = result.data
    if args.json:
        print_json(result.to_dict())
        return 0

    print(f"Maximum depth: {depth.max_depth}")
    print(f"Average depth: {depth.average_depth:.2f}")
    if depth.critical_path:
        print(f"Critical path ({len(depth.critical_path)} nodes at depth {depth.max_depth}):")
        for node in depth.critical_path:
            print(f"  {node}")
    if getattr(args, "verbose", False):
        print("\nDepth by node:")
        for node, value in depth.depths.items():
            print(f"  {value:>3}  {node}")
    _print_warnings(result, args)
    return 0


def run_orphans(args: argparse.Namespace) -> int:
    """List plans, components and requirements nothing references."""
    try:
        result = context_from_args(args).orphan_detector().detect_orphans()
    except SpecGraphError as e:
        return report_error(e, args)
    if not result.success or result.data is None:
        return report_failure(result.errors, args)

    analysis = result.data
    if args.json:
        print_json(result.to_dict())
        return 0

    if not analysis.orphans:
        print("✓ No orphaned specifications")
        return 0
    counts = ", ".join(f"{n} {kind}" for kind, n in analysis.by_type.items() if n)
    print(f"⚠ {analysis.total_orphans} orphaned specifications ({counts})")
    for entity_id in analysis.orphans:
        print(f"  {entity_id}")
    return 0


def run_coverage(args: argparse.Namespace) -> int:
    """Coverage report with recommendations."""
    try:
        result = context_from_args(args).coverage_analyzer().analyze()
    except SpecGraphError as e:
        return report_error(e, args)
    if not result.success or result.data is None:
        return report_failure(result.errors, args)

    if args.json:
        print_json(result.to_dict())
        return 0

    report = result.data.report
    print(
        f"Coverage: {report.coverage_percentage}% "
        f"({report.covered_specs}/{report.total_specs} specifications)"
    )
    print("-" * 40)
    for label, category in (
        ("Requirements", report.requirements),
        ("Plans", report.plans),
        ("Components", report.components),
    ):
        print(f"  {label:<13} {category.covered:>3}/{category.total:<3} {category.percentage:>3}%")

    if report.uncovered:
        print("\nUncovered:")
        for entity_id in report.uncovered:
            print(f"  {entity_id}")
    if report.orphaned:
        print("\nOrphaned:")
        for entity_id in report.orphaned:
            print(f"  {entity_id}")

    print("\nRecommendations:")
    for recommendation in result.data.recommendations:
        print(f"  - {recommendation}")
    return 0


def _print_warnings(result: AnalysisResult, args: argparse.Namespace) -> None:
    if args.json or getattr(args, "quiet", False):
        return
    for warning in result.warnings:
        print(f"⚠ {warning}")
