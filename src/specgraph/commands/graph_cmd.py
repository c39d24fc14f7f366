"""
specgraph.commands.graph_cmd - Graph, ordering and resolution commands.

Handles ``graph``, ``order``, ``batches`` and ``resolve``. The ordering
commands fail with exit code 1 when the graph has cycles, naming each
cycle in the error.
"""

from __future__ import annotations

import argparse

from specgraph.commands.context import (
    context_from_args,
    print_json,
    report_error,
    report_failure,
)
from specgraph.errors import SpecGraphError, format_cycle
from specgraph.graph import Graph


def run_graph(args: argparse.Namespace) -> int:
    """Show nodes, edges, cycles and dangling references."""
    try:
        ctx = context_from_args(args)
        scope = getattr(args, "scope", "all") or "all"
        if scope == "plans":
            graph = ctx.resolver().generate_plan_dependency_graph()
        elif scope == "components":
            graph = ctx.resolver().generate_component_dependency_graph()
        else:
            result = ctx.dependency_analyzer().generate_graph()
            if not result.success or result.data is None:
                return report_failure(result.errors, args)
            graph = result.data
    except SpecGraphError as e:
        return report_error(e, args)

    if args.json:
        print_json(graph.to_dict())
    else:
        _print_graph(graph, scope)
    return 0


def _print_graph(graph: Graph, scope: str) -> None:
    print(f"Dependency graph ({scope}): {graph.node_count} nodes, {graph.edge_count} edges")
    print("-" * 40)
    successors = graph.successors()
    for node in graph.nodes:
        dependents = successors.get(node, [])
        if dependents:
            print(f"  {node} -> {', '.join(dependents)}")
        else:
            print(f"  {node}")

    if graph.cycles:
        print(f"\n✗ {len(graph.cycles)} cycle(s):")
        for cycle in graph.cycles:
            print(f"    {format_cycle(cycle)}")
    if graph.dangling:
        print(f"\n⚠ {len(graph.dangling)} dangling reference(s):")
        for ref in graph.dangling:
            print(f"    {ref}")


def run_order(args: argparse.Namespace) -> int:
    """Print a topological execution order."""
    try:
        ctx = context_from_args(args)
        order = ctx.resolver().get_optimal_execution_order(args.kind)
    except SpecGraphError as e:
        return report_error(e, args)

    if args.json:
        print_json({"success": True, "kind": args.kind, "order": order})
    else:
        print(f"Execution order ({args.kind}):")
        for i, node in enumerate(order, 1):
            print(f"  {i:>3}. {node}")
    return 0


def run_batches(args: argparse.Namespace) -> int:
    """Print plan batches that can each be worked on in parallel."""
    try:
        ctx = context_from_args(args)
        batches = ctx.resolver().get_plan_execution_batches()
    except SpecGraphError as e:
        return report_error(e, args)

    if args.json:
        print_json({"success": True, "batches": batches})
    else:
        print(f"Plan execution batches: {len(batches)}")
        for i, batch in enumerate(batches, 1):
            print(f"  Batch {i}: {', '.join(batch)}")
    return 0


def run_resolve(args: argparse.Namespace) -> int:
    """Print the transitive dependencies of one plan or component."""
    try:
        ctx = context_from_args(args)
        resolved = ctx.resolver().resolve_dependencies(args.entity_id)
    except SpecGraphError as e:
        return report_error(e, args)

    if args.json:
        print_json({"success": True, "entity_id": args.entity_id, "dependencies": resolved})
    else:
        print(f"Dependencies of {args.entity_id} (resolve first to last):")
        for node in resolved:
            print(f"  {node}")
    return 0

