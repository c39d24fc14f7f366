"""
specgraph.cli - Command-line interface.

Main entry point for the specgraph CLI tool.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from specgraph import __version__
from specgraph.analysis import EXECUTION_KINDS
from specgraph.commands import analyze, graph_cmd, health
from specgraph.commands.context import configure_logging


def _add_json_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="specgraph",
        description="Dependency graph analysis for requirements, plans and components",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  specgraph graph plans          # Plan dependency graph
  specgraph order plans          # Execution order for all plans
  specgraph batches              # Plans grouped into parallel batches
  specgraph cycles               # Circular dependencies (exit 1 if any)
  specgraph health               # 0-100 dependency health score
  specgraph resolve pln-003-api  # Everything pln-003-api depends on

Configuration:
  .specgraph.toml is searched upward from the current directory.
  Any key can be overridden with SPECGRAPH_<SECTION>_<KEY>, e.g.
  SPECGRAPH_GRAPH_DANGLING_REFERENCES=materialize

For detailed command help: specgraph <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"specgraph {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "--spec-dir",
        type=Path,
        help="Override spec directory",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output (debug logging)",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress warnings",
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # graph command
    graph_parser = subparsers.add_parser(
        "graph",
        help="Show a dependency graph",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Scopes:
  plans        Plans and their depends_on edges
  components   Components and their depends_on edges
  all          Both, plus component -> plan edges from plan test cases
""",
    )
    graph_parser.add_argument(
        "scope",
        nargs="?",
        choices=["plans", "components", "all"],
        default="all",
        help="Which graph to build (default: all)",
    )
    _add_json_flag(graph_parser)

    # order command
    order_parser = subparsers.add_parser(
        "order",
        help="Execution order (fails on cycles)",
    )
    order_parser.add_argument(
        "kind",
        choices=list(EXECUTION_KINDS),
        help="Order plans or components",
    )
    _add_json_flag(order_parser)

    # batches command
    batches_parser = subparsers.add_parser(
        "batches",
        help="Plan execution batches (fails on cycles)",
    )
    _add_json_flag(batches_parser)

    # cycles command
    cycles_parser = subparsers.add_parser(
        "cycles",
        help="Detect circular dependencies (exit 1 if any)",
    )
    _add_json_flag(cycles_parser)

    # depth command
    depth_parser = subparsers.add_parser(
        "depth",
        help="Dependency depth and critical path",
    )
    _add_json_flag(depth_parser)

    # health command
    health_parser = subparsers.add_parser(
        "health",
        help="Dependency health score",
        epilog="Exits 1 when the score is below [health] fail_under.",
    )
    _add_json_flag(health_parser)

    # resolve command
    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Transitive dependencies of a plan or component",
    )
    resolve_parser.add_argument(
        "entity_id",
        help="Plan or component ID (e.g. pln-001-auth-flow, svc-002-billing)",
        metavar="ID",
    )
    _add_json_flag(resolve_parser)

    # orphans command
    orphans_parser = subparsers.add_parser(
        "orphans",
        help="Specifications nothing references",
    )
    _add_json_flag(orphans_parser)

    # coverage command
    coverage_parser = subparsers.add_parser(
        "coverage",
        help="Coverage report with recommendations",
    )
    _add_json_flag(coverage_parser)

    # mcp command
    mcp_parser = subparsers.add_parser(
        "mcp",
        help="MCP server commands (requires specgraph[mcp])",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Client configuration:

    {
      "mcpServers": {
        "specgraph": {
          "command": "specgraph",
          "args": ["mcp", "serve"],
          "cwd": "/path/to/your/project"
        }
      }
    }

Tools:
  generate_plan_dependency_graph       generate_component_dependency_graph
  get_optimal_execution_order          get_plan_execution_batches
  analyze_dependency_health            detect_cycles
  analyze_depth                        resolve_dependencies
  detect_orphans                       get_coverage_report
""",
    )
    mcp_subparsers = mcp_parser.add_subparsers(dest="mcp_action")

    # mcp serve
    mcp_serve = mcp_subparsers.add_parser(
        "serve",
        help="Start MCP server",
    )
    mcp_serve.add_argument(
        "--transport",
        choices=["stdio", "sse", "streamable-http"],
        default="stdio",
        help="Transport type (default: stdio)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    # Install with: pip install specgraph[completion]
    # Then activate: eval "$(register-python-argcomplete specgraph)"
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)
    configure_logging(args)

    # Handle no command
    if not args.command:
        parser.print_help()
        return 0

    try:
        # Dispatch to command handlers
        if args.command == "graph":
            return graph_cmd.run_graph(args)
        elif args.command == "order":
            return graph_cmd.run_order(args)
        elif args.command == "batches":
            return graph_cmd.run_batches(args)
        elif args.command == "resolve":
            return graph_cmd.run_resolve(args)
        elif args.command == "cycles":
            return analyze.run_cycles(args)
        elif args.command == "depth":
            return analyze.run_depth(args)
        elif args.command == "orphans":
            return analyze.run_orphans(args)
        elif args.command == "coverage":
            return analyze.run_coverage(args)
        elif args.command == "health":
            return health.run(args)
        elif args.command == "mcp":
            return mcp_command(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except Exception as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


def mcp_command(args: argparse.Namespace) -> int:
    """Handle MCP server commands."""
    from specgraph.mcp import MCP_AVAILABLE, run_server

    if not MCP_AVAILABLE:
        print("Error: MCP dependencies not installed.", file=sys.stderr)
        print("Install with: pip install specgraph[mcp]", file=sys.stderr)
        return 1

    if args.mcp_action == "serve":
        working_dir = Path.cwd()

        # stdout carries the protocol on stdio transport
        print("Starting specgraph MCP server...", file=sys.stderr)
        print(f"Working directory: {working_dir}", file=sys.stderr)
        print(f"Transport: {args.transport}", file=sys.stderr)

        try:
            run_server(
                working_dir=working_dir,
                transport=args.transport,
                config_path=args.config,
                spec_dir=args.spec_dir,
            )
        except KeyboardInterrupt:
            print("\nServer stopped.", file=sys.stderr)
        return 0
    else:
        print("Usage: specgraph mcp serve", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
