"""
specgraph.commands.context - Shared setup and output for CLI commands.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from specgraph.errors import SpecGraphError
from specgraph.workspace import Workspace, load_workspace

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(args: argparse.Namespace, level_name: str = "warning") -> None:
    """Set the specgraph log level from -v/-q, falling back to [logging] level.

    A stderr handler is installed on the root logger only if none exists.
    """
    if getattr(args, "verbose", False):
        level = logging.DEBUG
    elif getattr(args, "quiet", False):
        level = logging.ERROR
    else:
        level = logging.getLevelName(level_name.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger("specgraph").setLevel(level)


def context_from_args(args: argparse.Namespace) -> Workspace:
    """Load the workspace named by the global CLI options and set up logging."""
    workspace = load_workspace(
        config_path=getattr(args, "config", None),
        spec_dir=getattr(args, "spec_dir", None),
    )
    configure_logging(args, workspace.log_level)
    return workspace


def print_json(data: Any) -> None:
    print(json.dumps(data, indent=2))


def report_error(error: SpecGraphError, args: argparse.Namespace) -> int:
    """Print an error (JSON on stdout with --json, text on stderr) and return 1."""
    if getattr(args, "json", False):
        payload = {"success": False, "error": str(error)}
        payload.update({k: v for k, v in error.to_dict().items() if k != "message"})
        print_json(payload)
    else:
        print(f"Error: {error}", file=sys.stderr)
    return 1


def report_failure(errors: list[str], args: argparse.Namespace) -> int:
    """Print the errors of a failed AnalysisResult and return 1."""
    if getattr(args, "json", False):
        print_json({"success": False, "errors": errors})
    else:
        for error in errors:
            print(f"Error: {error}", file=sys.stderr)
    return 1


__all__ = [
    "configure_logging",
    "context_from_args",
    "print_json",
    "report_error",
    "report_failure",
]
