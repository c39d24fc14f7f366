"""specgraph.mcp - MCP server exposing the resolver and analyzers as tools.

Importing this package never requires the mcp extra; check MCP_AVAILABLE
before calling create_server() or run_server().
"""

try:
    from mcp.server.fastmcp import FastMCP

    MCP_AVAILABLE = True
except ImportError:
    MCP_AVAILABLE = False
    FastMCP = None


def create_server(*args, **kwargs):
    """Create the MCP server.

    Raises:
        ImportError: If MCP dependencies are not installed.
    """
    if not MCP_AVAILABLE:
        raise ImportError(
            "MCP dependencies not installed. Install with: pip install specgraph[mcp]"
        )
    from specgraph.mcp.server import create_server as _create

    return _create(*args, **kwargs)


def run_server(*args, **kwargs):
    """Run the MCP server.

    Raises:
        ImportError: If MCP dependencies are not installed.
    """
    if not MCP_AVAILABLE:
        raise ImportError(
            "MCP dependencies not installed. Install with: pip install specgraph[mcp]"
        )
    from specgraph.mcp.server import run_server as _run

    return _run(*args, **kwargs)


__all__ = [
    "MCP_AVAILABLE",
    "create_server",
    "run_server",
]
