"""Entry point for running the specgraph MCP server directly.

Usage:
    python -m specgraph.mcp
"""

from specgraph.mcp.server import run_server

if __name__ == "__main__":
    run_server()
