"""
specgraph.commands - CLI command implementations
"""

__all__ = [
    "analyze",
    "context",
    "graph_cmd",
    "health",
]
