"""
Benchmark module.

Provides independent hop-distance metrics for checking searches:
- bfs_layers / distance_matrix: Shortest hop distances
- verify_path: Check a SearchResult is a true shortest path
- summarize: Graph shape statistics
"""

from src.benchmark.metrics import (
    UNREACHABLE,
    GraphSummary,
    bfs_layers,
    distance_matrix,
    is_valid_walk,
    summarize,
    verify_path,
)

__all__ = [
    "UNREACHABLE",
    "GraphSummary",
    "bfs_layers",
    "distance_matrix",
    "is_valid_walk",
    "summarize",
    "verify_path",
]
