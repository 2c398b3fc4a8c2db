"""
Hop-distance metrics for checking search results.

Distances here come from plain BFS layering, independent of the traversal
engine, so they can be used to verify that the engine's paths are
shortest.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass

import numpy as np

from src.errors import UnknownNodeError
from src.graph.store import GraphStore
from src.search.result import SearchResult

logger = logging.getLogger(__name__)

# Marker for "no path" in distance matrices
UNREACHABLE = -1


def bfs_layers(graph: GraphStore, source: str) -> dict[str, int]:
    """
    Hop distance from source to every node it can reach.

    Raises:
        UnknownNodeError: If source is not in the graph
    """
    if not graph.has_node(source):
        raise UnknownNodeError(source)

    adjacency = graph.adjacency()
    layers = {source: 0}
    frontier = deque([source])
    while frontier:
        node = frontier.popleft()
        for neighbor in adjacency[node]:
            if neighbor not in layers:
                layers[neighbor] = layers[node] + 1
                frontier.append(neighbor)
    return layers


def distance_matrix(graph: GraphStore) -> tuple[list[str], np.ndarray]:
    """
    All-pairs hop distances.

    Returns:
        (labels, matrix) where matrix[i, j] is the distance from labels[i]
        to labels[j], or UNREACHABLE
    """
    labels = graph.nodes()
    index = {label: i for i, label in enumerate(labels)}
    matrix = np.full((len(labels), len(labels)), UNREACHABLE, dtype=np.int64)

    for label in labels:
        row = index[label]
        for other, hops in bfs_layers(graph, label).items():
            matrix[row, index[other]] = hops

    return labels, matrix


def is_valid_walk(graph: GraphStore, path: tuple[str, ...] | list[str]) -> bool:
    """Whether every consecutive pair on path is an edge of graph."""
    if not path or not all(graph.has_node(label) for label in path):
        return False
    return all(graph.has_edge(a, b) for a, b in zip(path, path[1:]))


def verify_path(graph: GraphStore, result: SearchResult) -> bool:
    """
    Check a search result against independent BFS layering.

    A found path must start and end at the requested nodes, follow existing
    edges, and be exactly as long as the shortest distance. An unreachable
    result must agree that no path exists.
    """
    layers = bfs_layers(graph, result.start)

    if not result.found:
        return result.end not in layers

    path = result.path
    if path[0] != result.start or path[-1] != result.end:
        return False
    if not is_valid_walk(graph, path):
        return False
    return layers.get(result.end) == result.hops


@dataclass
class GraphSummary:
    """
    Shape statistics for a graph.

    Attributes:
        node_count: Number of nodes
        edge_count: Number of undirected edges
        component_count: Number of connected components
        diameter: Longest shortest path within any component (0 if empty)
        mean_distance: Mean hop distance over reachable ordered pairs of
            distinct nodes, None if there are no such pairs
        reachable_fraction: Share of ordered distinct pairs that are
            connected (0.0 for graphs with fewer than two nodes)
    """

    node_count: int
    edge_count: int
    component_count: int
    diameter: int
    mean_distance: float | None
    reachable_fraction: float

    def to_dict(self) -> dict:
        return {
            "node_count": self.node_count,
            "edge_count": self.edge_count,
            "component_count": self.component_count,
            "diameter": self.diameter,
            "mean_distance": self.mean_distance,
            "reachable_fraction": self.reachable_fraction,
        }


def summarize(graph: GraphStore) -> GraphSummary:
    """Compute shape statistics from the all-pairs distance matrix."""
    labels, matrix = distance_matrix(graph)
    n = len(labels)

    off_diagonal = ~np.eye(n, dtype=bool)
    reachable = (matrix != UNREACHABLE) & off_diagonal
    pair_count = n * (n - 1)

    distances = matrix[reachable]
    mean_distance = float(distances.mean()) if distances.size else None
    diameter = int(distances.max()) if distances.size else 0
    reachable_fraction = float(reachable.sum() / pair_count) if pair_count else 0.0

    summary = GraphSummary(
        node_count=n,
        edge_count=graph.edge_count(),
        component_count=_count_components(matrix),
        diameter=diameter,
        mean_distance=mean_distance,
        reachable_fraction=reachable_fraction,
    )
    logger.debug(f"Graph summary: {summary}")
    return summary


def _count_components(matrix: np.ndarray) -> int:
    """Distinct reachability rows; each component shares one row pattern."""
    if matrix.size == 0:
        return 0
    rows = matrix != UNREACHABLE
    return len(np.unique(rows, axis=0))
