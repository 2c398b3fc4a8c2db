"""
Graph module.

Provides the mutable undirected graph that searches run on:
- GraphStore: Node/edge ownership with symmetric adjacency
- GraphChange: Notification emitted after each mutation
- default_graph: The six-node demo graph
"""

from src.graph.changes import ChangeKind, GraphChange
from src.graph.store import GraphStore, default_graph

__all__ = [
    "ChangeKind",
    "GraphChange",
    "GraphStore",
    "default_graph",
]
