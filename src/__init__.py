"""
BFS Routing Core.

An incrementally mutable undirected graph with breadth-first
shortest-path search and step-by-step traversal reporting.
"""

__version__ = "0.1.0"
