"""
Exception types raised by the graph store and the search engine.

Every graph validation failure derives from GraphError, so adapters can
translate the whole family with a single except clause.
"""

from __future__ import annotations


class GraphError(Exception):
    """Base class for graph validation errors."""


class DuplicateNodeError(GraphError, ValueError):
    """Raised when adding a node whose label already exists."""

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"Node '{label}' already exists")


class UnknownNodeError(GraphError, LookupError):
    """Raised when an operation names a node that is not in the graph."""

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"Node '{label}' does not exist")

    def __str__(self) -> str:
        # LookupError would otherwise repr() the message like KeyError does
        return self.args[0]


class InvalidLabelError(GraphError, ValueError):
    """Raised for empty or non-string node labels."""


class InvalidEdgeError(GraphError, ValueError):
    """Raised when an edge would connect a node to itself."""


class GraphBusyError(GraphError):
    """Raised when the graph is mutated while a search is reading it."""


class SearchCancelled(Exception):
    """Raised when a running search is abandoned through its cancel event."""

    def __init__(self, start: str, end: str) -> None:
        self.start = start
        self.end = end
        super().__init__(f"Search from '{start}' to '{end}' was cancelled")
