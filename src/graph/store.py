"""
In-memory undirected graph keyed by node label.

GraphStore is the single owner of node and edge state. Presentation layers
keep their own per-node data (positions, colors) keyed by the same labels
and stay in sync through subscribe().

Usage:
    from src.graph import GraphStore

    graph = GraphStore()
    graph.add_node("A")
    graph.add_node("B", connect_to="A")
    graph.neighbors("A")  # ["B"]
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager

from src.config import DEFAULT_EDGES, DEFAULT_NODE_LABELS
from src.errors import (
    DuplicateNodeError,
    GraphBusyError,
    InvalidEdgeError,
    InvalidLabelError,
    UnknownNodeError,
)
from src.graph.changes import ChangeKind, GraphChange

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[GraphChange], None]


def _edge_key(a: str, b: str) -> frozenset[str]:
    return frozenset((a, b))


class GraphStore:
    """
    Mutable undirected graph with symmetric adjacency.

    Neighbor sets are kept as insertion-ordered dicts, so neighbors() always
    returns the order in which edges were added at that node. Searches rely
    on that order for reproducible traversals.

    While a search holds searching(), every mutation raises GraphBusyError.
    Queries are always allowed.
    """

    def __init__(self) -> None:
        self._adjacency: dict[str, dict[str, None]] = {}
        # Each undirected edge once, in first-insertion order
        self._edges: dict[frozenset[str], tuple[str, str]] = {}
        self._subscribers: list[ChangeCallback] = []
        self._lock = threading.RLock()
        self._active_searches = 0

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[tuple[str, str]],
        nodes: Iterable[str] = (),
    ) -> GraphStore:
        """
        Build a graph from an edge list.

        Args:
            edges: (a, b) pairs; endpoints not yet present are created
            nodes: Labels to create first, in order (isolated nodes allowed)
        """
        graph = cls()
        for label in nodes:
            graph.add_node(label)
        for a, b in edges:
            for label in (a, b):
                if not graph.has_node(label):
                    graph.add_node(label)
            graph.add_edge(a, b)
        return graph

    # =========================================================================
    # Mutations
    # =========================================================================

    def add_node(self, label: str, connect_to: str | None = None) -> None:
        """
        Create a node with no neighbors.

        Args:
            label: Unique node label
            connect_to: Existing node to connect the new node to

        Raises:
            DuplicateNodeError: If label is already present
            UnknownNodeError: If connect_to is given but absent
            InvalidLabelError: If label is not a non-empty string
        """
        _validate_label(label)
        changes = []
        with self._lock:
            self._check_mutable()
            if label in self._adjacency:
                raise DuplicateNodeError(label)
            if connect_to is not None:
                self._require(connect_to)

            self._adjacency[label] = {}
            changes.append(GraphChange(ChangeKind.NODE_ADDED, label))
            if connect_to is not None:
                self._link(label, connect_to)
                changes.append(GraphChange(ChangeKind.EDGE_ADDED, label, connect_to))

        logger.info(f"Node {label} added")
        if connect_to is not None:
            logger.info(f"Connected {label} to {connect_to}")
        self._notify(changes)

    def remove_node(self, label: str) -> None:
        """
        Delete a node and every edge touching it.

        Raises:
            UnknownNodeError: If label is absent (including a second removal)
        """
        changes = []
        with self._lock:
            self._check_mutable()
            self._require(label)

            for neighbor in list(self._adjacency[label]):
                self._unlink(label, neighbor)
                changes.append(GraphChange(ChangeKind.EDGE_REMOVED, label, neighbor))
            del self._adjacency[label]
            changes.append(GraphChange(ChangeKind.NODE_REMOVED, label))

        logger.info(f"Node {label} removed")
        self._notify(changes)

    def add_edge(self, a: str, b: str) -> bool:
        """
        Connect two nodes.

        Returns:
            True if the edge was created, False if it already existed

        Raises:
            UnknownNodeError: If either endpoint is absent
            InvalidEdgeError: If a == b
        """
        with self._lock:
            self._check_mutable()
            self._require(a)
            self._require(b)
            if a == b:
                raise InvalidEdgeError(f"Cannot connect node '{a}' to itself")
            if b in self._adjacency[a]:
                return False
            self._link(a, b)

        logger.info(f"Edge {a}-{b} added")
        self._notify([GraphChange(ChangeKind.EDGE_ADDED, a, b)])
        return True

    def remove_edge(self, a: str, b: str) -> bool:
        """
        Disconnect two nodes.

        Returns:
            True if the edge was removed, False if there was no such edge

        Raises:
            UnknownNodeError: If either endpoint is absent
        """
        with self._lock:
            self._check_mutable()
            self._require(a)
            self._require(b)
            if b not in self._adjacency[a]:
                return False
            self._unlink(a, b)

        logger.info(f"Edge {a}-{b} removed")
        self._notify([GraphChange(ChangeKind.EDGE_REMOVED, a, b)])
        return True

    def _link(self, a: str, b: str) -> None:
        self._adjacency[a][b] = None
        self._adjacency[b][a] = None
        self._edges[_edge_key(a, b)] = (a, b)

    def _unlink(self, a: str, b: str) -> None:
        self._adjacency[a].pop(b, None)
        self._adjacency[b].pop(a, None)
        self._edges.pop(_edge_key(a, b), None)

    # =========================================================================
    # Queries
    # =========================================================================

    def neighbors(self, label: str) -> list[str]:
        """Neighbor labels in edge insertion order."""
        with self._lock:
            self._require(label)
            return list(self._adjacency[label])

    def has_node(self, label: str) -> bool:
        # Non-string input (e.g. decoded JSON lists) is never a node
        return isinstance(label, str) and label in self._adjacency

    def has_edge(self, a: str, b: str) -> bool:
        with self._lock:
            return self.has_node(a) and self.has_node(b) and b in self._adjacency[a]

    def node_count(self) -> int:
        return len(self._adjacency)

    def edge_count(self) -> int:
        return len(self._edges)

    def degree(self, label: str) -> int:
        with self._lock:
            self._require(label)
            return len(self._adjacency[label])

    def nodes(self) -> list[str]:
        """All node labels in creation order."""
        with self._lock:
            return list(self._adjacency)

    def edges(self) -> list[tuple[str, str]]:
        """Each undirected edge once, oriented as it was first added."""
        with self._lock:
            return list(self._edges.values())

    def adjacency(self) -> dict[str, list[str]]:
        """Copy of the full adjacency mapping."""
        with self._lock:
            return {label: list(nbrs) for label, nbrs in self._adjacency.items()}

    def __contains__(self, label: object) -> bool:
        return self.has_node(label)

    def __len__(self) -> int:
        return len(self._adjacency)

    def __iter__(self) -> Iterator[str]:
        return iter(self.nodes())

    def __repr__(self) -> str:
        return f"GraphStore(nodes={self.node_count()}, edges={self.edge_count()})"

    def _require(self, label: str) -> None:
        if not self.has_node(label):
            raise UnknownNodeError(label)

    # =========================================================================
    # Search Guard
    # =========================================================================

    @property
    def is_searching(self) -> bool:
        """Whether any search currently holds the graph."""
        return self._active_searches > 0

    @contextmanager
    def searching(self) -> Iterator[GraphStore]:
        """
        Hold the graph read-only for the duration of a search.

        Several searches may hold the graph at once; mutations are rejected
        until the last one exits.
        """
        with self._lock:
            self._active_searches += 1
        try:
            yield self
        finally:
            with self._lock:
                self._active_searches -= 1

    def _check_mutable(self) -> None:
        if self._active_searches:
            raise GraphBusyError("Graph cannot be modified while a search is running")

    # =========================================================================
    # Subscriptions
    # =========================================================================

    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]:
        """
        Register a callback for every effective mutation.

        No-op mutations (re-adding an existing edge, removing a missing one)
        are not reported. Removing a node reports one EDGE_REMOVED per
        severed edge, then NODE_REMOVED.

        Returns:
            A function that removes the subscription
        """
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, changes: list[GraphChange]) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for change in changes:
            for callback in subscribers:
                callback(change)


def _validate_label(label: str) -> None:
    if not isinstance(label, str) or not label.strip():
        raise InvalidLabelError(f"Node label must be a non-empty string, got {label!r}")


def default_graph() -> GraphStore:
    """The six-node demo graph: A-B, A-C, B-D, C-E, D-F."""
    return GraphStore.from_edges(DEFAULT_EDGES, nodes=DEFAULT_NODE_LABELS)
