"""
Change notifications emitted by GraphStore after each effective mutation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ChangeKind(str, Enum):
    """What a graph mutation did."""

    NODE_ADDED = "node_added"
    NODE_REMOVED = "node_removed"
    EDGE_ADDED = "edge_added"
    EDGE_REMOVED = "edge_removed"


@dataclass(frozen=True)
class GraphChange:
    """
    A single effective mutation of the graph.

    Attributes:
        kind: What happened
        node: The node added/removed, or the first endpoint of an edge
        other: The second endpoint for edge changes, None for node changes
    """

    kind: ChangeKind
    node: str
    other: str | None = None

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "node": self.node, "other": self.other}
