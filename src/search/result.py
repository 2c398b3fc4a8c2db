"""
Outcomes of a breadth-first search.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SearchResult:
    """Base class for search outcomes."""

    start: str
    end: str

    @property
    def found(self) -> bool:
        return False

    @property
    def path(self) -> tuple[str, ...]:
        return ()

    @property
    def hops(self) -> int | None:
        """Number of edges on the path, None when no path exists."""
        return None

    def path_edges(self) -> list[tuple[str, str]]:
        """Consecutive (from, to) pairs along the path."""
        return list(zip(self.path, self.path[1:]))


@dataclass(frozen=True)
class PathFound(SearchResult):
    """
    A shortest path from start to end.

    Attributes:
        nodes: Labels from start to end inclusive
    """

    nodes: tuple[str, ...] = ()

    @property
    def found(self) -> bool:
        return True

    @property
    def path(self) -> tuple[str, ...]:
        return self.nodes

    @property
    def hops(self) -> int:
        return len(self.nodes) - 1

    def to_dict(self) -> dict:
        return {"result": "found", "start": self.start, "end": self.end, "path": list(self.nodes)}


@dataclass(frozen=True)
class Unreachable(SearchResult):
    """The frontier emptied without reaching end."""

    def to_dict(self) -> dict:
        return {"result": "unreachable", "start": self.start, "end": self.end, "path": []}
