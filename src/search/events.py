"""
Traversal events emitted by the BFS engine, and a bus for fan-out.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum


class EventKind(str, Enum):
    """One step of the breadth-first search."""

    START = "start"
    VISIT = "visit"
    ENQUEUE = "enqueue"
    FOUND = "found"
    UNREACHABLE = "unreachable"


TERMINAL_KINDS = frozenset({EventKind.FOUND, EventKind.UNREACHABLE})


@dataclass(frozen=True)
class TraversalEvent:
    """
    Immutable record of a single search step.

    Attributes:
        kind: Which step this is
        node: Label the step concerns (the destination for FOUND/UNREACHABLE)
        step: 0-based position of the event in its search
        parent: Node the enqueued label was discovered from (ENQUEUE only)
        path: Reconstructed path from start to end (FOUND only)
    """

    kind: EventKind
    node: str
    step: int
    parent: str | None = None
    path: tuple[str, ...] = ()

    @property
    def is_terminal(self) -> bool:
        return self.kind in TERMINAL_KINDS

    def describe(self) -> str:
        """Human-readable log line for this step."""
        if self.kind is EventKind.START:
            return f"Starting BFS from: {self.node}"
        if self.kind is EventKind.VISIT:
            return f"Visiting: {self.node}"
        if self.kind is EventKind.ENQUEUE:
            return f"Queueing: {self.node} from: {self.parent}"
        if self.kind is EventKind.FOUND:
            return f"Destination {self.node} found. Path: {' -> '.join(self.path)}"
        return f"Destination {self.node} not reachable."

    def to_dict(self) -> dict:
        data = {"kind": self.kind.value, "node": self.node, "step": self.step}
        if self.parent is not None:
            data["parent"] = self.parent
        if self.kind is EventKind.FOUND:
            data["path"] = list(self.path)
        return data


EventCallback = Callable[[TraversalEvent], None]


class EventBus:
    """
    Synchronous fan-out of traversal events to subscribers.

    Subscribers are called in subscription order on the publishing thread.
    A subscriber that raises aborts the publish and the exception reaches
    the publisher, which for a search means the search stops.
    """

    def __init__(self) -> None:
        self._subscribers: list[EventCallback] = []
        self._lock = threading.Lock()

    def subscribe(self, callback: EventCallback) -> Callable[[], None]:
        """Register a callback; returns a function that unregisters it."""
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, event: TraversalEvent) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            callback(event)

    __call__ = publish

    def __len__(self) -> int:
        return len(self._subscribers)
