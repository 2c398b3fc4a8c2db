"""
Breadth-first search engine with step-by-step event reporting.

The algorithm lives in traverse(), a generator that yields one
TraversalEvent per step and returns the SearchResult. SearchEngine drives
that generator, delivering events to callbacks with optional pacing and
cancellation, so a caller can animate or abort a search without touching
the algorithm.
"""

from __future__ import annotations

import itertools
import logging
import threading
import time
from collections import deque
from collections.abc import Generator

from src.config import STEP_DELAY_SECONDS
from src.errors import SearchCancelled, UnknownNodeError
from src.graph.store import GraphStore
from src.search.events import EventCallback, EventKind, TraversalEvent
from src.search.result import PathFound, SearchResult, Unreachable

logger = logging.getLogger(__name__)

Traversal = Generator[TraversalEvent, None, SearchResult]


def traverse(graph: GraphStore, start: str, end: str) -> Traversal:
    """
    Start a breadth-first search from start to end.

    The graph's search guard is taken and both labels are checked before
    this returns; the search itself runs lazily as the returned generator
    is consumed. The guard is held until the generator is exhausted or
    closed.

    Returns:
        Generator yielding events; its return value is the SearchResult

    Raises:
        UnknownNodeError: If start or end is not in the graph
    """
    steps = _bfs(graph, start, end)
    # Runs up to the priming yield: guard held, labels checked
    next(steps)
    return steps


def _bfs(graph: GraphStore, start: str, end: str) -> Traversal:
    step = itertools.count()

    with graph.searching():
        for label in (start, end):
            if not graph.has_node(label):
                raise UnknownNodeError(label)
        yield None

        yield TraversalEvent(EventKind.START, start, next(step))

        # The loop only checks for the destination on dequeue, so the
        # zero-length path never reaches it
        if start == end:
            path = (start,)
            yield TraversalEvent(EventKind.FOUND, end, next(step), path=path)
            return PathFound(start, end, path)

        visited = {start}
        queue = deque([start])
        parent: dict[str, str] = {}

        while queue:
            current = queue.popleft()
            yield TraversalEvent(EventKind.VISIT, current, next(step))

            if current == end:
                path = _reconstruct_path(parent, start, end)
                yield TraversalEvent(EventKind.FOUND, end, next(step), path=path)
                return PathFound(start, end, path)

            for neighbor in graph.neighbors(current):
                if neighbor in visited:
                    continue
                visited.add(neighbor)
                parent[neighbor] = current
                queue.append(neighbor)
                yield TraversalEvent(EventKind.ENQUEUE, neighbor, next(step), parent=current)

        yield TraversalEvent(EventKind.UNREACHABLE, end, next(step))
        return Unreachable(start, end)


def _reconstruct_path(parent: dict[str, str], start: str, end: str) -> tuple[str, ...]:
    """Walk parent pointers back from end, then reverse."""
    path = [end]
    node = end
    while node != start:
        node = parent[node]
        path.append(node)
    return tuple(reversed(path))


class SearchEngine:
    """
    Runs breadth-first searches and reports each step.

    Events are delivered synchronously, in algorithmic order, to the
    engine-wide callback and then to the per-run callback.
    """

    def __init__(
        self,
        step_delay: float = STEP_DELAY_SECONDS,
        on_event: EventCallback | None = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            step_delay: Seconds to pause after each non-final event (0 = none)
            on_event: Callback invoked for every event of every run
        """
        if step_delay < 0:
            raise ValueError(f"step_delay must be >= 0, got {step_delay}")
        self._step_delay = step_delay
        self._on_event = on_event

    @property
    def step_delay(self) -> float:
        return self._step_delay

    def run(
        self,
        graph: GraphStore,
        start: str,
        end: str,
        cancel: threading.Event | None = None,
        on_event: EventCallback | None = None,
    ) -> SearchResult:
        """
        Run a complete search.

        Args:
            graph: Graph to search (held read-only for the whole run)
            start: Start node label
            end: Destination node label
            cancel: Set from any thread to abandon the search
            on_event: Callback for this run's events

        Returns:
            PathFound or Unreachable

        Raises:
            UnknownNodeError: If start or end is not in the graph
            SearchCancelled: If cancel was set before the search finished
        """
        steps = traverse(graph, start, end)
        return self.drive(steps, start, end, cancel=cancel, on_event=on_event)

    def drive(
        self,
        steps: Traversal,
        start: str,
        end: str,
        cancel: threading.Event | None = None,
        on_event: EventCallback | None = None,
    ) -> SearchResult:
        """
        Consume a traversal already started with traverse().

        Lets a caller take the graph's search guard on one thread and run
        the search on another. The traversal is closed when this returns.
        """
        callbacks = [cb for cb in (self._on_event, on_event) if cb is not None]
        logger.info(f"Starting search: '{start}' -> '{end}'")
        finished = False

        try:
            while True:
                # Once the outcome has been delivered there is nothing to abandon
                if not finished and cancel is not None and cancel.is_set():
                    logger.warning(f"Search '{start}' -> '{end}' cancelled")
                    raise SearchCancelled(start, end)

                try:
                    event = next(steps)
                except StopIteration as stop:
                    result = stop.value
                    break

                logger.debug(event.describe())
                for callback in callbacks:
                    callback(event)

                if event.is_terminal:
                    finished = True
                else:
                    self._pause(cancel)
        finally:
            steps.close()

        if result.found:
            logger.info(
                f"Path found ({result.hops} hops): {' -> '.join(result.path)}"
            )
        else:
            logger.warning(f"Destination '{end}' not reachable from '{start}'")
        return result

    def _pause(self, cancel: threading.Event | None) -> None:
        if self._step_delay <= 0:
            return
        if cancel is not None:
            cancel.wait(self._step_delay)
        else:
            time.sleep(self._step_delay)


def search(
    graph: GraphStore,
    start: str,
    end: str,
    on_event: EventCallback | None = None,
    cancel: threading.Event | None = None,
) -> SearchResult:
    """
    Find a shortest path without pacing.

    Usage:
        result = search(graph, "A", "F")
        if result.found:
            print(result.path)
    """
    return SearchEngine(step_delay=0).run(
        graph, start, end, cancel=cancel, on_event=on_event
    )
