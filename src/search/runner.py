"""
Background search runner.

Runs one search on a worker thread and hands its events to the consumer
through a queue, so the consumer decides which thread renders them.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Iterator

from src.config import STEP_DELAY_SECONDS
from src.errors import SearchCancelled, UnknownNodeError
from src.graph.store import GraphStore
from src.search.engine import SearchEngine, Traversal, traverse
from src.search.events import EventCallback, TraversalEvent
from src.search.result import SearchResult

logger = logging.getLogger(__name__)

# Marks the end of a search on the event channel
_DONE = object()


class BackgroundSearch:
    """
    A single search running on a daemon thread.

    Events arrive on the channel in exactly the order the engine emits
    them. A failure on the worker (including cancellation) is stored and
    re-raised from join().

    Usage:
        with BackgroundSearch(graph, "A", "F", step_delay=0.5) as run:
            for event in run.events():
                print(event.describe())
        print(run.join().path)
    """

    def __init__(
        self,
        graph: GraphStore,
        start: str,
        end: str,
        step_delay: float = STEP_DELAY_SECONDS,
        on_event: EventCallback | None = None,
    ) -> None:
        """
        Prepare the search.

        Args:
            graph: Graph to search
            start: Start node label
            end: Destination node label
            step_delay: Seconds between events
            on_event: Extra callback, invoked on the worker thread

        Raises:
            UnknownNodeError: If start or end is not in the graph
        """
        for label in (start, end):
            if not graph.has_node(label):
                raise UnknownNodeError(label)

        self._graph = graph
        self._start = start
        self._end = end
        self._engine = SearchEngine(step_delay=step_delay, on_event=on_event)
        self._cancel = threading.Event()
        self._channel: queue.Queue = queue.Queue()
        self._drained = False
        self._steps: Traversal | None = None
        self._result: SearchResult | None = None
        self._error: BaseException | None = None
        self._thread = threading.Thread(
            target=self._work,
            name=f"bfs-{start}-{end}",
            daemon=True,
        )

    def start(self) -> BackgroundSearch:
        """
        Take the graph's search guard on this thread, then launch the worker.

        The graph rejects mutations from this point until the worker ends.

        Raises:
            UnknownNodeError: If start or end was removed after construction
            RuntimeError: If the search was already started
        """
        if self._thread.ident is not None:
            raise RuntimeError(f"Search '{self._start}' -> '{self._end}' already started")
        self._steps = traverse(self._graph, self._start, self._end)
        self._thread.start()
        return self

    def _work(self) -> None:
        try:
            self._result = self._engine.drive(
                self._steps,
                self._start,
                self._end,
                cancel=self._cancel,
                on_event=self._channel.put,
            )
        except SearchCancelled as e:
            self._error = e
        except Exception as e:
            logger.error(f"Search '{self._start}' -> '{self._end}' failed: {e}")
            self._error = e
        finally:
            self._channel.put(_DONE)

    def events(self, timeout: float | None = None) -> Iterator[TraversalEvent]:
        """
        Yield events as the worker produces them, until the search ends.

        Starts the search first if start() has not been called.

        Args:
            timeout: Max seconds to wait for each event

        Raises:
            queue.Empty: If no event arrived within timeout
        """
        if self._thread.ident is None:
            self.start()
        while not self._drained:
            item = self._channel.get(timeout=timeout)
            if item is _DONE:
                self._drained = True
                return
            yield item

    def cancel(self) -> None:
        """Ask the worker to stop before its next event."""
        self._cancel.set()

    def join(self, timeout: float | None = None) -> SearchResult | None:
        """
        Wait for the worker.

        Returns:
            The result, or None if the worker is still running after timeout

        Raises:
            SearchCancelled: If the search was cancelled
            Exception: Whatever a callback raised on the worker
        """
        self._thread.join(timeout)
        if self._thread.is_alive():
            return None
        if self._error is not None:
            raise self._error
        return self._result

    @property
    def done(self) -> bool:
        return self._thread.ident is not None and not self._thread.is_alive()

    @property
    def cancelled(self) -> bool:
        return isinstance(self._error, SearchCancelled)

    @property
    def result(self) -> SearchResult | None:
        return self._result

    @property
    def error(self) -> BaseException | None:
        return self._error

    def __enter__(self) -> BackgroundSearch:
        if self._thread.ident is None:
            self.start()
        return self

    def __exit__(self, *args) -> None:
        self.cancel()
        self._thread.join()
