"""
Search module.

Provides breadth-first shortest-path search with step reporting:
- traverse / search: The algorithm, as an event generator and a one-shot call
- SearchEngine: Paced, cancellable runs with event callbacks
- BackgroundSearch: A search on a worker thread with an event channel
- TraversalEvent / EventBus: Step records and their fan-out
- PathFound / Unreachable: Search outcomes
"""

from src.search.engine import SearchEngine, search, traverse
from src.search.events import EventBus, EventKind, TraversalEvent
from src.search.result import PathFound, SearchResult, Unreachable
from src.search.runner import BackgroundSearch

__all__ = [
    "BackgroundSearch",
    "EventBus",
    "EventKind",
    "PathFound",
    "SearchEngine",
    "SearchResult",
    "TraversalEvent",
    "Unreachable",
    "search",
    "traverse",
]
