"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and provides
fixtures available to all test files.
"""

import random

import pytest

from src.graph import GraphStore, default_graph


@pytest.fixture
def sample_graph() -> GraphStore:
    """The six-node demo graph: A-B, A-C, B-D, C-E, D-F."""
    return default_graph()


@pytest.fixture
def disconnected_graph() -> GraphStore:
    """Two components: {A-B} and {C-D}."""
    return GraphStore.from_edges([("A", "B"), ("C", "D")])


@pytest.fixture
def random_graphs() -> list[GraphStore]:
    """A reproducible batch of random sparse graphs, some disconnected."""
    graphs = []
    for seed in range(20):
        rng = random.Random(seed)
        size = rng.randint(2, 15)
        labels = [f"N{i}" for i in range(size)]
        graph = GraphStore.from_edges([], nodes=labels)
        for _ in range(rng.randint(0, size * 2)):
            a, b = rng.sample(labels, 2)
            graph.add_edge(a, b)
        graphs.append(graph)
    return graphs
