"""
Unit tests for GraphStore.
"""

import pytest

from src.errors import (
    DuplicateNodeError,
    GraphBusyError,
    GraphError,
    InvalidEdgeError,
    InvalidLabelError,
    UnknownNodeError,
)
from src.graph import ChangeKind, GraphChange, GraphStore, default_graph


class TestNodes:
    """Test node creation and removal."""

    def test_add_node_starts_isolated(self):
        """A new node has no neighbors."""
        graph = GraphStore()
        graph.add_node("A")
        assert graph.has_node("A")
        assert graph.neighbors("A") == []
        assert graph.node_count() == 1

    def test_add_duplicate_node_rejected(self):
        """Adding an existing label raises DuplicateNodeError."""
        graph = GraphStore()
        graph.add_node("A")
        with pytest.raises(DuplicateNodeError):
            graph.add_node("A")
        assert graph.node_count() == 1

    def test_duplicate_node_is_value_error(self):
        """DuplicateNodeError can be caught as ValueError."""
        graph = GraphStore()
        graph.add_node("A")
        with pytest.raises(ValueError):
            graph.add_node("A")

    def test_labels_are_case_sensitive(self):
        """Labels are stored exactly as given."""
        graph = GraphStore()
        graph.add_node("a")
        graph.add_node("A")
        assert graph.nodes() == ["a", "A"]

    @pytest.mark.parametrize("label", ["", "   ", None, 3])
    def test_invalid_label_rejected(self, label):
        """Empty and non-string labels raise InvalidLabelError."""
        graph = GraphStore()
        with pytest.raises(InvalidLabelError):
            graph.add_node(label)
        assert graph.node_count() == 0

    def test_add_node_connected(self):
        """connect_to adds the node and the edge in one call."""
        graph = GraphStore.from_edges([], nodes=["A"])
        graph.add_node("G", connect_to="A")
        assert graph.neighbors("G") == ["A"]
        assert graph.neighbors("A") == ["G"]

    def test_add_node_connected_to_unknown_is_atomic(self):
        """A bad connect_to leaves the graph untouched."""
        graph = GraphStore()
        with pytest.raises(UnknownNodeError):
            graph.add_node("G", connect_to="Z")
        assert not graph.has_node("G")

    def test_remove_node_severs_edges(self, sample_graph):
        """Removing a node removes it from every neighbor set."""
        sample_graph.remove_node("A")
        assert not sample_graph.has_node("A")
        for label in sample_graph.nodes():
            assert "A" not in sample_graph.neighbors(label)
        assert sample_graph.edge_count() == 3

    def test_remove_node_twice_fails(self, sample_graph):
        """Removal is not idempotent."""
        sample_graph.remove_node("F")
        with pytest.raises(UnknownNodeError):
            sample_graph.remove_node("F")

    def test_remove_unknown_node(self):
        """Removing a missing node raises UnknownNodeError."""
        with pytest.raises(UnknownNodeError):
            GraphStore().remove_node("X")

    def test_unknown_node_message(self):
        """UnknownNodeError names the label without KeyError quoting."""
        error = UnknownNodeError("X")
        assert str(error) == "Node 'X' does not exist"
        assert error.label == "X"
        assert isinstance(error, LookupError)


class TestEdges:
    """Test edge insertion and removal."""

    def test_add_edge_is_symmetric(self):
        """Both endpoints see each other."""
        graph = GraphStore.from_edges([], nodes=["A", "B"])
        assert graph.add_edge("A", "B") is True
        assert "B" in graph.neighbors("A")
        assert "A" in graph.neighbors("B")
        assert graph.has_edge("B", "A")

    def test_add_edge_twice_is_noop(self):
        """Re-adding an edge returns False and changes nothing."""
        graph = GraphStore.from_edges([("A", "B")])
        before = graph.adjacency()
        assert graph.add_edge("A", "B") is False
        assert graph.add_edge("B", "A") is False
        assert graph.adjacency() == before
        assert graph.edge_count() == 1

    def test_add_edge_unknown_endpoint(self):
        """Either endpoint missing raises UnknownNodeError."""
        graph = GraphStore.from_edges([], nodes=["A"])
        with pytest.raises(UnknownNodeError):
            graph.add_edge("A", "Z")
        with pytest.raises(UnknownNodeError):
            graph.add_edge("Z", "A")
        assert graph.neighbors("A") == []

    def test_self_loop_rejected(self):
        """An edge from a node to itself is rejected."""
        graph = GraphStore.from_edges([], nodes=["A"])
        with pytest.raises(InvalidEdgeError):
            graph.add_edge("A", "A")
        assert graph.neighbors("A") == []

    def test_remove_edge(self, sample_graph):
        """Removing an edge clears both directions."""
        assert sample_graph.remove_edge("B", "A") is True
        assert "B" not in sample_graph.neighbors("A")
        assert "A" not in sample_graph.neighbors("B")
        assert sample_graph.edge_count() == 4

    def test_remove_missing_edge_is_noop(self, sample_graph):
        """Removing a non-edge returns False."""
        assert sample_graph.remove_edge("A", "F") is False
        assert sample_graph.edge_count() == 5

    def test_remove_edge_unknown_endpoint(self, sample_graph):
        """Removing an edge to a missing node raises UnknownNodeError."""
        with pytest.raises(UnknownNodeError):
            sample_graph.remove_edge("A", "Z")

    def test_neighbors_in_insertion_order(self):
        """neighbors() follows the order edges were added at that node."""
        graph = GraphStore.from_edges([], nodes=["A", "B", "C", "D"])
        graph.add_edge("A", "D")
        graph.add_edge("C", "A")
        graph.add_edge("A", "B")
        assert graph.neighbors("A") == ["D", "C", "B"]

    def test_neighbor_order_survives_removal(self):
        """Removing one neighbor keeps the rest in order."""
        graph = GraphStore.from_edges([("A", "B"), ("A", "C"), ("A", "D")])
        graph.remove_edge("A", "C")
        assert graph.neighbors("A") == ["B", "D"]

    def test_neighbors_unknown(self):
        """neighbors() of a missing node raises UnknownNodeError."""
        with pytest.raises(UnknownNodeError):
            GraphStore().neighbors("A")

    def test_edges_listed_once(self, sample_graph):
        """edges() lists each undirected edge once, as first added."""
        assert sample_graph.edges() == [
            ("A", "B"),
            ("A", "C"),
            ("B", "D"),
            ("C", "E"),
            ("D", "F"),
        ]

    def test_symmetry_after_mixed_operations(self, random_graphs):
        """Adjacency stays symmetric through adds and removals."""
        for graph in random_graphs:
            labels = graph.nodes()
            graph.remove_node(labels[0])
            if len(labels) > 2:
                graph.remove_edge(labels[1], labels[2])
            adjacency = graph.adjacency()
            for node, neighbors in adjacency.items():
                for neighbor in neighbors:
                    assert node in adjacency[neighbor]
                assert node not in neighbors


class TestConstruction:
    """Test builders and container protocol."""

    def test_default_graph(self):
        """The demo graph has six nodes and five edges."""
        graph = default_graph()
        assert graph.nodes() == ["A", "B", "C", "D", "E", "F"]
        assert graph.edge_count() == 5
        assert graph.neighbors("A") == ["B", "C"]
        assert graph.neighbors("D") == ["B", "F"]

    def test_from_edges_creates_endpoints(self):
        """Endpoints missing from nodes are created on the fly."""
        graph = GraphStore.from_edges([("X", "Y")], nodes=["W"])
        assert graph.nodes() == ["W", "X", "Y"]
        assert graph.degree("W") == 0
        assert graph.degree("X") == 1

    def test_container_protocol(self, sample_graph):
        """len, in and iteration mirror the node set."""
        assert len(sample_graph) == 6
        assert "A" in sample_graph
        assert "Z" not in sample_graph
        assert list(sample_graph) == sample_graph.nodes()

    def test_non_string_labels_are_absent(self, sample_graph):
        """Lists and dicts are never nodes, and lookups raise the usual error."""
        assert not sample_graph.has_node(["A"])
        assert {"x": 1} not in sample_graph
        assert not sample_graph.has_edge(["A"], "B")
        with pytest.raises(UnknownNodeError):
            sample_graph.neighbors({"x": 1})
        with pytest.raises(UnknownNodeError):
            sample_graph.add_edge("A", ["B"])
        assert sample_graph.edge_count() == 5


class TestSearchGuard:
    """Test that mutations are rejected while a search holds the graph."""

    def test_mutations_rejected_while_searching(self, sample_graph):
        """Every mutation raises GraphBusyError inside searching()."""
        with sample_graph.searching():
            assert sample_graph.is_searching
            with pytest.raises(GraphBusyError):
                sample_graph.add_node("G")
            with pytest.raises(GraphBusyError):
                sample_graph.remove_node("A")
            with pytest.raises(GraphBusyError):
                sample_graph.add_edge("A", "F")
            with pytest.raises(GraphBusyError):
                sample_graph.remove_edge("A", "B")
        assert sample_graph.edge_count() == 5
        assert sample_graph.node_count() == 6

    def test_queries_allowed_while_searching(self, sample_graph):
        """Reads still work inside searching()."""
        with sample_graph.searching():
            assert sample_graph.neighbors("A") == ["B", "C"]
            assert sample_graph.has_node("F")

    def test_guard_released_after_exit(self, sample_graph):
        """Mutations work again once the search ends."""
        with sample_graph.searching():
            pass
        assert not sample_graph.is_searching
        assert sample_graph.add_edge("A", "F") is True

    def test_guard_released_on_error(self, sample_graph):
        """An exception inside searching() still releases the graph."""
        with pytest.raises(RuntimeError):
            with sample_graph.searching():
                raise RuntimeError("boom")
        assert not sample_graph.is_searching

    def test_nested_searches(self, sample_graph):
        """The graph stays busy until the last search exits."""
        with sample_graph.searching():
            with sample_graph.searching():
                pass
            with pytest.raises(GraphBusyError):
                sample_graph.add_node("G")
        sample_graph.add_node("G")

    def test_busy_error_is_graph_error(self):
        """GraphBusyError belongs to the GraphError family."""
        assert issubclass(GraphBusyError, GraphError)


class TestSubscriptions:
    """Test graph change notifications."""

    def test_changes_reported(self):
        """Each effective mutation is reported once, in order."""
        graph = GraphStore()
        changes = []
        graph.subscribe(changes.append)

        graph.add_node("A")
        graph.add_node("B", connect_to="A")
        graph.add_edge("A", "B")  # no-op
        graph.remove_edge("A", "B")
        graph.remove_edge("A", "B")  # no-op

        assert changes == [
            GraphChange(ChangeKind.NODE_ADDED, "A"),
            GraphChange(ChangeKind.NODE_ADDED, "B"),
            GraphChange(ChangeKind.EDGE_ADDED, "B", "A"),
            GraphChange(ChangeKind.EDGE_REMOVED, "A", "B"),
        ]

    def test_remove_node_reports_severed_edges(self, sample_graph):
        """Node removal reports each severed edge before the node."""
        changes = []
        sample_graph.subscribe(changes.append)
        sample_graph.remove_node("A")
        assert [c.kind for c in changes] == [
            ChangeKind.EDGE_REMOVED,
            ChangeKind.EDGE_REMOVED,
            ChangeKind.NODE_REMOVED,
        ]
        assert {c.other for c in changes[:2]} == {"B", "C"}

    def test_failed_mutation_not_reported(self):
        """Rejected operations produce no notifications."""
        graph = GraphStore.from_edges([], nodes=["A"])
        changes = []
        graph.subscribe(changes.append)
        with pytest.raises(DuplicateNodeError):
            graph.add_node("A")
        assert changes == []

    def test_unsubscribe(self):
        """An unsubscribed callback stops receiving changes."""
        graph = GraphStore()
        changes = []
        unsubscribe = graph.subscribe(changes.append)
        graph.add_node("A")
        unsubscribe()
        graph.add_node("B")
        assert len(changes) == 1

    def test_change_to_dict(self):
        """Changes serialize to plain dicts."""
        change = GraphChange(ChangeKind.EDGE_ADDED, "A", "B")
        assert change.to_dict() == {"kind": "edge_added", "node": "A", "other": "B"}
