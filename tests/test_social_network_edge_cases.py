"""
Edge Cases and Boundary Tests for the Social Network Graph Engine

This module contains tests for error conditions, degenerate graphs, and
properties that must hold on any valid graph.
"""

import random
import itertools

import pytest

from libs.social_network.errors import (
    GraphError, UnknownNode, InvalidEdge, DuplicateEdge, DuplicateNode,
)
from libs.social_network.graph_algorithms import GraphAlgorithms
from libs.social_network.communities import partition_of


def random_graph(seed: int, n: int = 12, p: float = 0.2):
    rng = random.Random(seed)
    nodes = [f"u{i:02d}" for i in range(n)]
    edges = [(a, b) for a, b in itertools.combinations(nodes, 2) if rng.random() < p]
    return nodes, edges


GRAPHS = [random_graph(seed) for seed in range(8)] + [
    (["a"], []),
    (["a", "b", "c", "d"], []),
    (["a", "b", "c", "d"], [("a", "b"), ("b", "c"), ("c", "d"), ("d", "a")]),
]


class TestConstructionErrors:
    """Invalid snapshots are rejected at construction"""

    def test_unknown_endpoint(self):
        with pytest.raises(InvalidEdge) as exc:
            GraphAlgorithms(["a", "b"], [("a", "z")])
        assert exc.value.target == "z"
        assert "unknown node" in exc.value.reason

    def test_self_loop(self):
        with pytest.raises(InvalidEdge) as exc:
            GraphAlgorithms(["a"], [("a", "a")])
        assert exc.value.reason == "self-loop"

    def test_duplicate_edge(self):
        with pytest.raises(DuplicateEdge):
            GraphAlgorithms(["a", "b"], [("a", "b"), ("a", "b")])

    def test_reversed_duplicate_edge(self):
        """Test that a pair and its reverse count as the same edge"""
        with pytest.raises(DuplicateEdge):
            GraphAlgorithms(["a", "b"], [("a", "b"), ("b", "a")])

    def test_duplicate_node(self):
        with pytest.raises(DuplicateNode):
            GraphAlgorithms(["a", "a"], [])

    def test_errors_share_base(self):
        for cls in (UnknownNode, InvalidEdge, DuplicateEdge, DuplicateNode):
            assert issubclass(cls, GraphError)

    def test_error_details(self):
        with pytest.raises(DuplicateEdge) as exc:
            GraphAlgorithms(["a", "b"], [("a", "b"), ("b", "a")])
        assert exc.value.details == {"source": "b", "target": "a"}


class TestQueryErrors:
    """Queries referencing unknown users fail with UnknownNode"""

    def setup_method(self):
        self.engine = GraphAlgorithms(["a", "b"], [("a", "b")])

    def test_path_unknown_start(self):
        with pytest.raises(UnknownNode) as exc:
            self.engine.shortest_path("x", "a")
        assert exc.value.node_id == "x"

    def test_path_unknown_end(self):
        with pytest.raises(UnknownNode):
            self.engine.shortest_path("a", "x")

    def test_path_unknown_identity(self):
        """Test that start == end still requires the node to exist"""
        with pytest.raises(UnknownNode):
            self.engine.shortest_path("x", "x")

    def test_suggestions_unknown_user(self):
        with pytest.raises(UnknownNode):
            self.engine.mutual_friends("x")

    def test_neighbors_unknown_user(self):
        with pytest.raises(UnknownNode):
            self.engine.neighbors("x")


class TestDegenerateGraphs:
    """Empty, edgeless and unusual id types"""

    def test_empty_graph(self):
        engine = GraphAlgorithms([], [])
        assert engine.communities() == []
        assert engine.communities_via_union_find() == []
        assert engine.stats().total_communities == 0

    def test_fully_disconnected(self):
        """Test that every node is its own community"""
        engine = GraphAlgorithms(["a", "b", "c"], [])
        assert len(engine.communities()) == 3
        assert len(engine.communities_via_union_find()) == 3
        assert engine.shortest_path("a", "c") is None

    def test_integer_ids(self):
        engine = GraphAlgorithms([1, 2, 3, 10], [(1, 10), (10, 3), (1, 2), (2, 3)])
        assert engine.neighbors(1) == (2, 10)
        assert engine.shortest_path(1, 3).path == (1, 2, 3)

    def test_mixed_ids(self):
        """Test that mixed integer and string ids sort without error"""
        engine = GraphAlgorithms([1, "b", "a"], [(1, "b"), (1, "a")])
        assert engine.neighbors(1) == ("a", "b")
        assert [s.user_id for s in engine.mutual_friends("a")] == ["b"]

    def test_long_chain_path(self):
        """Test that a long path is found without recursion"""
        n = 5000
        nodes = list(range(n))
        edges = [(i, i + 1) for i in range(n - 1)]
        engine = GraphAlgorithms(nodes, edges)
        result = engine.shortest_path(0, n - 1)
        assert result.distance == n - 1
        assert len(engine.communities()) == 1


class TestGraphProperties:
    """Laws that hold for any valid graph"""

    @pytest.mark.parametrize("nodes,edges", GRAPHS)
    def test_path_shape(self, nodes, edges):
        """Test distance equals hops and each hop is an edge"""
        engine = GraphAlgorithms(nodes, edges)
        for a, b in itertools.product(nodes, repeat=2):
            result = engine.shortest_path(a, b)
            if result is None:
                continue
            assert result.distance == len(result.path) - 1
            assert result.path[0] == a and result.path[-1] == b
            for x, y in result.edges():
                assert engine.index.has_edge(x, y)

    @pytest.mark.parametrize("nodes,edges", GRAPHS)
    def test_path_symmetry(self, nodes, edges):
        engine = GraphAlgorithms(nodes, edges)
        for a, b in itertools.combinations(nodes, 2):
            forward = engine.shortest_path(a, b)
            backward = engine.shortest_path(b, a)
            assert (forward is None) == (backward is None)
            if forward is not None:
                assert forward.distance == backward.distance

    @pytest.mark.parametrize("nodes,edges", GRAPHS)
    def test_path_matches_bfs_distances(self, nodes, edges):
        engine = GraphAlgorithms(nodes, edges)
        for a in nodes:
            distances = engine.distances_from(a)
            for b in nodes:
                result = engine.shortest_path(a, b)
                if b in distances:
                    assert result.distance == distances[b]
                else:
                    assert result is None

    @pytest.mark.parametrize("nodes,edges", GRAPHS)
    def test_partition_law(self, nodes, edges):
        """Test that both methods partition the node set identically"""
        engine = GraphAlgorithms(nodes, edges)
        for communities in (engine.communities(), engine.communities_via_union_find()):
            members = [m for c in communities for m in c.members]
            assert sorted(members) == sorted(nodes)
            assert len(members) == len(set(members))
            assert [c.id for c in communities] == list(range(len(communities)))
        assert partition_of(engine.communities()) == partition_of(engine.communities_via_union_find())

    @pytest.mark.parametrize("nodes,edges", GRAPHS)
    def test_communities_are_connected_components(self, nodes, edges):
        engine = GraphAlgorithms(nodes, edges)
        for community in engine.communities():
            reachable = set(engine.distances_from(community.members[0]))
            assert reachable == community.member_set()

    @pytest.mark.parametrize("nodes,edges", GRAPHS)
    def test_suggestion_exclusions(self, nodes, edges):
        engine = GraphAlgorithms(nodes, edges)
        for user in nodes:
            friends = set(engine.neighbors(user))
            suggestions = engine.mutual_friends(user)
            counts = [s.mutual_count for s in suggestions]
            assert counts == sorted(counts, reverse=True)
            for s in suggestions:
                assert s.user_id != user
                assert s.user_id not in friends
                assert s.mutual_friends
                assert set(s.mutual_friends) == friends & set(engine.neighbors(s.user_id))

    @pytest.mark.parametrize("seed", range(5))
    def test_adding_edge_is_monotone(self, seed):
        """Test that an extra edge never adds communities or lengthens paths"""
        nodes, edges = random_graph(seed, p=0.15)
        present = {frozenset(e) for e in edges}
        missing = [p for p in itertools.combinations(nodes, 2) if frozenset(p) not in present]
        extra = random.Random(seed).choice(missing)

        before = GraphAlgorithms(nodes, edges)
        after = GraphAlgorithms(nodes, edges + [extra])

        assert len(after.communities()) <= len(before.communities())
        for a, b in itertools.combinations(nodes, 2):
            old = before.shortest_path(a, b)
            if old is not None:
                assert after.shortest_path(a, b).distance <= old.distance
