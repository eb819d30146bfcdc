"""Tests for instruction ordering (linearizer.linearize)."""

import itertools

from blueprint.graph_model import Edge, Graph
from blueprint.linearizer import linearize


def ids(nodes):
    return [n.id for n in nodes]


class TestAcyclic:

    def test_empty_graph(self):
        assert linearize(Graph()) == []

    def test_edges_override_creation_order(self, make_graph):
        graph = make_graph(["a", "b", "c"], [("c", "a"), ("a", "b")])
        assert ids(linearize(graph)) == ["c", "a", "b"]

    def test_unconnected_nodes_keep_creation_order(self, make_graph):
        graph = make_graph(["x", "y", "z"])
        assert ids(linearize(graph)) == ["x", "y", "z"]

    def test_diamond_is_topological(self, make_graph):
        edges = [("a", "b"), ("a", "c"), ("b", "d"), ("c", "d")]
        graph = make_graph(["d", "c", "b", "a"], edges)
        order = ids(linearize(graph))
        assert len(order) == 4
        for source, target in edges:
            assert order.index(source) < order.index(target)

    def test_every_permutation_of_a_chain(self, make_graph):
        chain = [("n1", "n2"), ("n2", "n3"), ("n3", "n4")]
        for perm in itertools.permutations(["n1", "n2", "n3", "n4"]):
            graph = make_graph(list(perm), chain)
            assert ids(linearize(graph)) == ["n1", "n2", "n3", "n4"]

    def test_parallel_edges_between_same_nodes(self, make_graph):
        graph = make_graph(["b", "a"], [("a", "b")])
        graph.add_edge(Edge(id="dup", source="a", target="b"))
        assert ids(linearize(graph)) == ["a", "b"]


class TestFallback:

    def test_cycle_returns_creation_order(self, make_graph):
        graph = make_graph(["c", "a", "b"], [("a", "b"), ("b", "a")])
        assert ids(linearize(graph)) == ["c", "a", "b"]

    def test_self_loop_returns_creation_order(self, make_graph):
        graph = make_graph(["b", "a"], [("a", "b"), ("b", "b")])
        assert ids(linearize(graph)) == ["b", "a"]

    def test_cycle_downstream_of_valid_chain(self, make_graph):
        graph = make_graph(["z", "y", "x", "w"], [("w", "x"), ("x", "y"), ("y", "z"), ("z", "y")])
        assert ids(linearize(graph)) == ["z", "y", "x", "w"]

    def test_dangling_edges_are_ignored(self, make_graph):
        graph = make_graph(["a", "b"], [("b", "a")])
        graph.add_edge(Edge(id="ghost", source="ghost", target="b"))
        graph.add_edge(Edge(id="gone", source="a", target="gone"))
        assert ids(linearize(graph)) == ["b", "a"]
