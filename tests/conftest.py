"""Shared pytest fixtures."""

import pytest

from blueprint.graph_model import Edge, Graph, Node
from blueprint.utils import NodeIdFactory


@pytest.fixture
def id_factory():
    return NodeIdFactory(session="test")


@pytest.fixture
def make_graph():
    """Build a graph from node ids (creation order) and (source, target) pairs."""

    def _make(node_ids, edges=()):
        graph = Graph()
        for node_id in node_ids:
            graph.add_node(Node(id=node_id, keyword="RUN", arguments=f"echo {node_id}"))
        for source, target in edges:
            graph.add_edge(Edge(id=f"e{source}-{target}", source=source, target=target))
        return graph

    return _make
