# blueprint/linearizer.py - instruction ordering
# ----------------------------------------------
# Kahn's topological sort over the node graph. When the graph cannot be
# fully ordered (a cycle, or an edge from a node that never becomes free)
# the partial order is dropped and nodes come back in creation order.
# ----------------------------------------------

import logging
from collections import defaultdict, deque
from typing import List

from .graph_model import Graph, Node

logger = logging.getLogger(__name__)


def linearize(graph: Graph) -> List[Node]:
    """Return the nodes of ``graph`` in instruction emission order."""
    edges = [e for e in graph.edges.values() if not graph.is_dangling(e)]

    in_degree = {node_id: 0 for node_id in graph.nodes}
    outgoing = defaultdict(list)
    for edge in edges:
        in_degree[edge.target] += 1
        outgoing[edge.source].append(edge.target)

    queue = deque(node_id for node_id, degree in in_degree.items() if degree == 0)
    result = []
    while queue:
        current = queue.popleft()
        result.append(graph.nodes[current])
        for target in outgoing[current]:
            in_degree[target] -= 1
            if in_degree[target] == 0:
                queue.append(target)

    if len(result) != len(graph.nodes):
        logger.debug("[Linearizer] ordered %d of %d nodes, falling back to creation order",
                     len(result), len(graph.nodes))
        return graph.node_list()
    return result
