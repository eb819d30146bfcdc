"""Graph primitives for the instruction editor."""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from .catalog import InstructionSpec
from .errors import GraphFormatError


@dataclass
class Position:
    x: float = 0.0
    y: float = 0.0


@dataclass
class Node:
    id: str
    keyword: str
    arguments: str = ""
    label: str = ""
    description: str = ""
    advanced: bool = False
    position: Position = field(default_factory=Position)

    @classmethod
    def from_spec(cls, node_id: str, spec: InstructionSpec,
                  arguments: Optional[str] = None,
                  position: Optional[Position] = None) -> "Node":
        """Build a node carrying the catalog metadata of ``spec``."""
        return cls(
            id=node_id,
            keyword=spec.keyword.value,
            arguments=spec.default_arguments if arguments is None else arguments,
            label=spec.label,
            description=spec.description,
            advanced=spec.advanced,
            position=position or Position(),
        )


@dataclass
class Edge:
    id: str
    source: str
    target: str


@dataclass
class Graph:
    # dict order of ``nodes`` is the creation order
    nodes: Dict[str, Node] = field(default_factory=dict)
    edges: Dict[str, Edge] = field(default_factory=dict)

    def add_node(self, node: Node) -> Node:
        self.nodes[node.id] = node
        return node

    def add_edge(self, edge: Edge) -> Edge:
        self.edges[edge.id] = edge
        return edge

    def node_list(self) -> List[Node]:
        return list(self.nodes.values())

    def edge_list(self) -> List[Edge]:
        return list(self.edges.values())

    def is_dangling(self, edge: Edge) -> bool:
        return edge.source not in self.nodes or edge.target not in self.nodes

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [asdict(n) for n in self.nodes.values()],
            "edges": [asdict(e) for e in self.edges.values()],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Graph":
        if not isinstance(data, dict):
            raise GraphFormatError("graph document must be an object with 'nodes' and 'edges'")
        nodes = data.get("nodes") or []
        edges = data.get("edges") or []
        if not isinstance(nodes, list) or not isinstance(edges, list):
            raise GraphFormatError("'nodes' and 'edges' must be lists")
        graph = cls()
        for raw in nodes:
            try:
                pos = raw.get("position") or {}
                graph.add_node(Node(
                    id=str(raw["id"]),
                    keyword=raw.get("keyword", ""),
                    arguments=raw.get("arguments", ""),
                    label=raw.get("label", ""),
                    description=raw.get("description", ""),
                    advanced=bool(raw.get("advanced", False)),
                    position=Position(float(pos.get("x", 0)), float(pos.get("y", 0))),
                ))
            except (KeyError, TypeError, AttributeError, ValueError) as e:
                raise GraphFormatError(f"invalid node entry {raw!r}: {e}") from e
        for raw in edges:
            try:
                graph.add_edge(Edge(id=str(raw["id"]), source=str(raw["source"]),
                                    target=str(raw["target"])))
            except (KeyError, TypeError) as e:
                raise GraphFormatError(f"invalid edge entry {raw!r}: {e}") from e
        return graph
