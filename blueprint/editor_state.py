"""Editor session state.

One EditorState holds the graph being edited and the export file name.
UI callbacks (or the CLI) mutate it; ordering, rendering and validation
are delegated to the pure functions of the other modules.
"""

import logging
from dataclasses import dataclass, replace
from typing import Callable, Iterable, Optional, Union

from .catalog import InstructionSpec, find_spec_by_id, find_spec_by_keyword
from .errors import UnknownInstructionError
from .graph_model import Edge, Graph, Node, Position
from .linearizer import linearize
from .parser_docker import NODE_HEIGHT, NODE_MARGIN, START_X, START_Y, parse
from .rules_engine import ValidationResult, validate
from .explainer import analyze_buildability
from .serializer import serialize
from . import templates
from .utils import NodeIdFactory

logger = logging.getLogger(__name__)

DEFAULT_FILE_NAME = "Dockerfile"
EMPTY_PLACEHOLDER = ("# The generated Dockerfile will appear here\n"
                     "# Add nodes and connect them to build a Dockerfile")

_EDITABLE_FIELDS = {"keyword", "arguments", "label", "description", "advanced"}


@dataclass
class EditorValidation:
    result: ValidationResult
    buildability: str


class EditorState:
    def __init__(self, id_factory: Optional[Callable[[str], str]] = None,
                 custom_rules: Optional[Iterable[dict]] = None):
        self.new_id = id_factory or NodeIdFactory()
        self.custom_rules = list(custom_rules or [])
        self.graph = Graph()
        self.file_name = DEFAULT_FILE_NAME

    def set_file_name(self, file_name: str):
        self.file_name = file_name

    # --- node edits ---

    def add_node(self, node: Node) -> Node:
        return self.graph.add_node(node)

    def add_instruction(self, ref: Union[str, InstructionSpec], arguments: Optional[str] = None) -> Node:
        """Append a catalog instruction below the last node and link it.

        ``ref`` is a spec, a catalog id ("copy_from") or a keyword ("COPY").
        """
        spec = ref if isinstance(ref, InstructionSpec) else (find_spec_by_id(ref) or find_spec_by_keyword(ref))
        if spec is None:
            raise UnknownInstructionError(f"No catalog entry for {ref!r}")

        nodes = self.graph.node_list()
        last = nodes[-1] if nodes else None
        if last is not None:
            position = Position(last.position.x, last.position.y + NODE_HEIGHT + NODE_MARGIN)
        else:
            position = Position(START_X, START_Y)

        node = self.add_node(Node.from_spec(self.new_id(spec.keyword.value), spec,
                                            arguments=arguments, position=position))
        if last is not None:
            self.connect(last.id, node.id)
        return node

    def update_node(self, node_id: str, **fields) -> Optional[Node]:
        unknown = set(fields) - _EDITABLE_FIELDS
        if unknown:
            raise TypeError(f"Cannot update node fields: {', '.join(sorted(unknown))}")
        node = self.graph.nodes.get(node_id)
        if node is None:
            logger.debug("update for unknown node %s ignored", node_id)
            return None
        updated = replace(node, **fields)
        self.graph.nodes[node_id] = updated
        return updated

    def move_node(self, node_id: str, x: float, y: float) -> Optional[Node]:
        node = self.graph.nodes.get(node_id)
        if node is None:
            return None
        updated = replace(node, position=Position(x, y))
        self.graph.nodes[node_id] = updated
        return updated

    def remove_node(self, node_id: str) -> bool:
        if self.graph.nodes.pop(node_id, None) is None:
            return False
        for edge_id in [e.id for e in self.graph.edge_list() if node_id in (e.source, e.target)]:
            del self.graph.edges[edge_id]
        return True

    # --- edge edits ---

    def connect(self, source: str, target: str) -> Edge:
        for edge in self.graph.edges.values():
            if edge.source == source and edge.target == target:
                return edge
        return self.graph.add_edge(Edge(id=f"e{source}-{target}", source=source, target=target))

    def remove_edge(self, edge_id: str) -> bool:
        return self.graph.edges.pop(edge_id, None) is not None

    # --- whole-state replacement ---

    def reset(self):
        self.graph = Graph()
        self.file_name = DEFAULT_FILE_NAME

    def load_graph(self, graph: Graph, file_name: Optional[str] = None):
        self.graph = graph
        self.file_name = file_name or DEFAULT_FILE_NAME

    def import_dockerfile(self, content: str, file_name: Optional[str] = None) -> Graph:
        self.reset()
        graph = parse(content, id_factory=self.new_id)
        self.load_graph(graph, file_name)
        logger.info("Imported %s: %d instruction(s)", self.file_name, len(graph.nodes))
        return graph

    def load_template(self, template_id: str) -> Graph:
        template = templates.load_template(template_id)
        self.reset()
        self.load_graph(template.graph)
        return template.graph

    # --- derived views ---

    def dockerfile_content(self) -> str:
        return serialize(linearize(self.graph))

    def export_text(self) -> str:
        return self.dockerfile_content() or EMPTY_PLACEHOLDER

    def validation(self) -> Optional[EditorValidation]:
        content = self.dockerfile_content()
        if not content:
            return None
        result = validate(content, custom_rules=self.custom_rules)
        return EditorValidation(result=result, buildability=analyze_buildability(content, result=result))
