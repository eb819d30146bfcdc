# Dockerfile importer: turns script text into a chain of instruction nodes
import logging
from typing import Callable, List, Optional, Tuple

from .catalog import Instruction, find_spec_by_id, find_spec_by_keyword, resolve_instruction
from .graph_model import Edge, Graph, Node, Position
from .utils import NodeIdFactory

logger = logging.getLogger(__name__)

# canvas layout for imported nodes
START_X = 250
START_Y = 100
NODE_HEIGHT = 150
NODE_MARGIN = 50


def logical_lines(content: str) -> List[str]:
    """Drop blanks and comments, then join backslash continuations."""
    lines = [l.strip() for l in content.split("\n") if l.strip() and not l.strip().startswith("#")]
    out = []
    pending = ""
    for line in lines:
        if line.endswith("\\"):
            pending += line[:-1] + " "
            continue
        out.append(pending + line)
        pending = ""
    if pending:
        out.append(pending)
    return out


def split_instruction(line: str) -> Optional[Tuple[str, str]]:
    parts = line.split(None, 1)
    if len(parts) < 2:
        return None
    return parts[0].upper(), parts[1].strip()


def parse(content: str, id_factory: Optional[Callable[[str], str]] = None) -> Graph:
    """Parse Dockerfile text into a graph of nodes linked in file order."""
    new_id = id_factory or NodeIdFactory()
    graph = Graph()
    prev_id = None

    for index, line in enumerate(logical_lines(content)):
        split = split_instruction(line)
        if split is None:
            logger.debug("skipping line without arguments: %r", line)
            continue
        token, args = split

        keyword = resolve_instruction(token)
        if keyword is None:
            logger.debug("skipping unknown instruction %r", token)
            continue

        if keyword is Instruction.FROM and " AS " in args:
            spec = find_spec_by_id("multi_stage")
        else:
            spec = find_spec_by_keyword(keyword)
        if spec is None:
            continue

        node = graph.add_node(Node.from_spec(
            new_id(spec.keyword.value),
            spec,
            arguments=args,
            position=Position(START_X, START_Y + index * (NODE_HEIGHT + NODE_MARGIN)),
        ))
        if prev_id is not None:
            graph.add_edge(Edge(id=f"e{prev_id}-{node.id}", source=prev_id, target=node.id))
        prev_id = node.id

    logger.debug("parsed %d node(s), %d edge(s)", len(graph.nodes), len(graph.edges))
    return graph
