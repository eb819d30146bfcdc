#!/usr/bin/env python3
"""
Template catalog - starter graphs for the editor
-------------------------------------------------
Templates live in ``data/templates.yaml``. Loading one builds a fresh
Graph: nodes "1".."n" stacked vertically, edges "e1-2", "e2-3", ... in
step order, node metadata from the first catalog entry of each step's
instruction.

Failures here are configuration errors and are raised, not swallowed:
 - unknown template id      -> UnknownTemplateError
 - unknown step instruction -> UnknownInstructionError
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, List, Optional

import yaml

from .catalog import find_spec_by_keyword
from .errors import UnknownInstructionError, UnknownTemplateError
from .graph_model import Edge, Graph, Node, Position

logger = logging.getLogger(__name__)

TEMPLATES_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data", "templates.yaml")

TEMPLATE_X = 250
TEMPLATE_Y = 50
TEMPLATE_STEP = 100


@dataclass
class Template:
    id: str
    name: str
    graph: Graph


def load_template_data(path: Optional[str] = None) -> List[Dict]:
    with open(path or TEMPLATES_PATH, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    return data or []


def list_templates(path: Optional[str] = None) -> List[Dict[str, str]]:
    return [{"id": t["id"], "name": t["name"]} for t in load_template_data(path)]


def create_node(node_id: str, instruction: str, position: Position,
                arguments: Optional[str] = None) -> Node:
    spec = find_spec_by_keyword(instruction)
    if spec is None:
        raise UnknownInstructionError(f"No catalog entry for instruction {instruction!r}")
    return Node.from_spec(node_id, spec, arguments=arguments, position=position)


def build_template(raw: Dict) -> Template:
    graph = Graph()
    prev_id = None
    for i, step in enumerate(raw.get("steps") or []):
        node_id = str(i + 1)
        graph.add_node(create_node(
            node_id,
            step["instruction"],
            Position(TEMPLATE_X, TEMPLATE_Y + i * TEMPLATE_STEP),
            arguments=step.get("arguments"),
        ))
        if prev_id is not None:
            graph.add_edge(Edge(id=f"e{prev_id}-{node_id}", source=prev_id, target=node_id))
        prev_id = node_id
    return Template(id=raw["id"], name=raw["name"], graph=graph)


def load_template(template_id: str, path: Optional[str] = None) -> Template:
    for raw in load_template_data(path):
        if raw.get("id") == template_id:
            template = build_template(raw)
            logger.debug("loaded template %s with %d node(s)", template_id, len(template.graph.nodes))
            return template
    raise UnknownTemplateError(f"Unknown template id: {template_id}")
