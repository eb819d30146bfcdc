from typing import Iterable

from .graph_model import Node


def serialize(nodes: Iterable[Node]) -> str:
    """Render ordered nodes as Dockerfile text.

    Nodes without a keyword or without arguments produce no line.
    """
    lines = [f"{n.keyword} {n.arguments}" for n in nodes if n.keyword and n.arguments]
    return "\n".join(lines)
