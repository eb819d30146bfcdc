"""Tests for Dockerfile rendering (serializer.serialize)."""

from blueprint.graph_model import Node
from blueprint.serializer import serialize


def test_joins_lines_without_trailing_newline():
    nodes = [Node("1", "FROM", "node:14"), Node("2", "RUN", "npm ci")]
    assert serialize(nodes) == "FROM node:14\nRUN npm ci"


def test_drops_nodes_missing_keyword_or_arguments():
    nodes = [
        Node("1", "FROM", "node:14"),
        Node("2", "RUN", ""),
        Node("3", "", "orphan args"),
        Node("4", "EXPOSE", "3000"),
    ]
    assert serialize(nodes) == "FROM node:14\nEXPOSE 3000"


def test_empty_input():
    assert serialize([]) == ""
    assert serialize([Node("1", "RUN", "")]) == ""
