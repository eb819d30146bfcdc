"""Tests for the Dockerfile importer (parser_docker)."""

from blueprint.linearizer import linearize
from blueprint.parser_docker import logical_lines, parse, split_instruction
from blueprint.serializer import serialize
from blueprint.utils import NodeIdFactory


def pairs(graph):
    return [(n.keyword, n.arguments) for n in graph.nodes.values()]


class TestLogicalLines:

    def test_continuation_crosses_instruction_boundary(self):
        assert logical_lines("FROM a\\\nRUN b") == ["FROM a RUN b"]

    def test_multiple_continuations(self):
        text = "RUN apt-get update && \\\n    apt-get install -y curl \\\n    && rm -rf /var/lib/apt/lists/*\nUSER app"
        assert logical_lines(text) == [
            "RUN apt-get update &&  apt-get install -y curl  && rm -rf /var/lib/apt/lists/*",
            "USER app",
        ]

    def test_comments_inside_continuation_are_dropped(self):
        assert logical_lines("RUN a \\\n# note\n  b") == ["RUN a  b"]

    def test_trailing_continuation_is_kept(self):
        assert logical_lines("FROM x:1\nRUN a \\") == ["FROM x:1", "RUN a  "]

    def test_split_instruction(self):
        assert split_instruction("run\t echo hi ") == ("RUN", "echo hi")
        assert split_instruction("RUN") is None


class TestParse:

    def test_continuation_yields_single_node(self):
        graph = parse("FROM a\\\nRUN b")
        assert pairs(graph) == [("FROM", "a RUN b")]
        assert graph.edges == {}

    def test_chain_and_positions(self, id_factory):
        text = "FROM node:14\n\n# comment\nRUN echo hi\nFOO bar\nCMD [\"node\", \"a.js\"]"
        graph = parse(text, id_factory=id_factory)
        nodes = list(graph.nodes.values())

        assert pairs(graph) == [("FROM", "node:14"), ("RUN", "echo hi"), ("CMD", '["node", "a.js"]')]
        assert [n.position.y for n in nodes] == [100, 300, 700]
        assert all(n.position.x == 250 for n in nodes)

        edges = list(graph.edges.values())
        assert [(e.source, e.target) for e in edges] == [
            (nodes[0].id, nodes[1].id),
            (nodes[1].id, nodes[2].id),
        ]
        assert edges[0].id == f"e{nodes[0].id}-{nodes[1].id}"

    def test_lines_without_arguments_are_skipped(self):
        graph = parse("FROM alpine:3\nRUN\nUSER app")
        assert pairs(graph) == [("FROM", "alpine:3"), ("USER", "app")]
        assert len(graph.edges) == 1

    def test_maintainer_becomes_label(self):
        graph = parse("FROM alpine:3\nMAINTAINER Jane <jane@example.com>")
        node = list(graph.nodes.values())[1]
        assert (node.keyword, node.label) == ("LABEL", "LABEL")
        assert node.arguments == "Jane <jane@example.com>"

    def test_multi_stage_from(self):
        graph = parse("FROM node:14 AS build\nFROM nginx:alpine\nFROM node:14 as lower")
        labels = [(n.label, n.advanced) for n in graph.nodes.values()]
        assert labels == [("FROM (multi-stage)", True), ("FROM", False), ("FROM", False)]
        assert all(n.keyword == "FROM" for n in graph.nodes.values())

    def test_lowercase_instructions(self):
        graph = parse("from alpine:3\nrun echo hi")
        assert pairs(graph) == [("FROM", "alpine:3"), ("RUN", "echo hi")]

    def test_description_comes_from_catalog(self):
        node = list(parse("WORKDIR /app").nodes.values())[0]
        assert node.description == "Set the working directory"
        assert node.label == "WORKDIR"

    def test_ids_unique_across_rapid_calls(self):
        factory = NodeIdFactory()
        seen = set()
        for _ in range(50):
            seen.update(parse("FROM a:1\nRUN b\nRUN c", id_factory=factory).nodes)
        assert len(seen) == 150

    def test_ids_unique_with_default_factories(self):
        first = parse("FROM a:1\nRUN b")
        second = parse("FROM a:1\nRUN b")
        assert not set(first.nodes) & set(second.nodes)

    def test_empty_and_comment_only(self):
        assert parse("").nodes == {}
        assert parse("# nothing\n\n   \n").nodes == {}

    def test_round_trip(self):
        text = "FROM node:14\nWORKDIR /app\nCOPY --from=build /app/dist .\nRUN npm ci\nCMD [\"node\", \"x.js\"]"
        assert serialize(linearize(parse(text))) == text
