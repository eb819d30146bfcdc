"""Tests for the editor session state."""

import pytest

from blueprint.editor_state import DEFAULT_FILE_NAME, EMPTY_PLACEHOLDER, EditorState
from blueprint.errors import UnknownInstructionError, UnknownTemplateError
from blueprint.explainer import MSG_CANNOT_BUILD


@pytest.fixture
def state(id_factory):
    return EditorState(id_factory=id_factory)


class TestEdits:

    def test_add_instruction_stacks_and_links(self, state):
        first = state.add_instruction("FROM")
        second = state.add_instruction("RUN")
        assert (first.position.x, first.position.y) == (250, 100)
        assert (second.position.x, second.position.y) == (250, 300)
        assert [(e.source, e.target) for e in state.graph.edges.values()] == [(first.id, second.id)]
        assert state.dockerfile_content() == (
            "FROM node:14-alpine\nRUN apt-get update && apt-get install -y curl"
        )

    def test_add_instruction_by_catalog_id(self, state):
        node = state.add_instruction("copy_from")
        assert node.label == "COPY --from"
        assert node.keyword == "COPY"
        assert node.arguments == "--from=build-stage /app/dist /usr/share/nginx/html"

    def test_add_instruction_unknown(self, state):
        with pytest.raises(UnknownInstructionError):
            state.add_instruction("BOGUS")

    def test_update_node(self, state):
        node = state.add_instruction("FROM")
        updated = state.update_node(node.id, arguments="python:3.12-slim")
        assert updated.arguments == "python:3.12-slim"
        assert state.dockerfile_content() == "FROM python:3.12-slim"

    def test_update_node_rejects_unknown_fields(self, state):
        node = state.add_instruction("FROM")
        with pytest.raises(TypeError):
            state.update_node(node.id, position=None)

    def test_update_unknown_node_is_ignored(self, state):
        assert state.update_node("nope", arguments="x") is None

    def test_cleared_arguments_drop_the_line(self, state):
        state.add_instruction("FROM")
        run = state.add_instruction("RUN")
        state.update_node(run.id, arguments="")
        assert state.dockerfile_content() == "FROM node:14-alpine"

    def test_move_node(self, state):
        node = state.add_instruction("FROM")
        moved = state.move_node(node.id, 10, 20)
        assert (moved.position.x, moved.position.y) == (10, 20)
        assert state.move_node("nope", 1, 2) is None

    def test_remove_node_drops_incident_edges(self, state):
        a = state.add_instruction("FROM")
        b = state.add_instruction("WORKDIR")
        c = state.add_instruction("RUN")
        assert state.remove_node(b.id)
        assert state.graph.edges == {}
        assert list(state.graph.nodes) == [a.id, c.id]
        assert not state.remove_node(b.id)


class TestEdges:

    def test_duplicate_connect_is_ignored(self, state):
        a = state.add_instruction("FROM")
        b = state.add_instruction("RUN")
        edge = state.connect(a.id, b.id)
        assert edge.id == f"e{a.id}-{b.id}"
        assert len(state.graph.edges) == 1

    def test_connect_reorders_output(self, state):
        run = state.add_instruction("RUN")
        frm = state.add_instruction("FROM")
        state.remove_edge(f"e{run.id}-{frm.id}")
        state.connect(frm.id, run.id)
        assert state.dockerfile_content().splitlines()[0] == "FROM node:14-alpine"

    def test_cycle_falls_back_to_creation_order(self, state):
        a = state.add_instruction("WORKDIR")
        b = state.add_instruction("FROM")
        state.connect(b.id, a.id)
        assert state.dockerfile_content() == "WORKDIR /app\nFROM node:14-alpine"

    def test_remove_edge(self, state):
        a = state.add_instruction("FROM")
        b = state.add_instruction("RUN")
        assert state.remove_edge(f"e{a.id}-{b.id}")
        assert not state.remove_edge("missing")


class TestWholeState:

    def test_empty_state(self, state):
        assert state.dockerfile_content() == ""
        assert state.export_text() == EMPTY_PLACEHOLDER
        assert state.validation() is None
        assert state.file_name == DEFAULT_FILE_NAME

    def test_import_replaces_graph(self, state):
        state.add_instruction("FROM")
        state.set_file_name("Old.dockerfile")
        graph = state.import_dockerfile("FROM python:3.12\nRUN pip install x", file_name="api.Dockerfile")
        assert state.graph is graph
        assert state.file_name == "api.Dockerfile"
        assert state.dockerfile_content() == "FROM python:3.12\nRUN pip install x"

    def test_reset(self, state):
        state.add_instruction("FROM")
        state.set_file_name("x")
        state.reset()
        assert state.graph.nodes == {}
        assert state.file_name == DEFAULT_FILE_NAME

    def test_load_template(self, state):
        state.add_instruction("RUN")
        state.load_template("nginx")
        assert state.dockerfile_content().splitlines()[0] == "FROM nginx:alpine"
        assert len(state.graph.nodes) == 4

    def test_load_unknown_template_keeps_state(self, state):
        node = state.add_instruction("FROM")
        with pytest.raises(UnknownTemplateError):
            state.load_template("nope")
        assert list(state.graph.nodes) == [node.id]

    def test_validation(self, state):
        state.add_instruction("RUN")
        report = state.validation()
        assert not report.result.is_valid
        assert report.buildability == MSG_CANNOT_BUILD

    def test_validation_uses_custom_rules(self, id_factory):
        state = EditorState(id_factory=id_factory,
                            custom_rules=[{"id": "ALPINE", "pattern": "alpine", "message": "alpine image"}])
        state.add_instruction("FROM")
        assert "Line 1: alpine image" in state.validation().result.suggestions
