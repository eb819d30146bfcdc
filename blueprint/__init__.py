# blueprint/__init__.py
"""
Core package of Dockerfile Blueprint.

Expose the catalog, graph model, ordering, parsing and validation modules:
    from blueprint import parser_docker, linearizer, serializer, rules_engine
"""

from . import (catalog, errors, graph_model, linearizer, serializer, parser_docker,
               rules_engine, explainer, templates, report_generator, editor_state, utils)
from .catalog import find_spec_by_id, find_spec_by_keyword
from .explainer import analyze_buildability
from .linearizer import linearize
from .parser_docker import parse
from .rules_engine import validate
from .serializer import serialize

__version__ = "1.0.0"

__all__ = [
    "catalog",
    "errors",
    "graph_model",
    "linearizer",
    "serializer",
    "parser_docker",
    "rules_engine",
    "explainer",
    "templates",
    "report_generator",
    "editor_state",
    "utils",
    "analyze_buildability",
    "find_spec_by_id",
    "find_spec_by_keyword",
    "linearize",
    "parse",
    "serialize",
    "validate",
]
