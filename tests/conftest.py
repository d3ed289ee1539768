from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from content_planner.config import PlannerConfig
from content_planner.structures import SemanticGraph


@pytest.fixture
def config() -> PlannerConfig:
    return PlannerConfig(seed=7)


@pytest.fixture
def path_graph() -> SemanticGraph:
    """A - B - C - D with equal weights."""
    graph = SemanticGraph()
    for vertex in "ABCD":
        graph.add_vertex(vertex, weight=1.0, meaning=f"m:{vertex}")
    graph.add_edge("A", "B", ":ARG0")
    graph.add_edge("B", "C", ":ARG1")
    graph.add_edge("C", "D", ":ARG0")
    return graph


@pytest.fixture
def amr_graph() -> SemanticGraph:
    """"John did not say he would go", plus a tall modifier on John."""
    graph = SemanticGraph()
    graph.add_vertex("s", weight=0.9, meaning="say-01")
    graph.add_vertex("j", weight=0.7, meaning="john")
    graph.add_vertex("g", weight=0.6, meaning="go-02")
    graph.add_vertex("n", weight=0.1, meaning="-")
    graph.add_vertex("t", weight=0.2, meaning="tall")
    graph.add_edge("s", "j", ":ARG0")
    graph.add_edge("s", "g", ":ARG1")
    graph.add_edge("g", "j", ":ARG0")
    graph.add_edge("g", "n", ":polarity")
    graph.add_edge("j", "t", ":mod")
    return graph


@pytest.fixture
def graph_document() -> dict[str, Any]:
    return {
        "vertices": [
            {"id": "s", "meaning": "say-01", "weight": 0.9, "sources": ["sent-1"]},
            {"id": "j", "meaning": "john", "weight": 0.7, "sources": ["sent-1"]},
            {"id": "g", "meaning": "go-02", "weight": 0.6, "sources": ["sent-1"]},
            {"id": "m", "meaning": "mary", "weight": 0.4, "sources": ["sent-2"]},
            {"id": "r", "meaning": "run-01", "weight": 0.5, "sources": ["sent-2"]},
        ],
        "edges": [
            {"source": "s", "target": "j", "role": ":ARG0"},
            {"source": "s", "target": "g", "role": ":ARG1"},
            {"source": "g", "target": "j", "role": ":ARG0"},
            {"source": "r", "target": "m", "role": ":ARG0"},
            {"source": "r", "target": "j", "role": ":accompanier"},
        ],
        "meaning_weights": {"say-01": 0.5, "john": 0.3, "go-02": 0.2},
        "similarities": [
            {"a": "say-01", "b": "go-02", "value": 0.4},
            {"a": "john", "b": "mary", "value": 0.6},
        ],
    }
