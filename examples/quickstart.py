"""Minimal quickstart script for the content planner.

The script builds a two-sentence semantic graph, ranks its vertices, and
prints the non-redundant subgraphs selected for generation.
"""

import json

from content_planner import PlannerConfig, SemanticGraph, plan
from content_planner.logging import configure_logging
from content_planner.utils import SimilarityTable

SIMILARITIES = SimilarityTable(
    [
        {"a": "say-01", "b": "announce-01", "value": 0.7},
        {"a": "john", "b": "mary", "value": 0.5},
    ]
)


def build_graph() -> SemanticGraph:
    graph = SemanticGraph()
    vertices = [
        ("s", "say-01", 0.8, "sent-1"),
        ("j", "john", 0.6, "sent-1"),
        ("g", "go-02", 0.5, "sent-1"),
        ("n", "-", 0.1, "sent-1"),
        ("a", "announce-01", 0.7, "sent-2"),
        ("m", "mary", 0.4, "sent-2"),
        ("p", "park", 0.3, "sent-2"),
    ]
    for vertex, meaning, weight, source in vertices:
        graph.add_vertex(vertex, weight=weight, meaning=meaning, sources=[source])
    graph.add_edge("s", "j", ":ARG0")
    graph.add_edge("s", "g", ":ARG1")
    graph.add_edge("g", "j", ":ARG0")
    graph.add_edge("g", "n", ":polarity")
    graph.add_edge("a", "m", ":ARG0")
    graph.add_edge("a", "p", ":location")
    graph.add_edge("m", "j", ":accompanier")
    return graph


def main() -> None:
    configure_logging("info")
    config = PlannerConfig(seed=0)
    config.extraction.max_num_extractions = 50
    result = plan(build_graph(), SIMILARITIES, config)
    print(json.dumps(result.to_dict(), indent=2))


if __name__ == "__main__":
    main()
