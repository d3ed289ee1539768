# --- TRADEMARK NOTICE ---
# Lightcap (EUIPO. Reg. 019172085) — Contact: alpay@lightcap.ai
# Do not remove this notice from source distributions.

import pytest

from content_planner.extraction import ExpansionPolicy, Explorer, ExplorerKind, Neighbour, finite_verbs
from content_planner.semantics import AMRSemantics
from content_planner.structures import SemanticGraph, State


def test_core_argument_requires_target_when_source_selected(amr_graph) -> None:
    semantics = AMRSemantics()
    assert semantics.is_required("s", "s", "j", ":ARG0", amr_graph)
    assert not semantics.is_required("j", "s", "j", ":ARG0", amr_graph)
    assert semantics.is_required("j", "j", "s", ":ARG0-of", amr_graph) is False
    assert semantics.is_required("s", "j", "s", ":ARG0-of", amr_graph)


def test_modifier_requires_its_head(amr_graph) -> None:
    semantics = AMRSemantics()
    assert semantics.is_required("t", "j", "t", ":mod", amr_graph)
    assert not semantics.is_required("j", "j", "t", ":mod", amr_graph)


def test_polarity_binds_both_endpoints(amr_graph) -> None:
    semantics = AMRSemantics()
    assert semantics.is_required("g", "g", "n", ":polarity", amr_graph)
    assert semantics.is_required("n", "g", "n", ":polarity", amr_graph)


def test_interrogative_target_is_required() -> None:
    graph = SemanticGraph()
    graph.add_vertex("g", meaning="go-02")
    graph.add_vertex("u", meaning="amr-unknown")
    graph.add_vertex("p", meaning="park")
    graph.add_edge("g", "u", ":location")
    graph.add_edge("g", "p", ":destination")
    semantics = AMRSemantics()
    assert semantics.is_required("g", "g", "u", ":location", graph)
    assert not semantics.is_required("g", "g", "p", ":destination", graph)


def test_selected_vertex_must_be_an_endpoint(amr_graph) -> None:
    with pytest.raises(ValueError):
        AMRSemantics().is_required("t", "s", "j", ":ARG0", amr_graph)


def test_required_closure_follows_arguments(amr_graph) -> None:
    explorer = Explorer(ExplorerKind.REQUIREMENTS, ExpansionPolicy.ALL)
    assert explorer.required_closure("s", "document", amr_graph) == {"s", "j", "g", "n"}
    assert explorer.required_closure("t", "document", amr_graph) == {"t", "j"}
    assert explorer.required_closure("n", "document", amr_graph) == {"n", "g", "j"}


def test_single_vertex_closure_is_the_seed(amr_graph) -> None:
    explorer = Explorer(ExplorerKind.SINGLE_VERTEX, ExpansionPolicy.ALL)
    assert explorer.required_closure("s", "document", amr_graph) == {"s"}


def test_neighbours_report_edge_direction(amr_graph) -> None:
    neighbours = Explorer.neighbours("j", amr_graph)
    assert Neighbour("s", ":ARG0", "s", "j") in neighbours
    assert Neighbour("t", ":mod", "j", "t") in neighbours
    assert len(neighbours) == 3


def _two_sentence_graph() -> SemanticGraph:
    graph = SemanticGraph()
    graph.add_vertex("s", weight=1.0, sources=["sent-1"])
    graph.add_vertex("a", weight=1.0, sources=["sent-2"])
    graph.add_vertex("l", weight=1.0, sources=["sent-2"])
    graph.add_vertex("b", weight=1.0, sources=["sent-1"])
    graph.add_edge("s", "a", ":ARG0")
    graph.add_edge("s", "l", ":location")
    graph.add_edge("s", "b", ":time")
    return graph


def _multi_source_amr_graph() -> SemanticGraph:
    """The say/go graph spread over three sentences, plus a cross-sentence time."""
    graph = SemanticGraph()
    graph.add_vertex("s", weight=0.9, meaning="say-01", sources=["sent-1"])
    graph.add_vertex("j", weight=0.7, meaning="john", sources=["sent-2"])
    graph.add_vertex("g", weight=0.6, meaning="go-02", sources=["sent-1", "sent-3"])
    graph.add_vertex("n", weight=0.1, meaning="-", sources=["sent-3"])
    graph.add_vertex("t", weight=0.2, meaning="tall", sources=["sent-2"])
    graph.add_vertex("d", weight=0.3, meaning="date-entity", sources=["sent-3"])
    graph.add_edge("s", "j", ":ARG0")
    graph.add_edge("s", "g", ":ARG1")
    graph.add_edge("g", "j", ":ARG0")
    graph.add_edge("g", "n", ":polarity")
    graph.add_edge("j", "t", ":mod")
    graph.add_edge("s", "d", ":time")
    return graph


@pytest.mark.parametrize("expansion", list(ExpansionPolicy))
def test_closure_is_complete(expansion) -> None:
    graph = _multi_source_amr_graph()
    explorer = Explorer(ExplorerKind.REQUIREMENTS, expansion)
    semantics = explorer.semantics
    for seed in graph.vertices():
        for source in sorted(graph.sources(seed)):
            closure = explorer.required_closure(seed, source, graph)
            assert seed in closure
            for vertex in closure:
                for neighbour in explorer.neighbours(vertex, graph):
                    if semantics.is_required(vertex, neighbour.source, neighbour.target, neighbour.role, graph):
                        assert neighbour.vertex in closure


@pytest.mark.parametrize(
    ("expansion", "expected"),
    [
        (ExpansionPolicy.SAME_SOURCE, {"b"}),
        (ExpansionPolicy.NON_CORE_ONLY, {"b", "l"}),
        (ExpansionPolicy.ALL, {"a", "b", "l"}),
    ],
)
def test_expansion_policies_admit_neighbours(expansion, expected) -> None:
    graph = _two_sentence_graph()
    explorer = Explorer(ExplorerKind.SINGLE_VERTEX, expansion)
    state = State("s", "sent-1")
    admitted = {n.vertex for n in explorer.neighbours("s", graph) if explorer.is_allowed(n, state, graph)}
    assert admitted == expected


@pytest.mark.parametrize("expansion", list(ExpansionPolicy))
def test_closure_pulls_required_vertices_from_other_sources(expansion) -> None:
    graph = _two_sentence_graph()
    explorer = Explorer(ExplorerKind.REQUIREMENTS, expansion)
    assert explorer.required_closure("s", "sent-1", graph) == {"s", "a"}


def test_start_states_cover_every_vertex_and_source() -> None:
    graph = SemanticGraph()
    graph.add_vertex("x", sources=["sent-1", "sent-2"])
    graph.add_vertex("y", sources=["sent-1"])
    graph.add_edge("x", "y", ":ARG0")
    explorer = Explorer(ExplorerKind.REQUIREMENTS, ExpansionPolicy.ALL)
    states = explorer.start_states(graph)
    assert [(state.root, state.source) for state in states] == [("x", "sent-1"), ("x", "sent-2"), ("y", "sent-1")]
    assert states[0].vertices == {"x", "y"}
    assert states == explorer.start_states(graph)


def test_start_vertices_predicate_restricts_seeds(amr_graph) -> None:
    explorer = Explorer(start_vertices=lambda vertex, graph: graph.meaning(vertex).endswith("-01"))
    assert [state.root for state in explorer.start_states(amr_graph)] == ["s"]


def test_next_states_add_one_closure_each(path_graph) -> None:
    explorer = Explorer(ExplorerKind.SINGLE_VERTEX, ExpansionPolicy.ALL)
    states = explorer.next_states(State("B", "document"), path_graph)
    assert sorted(sorted(state.vertices) for state in states) == [["A", "B"], ["B", "C"]]
    assert all(state.root == "B" for state in states)


def test_finite_verbs_predicate_selects_flagged_vertices(amr_graph) -> None:
    amr_graph.add_vertex("s", weight=0.9, finite_verb=True)
    assert amr_graph.is_finite_verb("s")
    assert not amr_graph.is_finite_verb("g")
    explorer = Explorer(start_vertices=finite_verbs)
    assert [state.root for state in explorer.start_states(amr_graph)] == ["s"]
