# --- TRADEMARK NOTICE ---
# Lightcap (EUIPO. Reg. 019172085) — Contact: alpay@lightcap.ai
# Do not remove this notice from source distributions.

import pytest

from content_planner.config import RedundancyConfig
from content_planner.redundancy import RedundancyRemover
from content_planner.similarity import CanonicalTree, TreeEditSimilarity, tree_edit_distance
from content_planner.structures import SemanticGraph, Subgraph


def _no_similarity(first: str, second: str):
    return None


def _tree(shape: tuple) -> CanonicalTree:
    """Build a tree from nested ``(label, [children])`` tuples."""
    tree = CanonicalTree()
    stack = [(shape, -1)]
    while stack:
        (label, children), parent = stack.pop()
        index = tree.add(label, "role", None, parent)
        for child in reversed(children):
            stack.append((child, index))
    return tree


def _subgraph(graph: SemanticGraph, vertices: set[str], value: float = 0.0) -> Subgraph:
    return Subgraph(graph, sorted(vertices)[0], frozenset(vertices), value)


def test_multi_parent_vertices_are_replicated(amr_graph) -> None:
    tree = CanonicalTree.from_subgraph(_subgraph(amr_graph, {"s", "j", "g"}))
    assert len(tree) == 4
    root = tree.nodes[0]
    assert root.label == "say-01"
    assert [tree.nodes[i].role for i in root.children] == [":ARG0", ":ARG1"]
    assert tree.labels() == ["john", "john", "go-02", "say-01"]


def test_several_roots_are_joined() -> None:
    graph = SemanticGraph()
    graph.add_edge("a", "c", ":ARG0")
    graph.add_edge("b", "c", ":ARG1")
    tree = CanonicalTree.from_subgraph(_subgraph(graph, {"a", "b", "c"}))
    assert tree.nodes[0].label == "root"
    assert len(tree) == 5


def test_cycles_are_broken() -> None:
    graph = SemanticGraph()
    graph.add_edge("x", "y", ":ARG0")
    graph.add_edge("y", "x", ":ARG1")
    tree = CanonicalTree.from_subgraph(_subgraph(graph, {"x", "y"}))
    assert tree.nodes[0].label == "root"
    assert tree.labels() == ["y", "x", "root"]


def test_shared_descendants_are_unfolded_once() -> None:
    graph = SemanticGraph()
    for i in range(10):
        graph.add_edge(f"v{i}", f"a{i}", ":ARG0")
        graph.add_edge(f"v{i}", f"b{i}", ":ARG1")
        graph.add_edge(f"a{i}", f"v{i + 1}", ":ARG0")
        graph.add_edge(f"b{i}", f"v{i + 1}", ":ARG0")
    subgraph = _subgraph(graph, set(graph.vertices()))
    tree = CanonicalTree.from_subgraph(subgraph)
    assert len(subgraph.edges) == 40
    assert len(tree) == len(subgraph.edges) + 1
    copies = [node for node in tree.nodes if node.vertex == "v10"]
    assert len(copies) == 2
    assert sum(1 for node in tree.nodes if node.vertex == "v5" and node.children) == 1


def test_zhang_shasha_reference_distance() -> None:
    first = _tree(("f", [("d", [("a", []), ("c", [("b", [])])]), ("e", [])]))
    second = _tree(("f", [("c", [("d", [("a", []), ("b", [])])]), ("e", [])]))
    costs = TreeEditSimilarity(_no_similarity).replace_costs(first, second)
    assert tree_edit_distance(first, second, costs) == pytest.approx(2.0)


def test_distance_counts_insertions() -> None:
    first = _tree(("a", [("b", []), ("c", [])]))
    second = _tree(("a", [("c", [])]))
    similarity = TreeEditSimilarity(_no_similarity)
    assert similarity.distance(first, second) == pytest.approx(1.0)
    assert similarity.similarity(first, second) == pytest.approx(1.0 - 1.0 / 5.0)


def test_distance_to_empty_tree_is_its_size() -> None:
    tree = _tree(("a", [("b", [])]))
    assert TreeEditSimilarity(_no_similarity).distance(tree, CanonicalTree()) == 2.0


def test_similarity_uses_the_oracle_for_relabelling() -> None:
    first = _tree(("cat", []))
    second = _tree(("dog", []))
    oracle = {("cat", "dog"): 0.6}
    similarity = TreeEditSimilarity(lambda a, b: oracle.get((a, b)))
    assert similarity.similarity(first, second) == pytest.approx(1.0 - 0.4 / 2.0)
    assert similarity.similarity(second, first) == pytest.approx(1.0 - 0.4 / 2.0)
    assert TreeEditSimilarity(_no_similarity).similarity(first, second) == pytest.approx(0.5)


def test_delta_rewards_matching_roles() -> None:
    first = _tree(("cat", []))
    second = _tree(("dog", []))
    similarity = TreeEditSimilarity(_no_similarity, delta=1.0)
    assert similarity.similarity(first, second) == pytest.approx(1.0)


def test_tree_similarity_is_symmetric_and_bounded(amr_graph) -> None:
    similarity = TreeEditSimilarity(lambda a, b: 0.3 if {a, b} == {"john", "tall"} else None)
    subgraphs = [
        _subgraph(amr_graph, {"s", "j", "g", "n"}),
        _subgraph(amr_graph, {"j", "t"}),
        _subgraph(amr_graph, {"g", "j", "n"}),
    ]
    for a in subgraphs:
        assert similarity.similarity(a, a) == pytest.approx(1.0)
        for b in subgraphs:
            value = similarity.similarity(a, b)
            assert 0.0 <= value <= 1.0
            assert value == pytest.approx(similarity.similarity(b, a))


def test_identical_subgraphs_are_redundant(amr_graph) -> None:
    remover = RedundancyRemover(TreeEditSimilarity(_no_similarity), RedundancyConfig().threshold)
    first = _subgraph(amr_graph, {"s", "j", "g"}, value=2.0)
    second = _subgraph(amr_graph, {"s", "j", "g"}, value=1.0)
    kept = remover.filter([second, first], keep_count=5)
    assert kept == [first]
    assert kept[0].value == 2.0


def test_redundancy_removal_is_idempotent(amr_graph) -> None:
    remover = RedundancyRemover(TreeEditSimilarity(_no_similarity), threshold=0.8)
    subgraphs = [
        _subgraph(amr_graph, {"s", "j", "g", "n"}, value=3.0),
        _subgraph(amr_graph, {"s", "j", "g", "n"}, value=2.5),
        _subgraph(amr_graph, {"j", "t"}, value=2.0),
        _subgraph(amr_graph, {"g", "j", "n"}, value=1.0),
    ]
    once = remover.filter(subgraphs, keep_count=10)
    assert remover.filter(once, keep_count=10) == once
    assert [subgraph.value for subgraph in once] == sorted((s.value for s in once), reverse=True)


def test_keep_count_caps_the_selection(amr_graph) -> None:
    remover = RedundancyRemover(TreeEditSimilarity(_no_similarity), threshold=0.8)
    subgraphs = [
        _subgraph(amr_graph, {"s", "j", "g", "n"}, value=3.0),
        _subgraph(amr_graph, {"j", "t"}, value=2.0),
    ]
    assert remover.filter(subgraphs, keep_count=1) == [subgraphs[0]]
    assert remover.filter(subgraphs, keep_count=0) == []
