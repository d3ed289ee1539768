# --- TRADEMARK NOTICE ---
# Lightcap (EUIPO. Reg. 019172085) — Contact: alpay@lightcap.ai
# Do not remove this notice from source distributions.

"""Tree edit distance (Zhang & Shasha, 1989) between extracted subgraphs.

Insertions and deletions cost one. Replacing node ``x`` by ``y`` costs
``1 - delta * [role(x) == role(y)] - (1 - delta) * sim(x, y)``, so identical
labels are free when ``delta`` is zero.
"""

from __future__ import annotations

from typing import Dict, List, Tuple, Union

import numpy as np

from ..logging import get_logger
from ..structures import SimilarityFunction, Subgraph
from .tree import CanonicalTree

LOGGER = get_logger(__name__)

TreeLike = Union[CanonicalTree, Subgraph]


def _postorder_index(tree: CanonicalTree) -> Tuple[List[int], np.ndarray, List[int]]:
    """Return postorder node ids, 1-based leftmost-leaf table and keyroots."""
    order = tree.postorder()
    position = {node: i + 1 for i, node in enumerate(order)}
    leftmost = np.zeros(len(order) + 1, dtype=np.int64)
    for node in order:
        current = node
        while tree.nodes[current].children:
            current = tree.nodes[current].children[0]
        leftmost[position[node]] = position[current]
    last_with_leftmost: Dict[int, int] = {}
    for i in range(1, len(order) + 1):
        last_with_leftmost[int(leftmost[i])] = i
    return order, leftmost, sorted(last_with_leftmost.values())


def tree_edit_distance(first: CanonicalTree, second: CanonicalTree, replace_cost: np.ndarray) -> float:
    """Ordered tree edit distance with unit insert/delete costs.

    ``replace_cost[i, j]`` is the cost of relabelling the ``i``-th node of
    ``first`` into the ``j``-th node of ``second``, both in postorder.
    """

    n, m = len(first), len(second)
    if n == 0 or m == 0:
        return float(n + m)
    if replace_cost.shape != (n, m):
        msg = f"replace_cost must have shape {(n, m)}, got {replace_cost.shape}"
        raise ValueError(msg)

    _, left_a, keyroots_a = _postorder_index(first)
    _, left_b, keyroots_b = _postorder_index(second)
    distances = np.zeros((n + 1, m + 1), dtype=np.float64)

    for i in keyroots_a:
        for j in keyroots_b:
            li, lj = int(left_a[i]), int(left_b[j])
            forest = np.zeros((i - li + 2, j - lj + 2), dtype=np.float64)
            forest[:, 0] = np.arange(i - li + 2)
            forest[0, :] = np.arange(j - lj + 2)
            for x in range(li, i + 1):
                dx = x - li + 1
                for y in range(lj, j + 1):
                    dy = y - lj + 1
                    delete = forest[dx - 1, dy] + 1.0
                    insert = forest[dx, dy - 1] + 1.0
                    if left_a[x] == li and left_b[y] == lj:
                        change = forest[dx - 1, dy - 1] + replace_cost[x - 1, y - 1]
                        forest[dx, dy] = min(delete, insert, change)
                        distances[x, y] = forest[dx, dy]
                    else:
                        change = forest[left_a[x] - li, left_b[y] - lj] + distances[x, y]
                        forest[dx, dy] = min(delete, insert, change)
    return float(distances[n, m])


class TreeEditSimilarity:
    """Similarity in ``[0, 1]`` between subgraphs based on tree edit distance."""

    def __init__(self, similarity: SimilarityFunction, delta: float = 0.0) -> None:
        if not 0.0 <= delta <= 1.0:
            raise ValueError("delta must lie in [0, 1]")
        self.oracle = similarity
        self.delta = float(delta)
        self._cache: Dict[Tuple[str, str], float] = {}

    def label_similarity(self, first: str, second: str) -> float:
        if first == second:
            return 1.0
        key = (first, second) if first <= second else (second, first)
        if key not in self._cache:
            value = self.oracle(*key)
            self._cache[key] = 0.0 if value is None else float(np.clip(value, 0.0, 1.0))
        return self._cache[key]

    def replace_costs(self, first: CanonicalTree, second: CanonicalTree) -> np.ndarray:
        nodes_a = [first.nodes[i] for i in first.postorder()]
        nodes_b = [second.nodes[j] for j in second.postorder()]
        costs = np.empty((len(nodes_a), len(nodes_b)), dtype=np.float64)
        for i, x in enumerate(nodes_a):
            for j, y in enumerate(nodes_b):
                same_role = 1.0 if x.role == y.role else 0.0
                sim = self.label_similarity(x.label, y.label)
                costs[i, j] = 1.0 - self.delta * same_role - (1.0 - self.delta) * sim
        return costs

    def distance(self, first: TreeLike, second: TreeLike) -> float:
        tree_a, tree_b = _as_tree(first), _as_tree(second)
        return tree_edit_distance(tree_a, tree_b, self.replace_costs(tree_a, tree_b))

    def similarity(self, first: TreeLike, second: TreeLike) -> float:
        tree_a, tree_b = _as_tree(first), _as_tree(second)
        size = len(tree_a) + len(tree_b)
        if size == 0:
            return 1.0
        distance = tree_edit_distance(tree_a, tree_b, self.replace_costs(tree_a, tree_b))
        LOGGER.debug("Tree edit distance %.3f over %d nodes", distance, size)
        return 1.0 - min(1.0, distance / size)

    __call__ = similarity


def _as_tree(value: TreeLike) -> CanonicalTree:
    if isinstance(value, CanonicalTree):
        return value
    return CanonicalTree.from_subgraph(value)
