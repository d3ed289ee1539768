# --- TRADEMARK NOTICE ---
# Lightcap (EUIPO. Reg. 019172085) — Contact: alpay@lightcap.ai
# Do not remove this notice from source distributions.

"""Biased row-stochastic matrices for personalised PageRank.

A ranking matrix mixes two random walks over the items being ranked:

1. **Reset walk.** With probability ``d`` the walker jumps to an item drawn
   from the bias distribution ``L`` (globally important items get visited
   regardless of how similar they are to anything else).
2. **Similarity walk.** With probability ``1 - d`` the walker moves to an item
   in proportion to the similarity between the two items.

``R[u, v] = d * L[v] + (1 - d) * X[u, v]``. Zero cells are then replaced by a
small pseudocount so the chain is irreducible and aperiodic, which is what the
Perron-Frobenius theorem needs for a unique stationary distribution.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, FrozenSet, Iterable, Optional, Sequence

import numpy as np

from ..logging import get_logger
from ..structures import BiasFunction, Candidate, PairFilter, SemanticGraph, SimilarityFunction

LOGGER = get_logger(__name__)

EPSILON = float(np.finfo(np.float64).eps)
PSEUDOCOUNT_DIVISOR = 100.0


def _normalise_rows(matrix: np.ndarray) -> np.ndarray:
    sums = matrix.sum(axis=1, keepdims=True)
    return matrix / np.where(sums > 0.0, sums, 1.0)


def _fill_zeros(matrix: np.ndarray) -> np.ndarray:
    means = matrix.mean(axis=1, keepdims=True)
    alpha = np.where(means > 0.0, means / PSEUDOCOUNT_DIVISOR, 1.0 / PSEUDOCOUNT_DIVISOR)
    return np.where(matrix == 0.0, alpha, matrix)


def is_row_stochastic(matrix: np.ndarray) -> bool:
    """Return whether ``matrix`` is square, non-negative and row-normalised."""
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        return False
    n = matrix.shape[0]
    if n == 0:
        return True
    if not np.all(np.isfinite(matrix)) or np.any(matrix < 0.0):
        return False
    return bool(np.all(np.abs(matrix.sum(axis=1) - 1.0) < 2.0 * EPSILON * n))


def build_bias_vector(items: Sequence[str], bias: BiasFunction) -> np.ndarray:
    """Apply ``bias`` to every item and normalise the result into a distribution."""

    values = np.array([float(bias(item)) for item in items], dtype=np.float64)
    invalid = ~np.isfinite(values) | (values < 0.0)
    if invalid.any():
        LOGGER.warning("Clamped %d negative or undefined bias values to 0", int(invalid.sum()))
        values = np.where(invalid, 0.0, values)
    total = values.sum()
    if total > 0.0:
        return values / total
    if len(items):
        LOGGER.warning("Bias is zero for all %d items, falling back to a uniform bias", len(items))
        return np.full(len(items), 1.0 / len(items))
    return values


def build_similarity_matrix(
    items: Sequence[str],
    similarity: SimilarityFunction,
    pair_filter: Optional[PairFilter] = None,
    sim_threshold: float = 0.0,
    symmetric: bool = True,
) -> np.ndarray:
    """Return the raw non-negative similarity matrix ``X`` (not normalised).

    ``X[i, j]`` holds ``similarity(items[j], items[i])``. When ``symmetric`` is
    set each unordered pair is evaluated once and mirrored.
    """

    n = len(items)
    matrix = np.zeros((n, n), dtype=np.float64)
    evaluated = defined = negative = 0
    for i in range(n):
        for j in range(i + 1 if symmetric else 0, n):
            if i == j:
                continue
            first, second = items[j], items[i]
            if pair_filter is not None and not pair_filter(first, second):
                continue
            evaluated += 1
            value = similarity(first, second)
            if value is None or not np.isfinite(value):
                continue
            defined += 1
            if value < 0.0:
                negative += 1
                continue
            if value < sim_threshold:
                continue
            matrix[i, j] = value
            if symmetric:
                matrix[j, i] = value

    total_pairs = n * (n - 1) // 2 if symmetric else n * (n - 1)
    LOGGER.info(
        "Similarity evaluated for %d of %d pairs, defined for %d, negative for %d",
        evaluated,
        total_pairs,
        defined,
        negative,
    )
    if evaluated > defined:
        LOGGER.warning("Similarity undefined for %d pairs, treated as 0", evaluated - defined)
    return matrix


def build_ranking_matrix(
    items: Sequence[str],
    bias: BiasFunction,
    similarity: SimilarityFunction,
    pair_filter: Optional[PairFilter] = None,
    sim_threshold: float = 0.0,
    damping: float = 0.2,
    symmetric: bool = True,
    make_positive: bool = True,
) -> np.ndarray:
    """Create a read-only row-stochastic matrix to rank ``items``."""

    if not 0.0 <= damping <= 1.0:
        raise ValueError("damping must lie in [0, 1]")
    items = list(items)
    n = len(items)
    if len(set(items)) != n:
        raise ValueError("Item identifiers must be unique within a ranking call")
    if n == 0:
        return np.zeros((0, 0), dtype=np.float64)

    LOGGER.info("Creating ranking matrix for %d items", n)
    bias_vector = build_bias_vector(items, bias)
    raw = build_similarity_matrix(items, similarity, pair_filter, sim_threshold, symmetric)
    zero_rows = ~raw.any(axis=1)
    if zero_rows.any():
        LOGGER.warning("%d of %d items have no similarity with any other item", int(zero_rows.sum()), n)
    transitions = _normalise_rows(raw)

    ranking = damping * bias_vector[np.newaxis, :] + (1.0 - damping) * transitions
    if make_positive:
        ranking = _fill_zeros(ranking)
    # rows still empty (no bias, no similarity) turn into uniform jumps
    empty = ranking.sum(axis=1) <= 0.0
    ranking[empty] = 1.0 / n
    ranking = _normalise_rows(ranking)

    assert np.all(ranking >= 0.0), "ranking matrix has negative entries"
    assert np.all(np.abs(ranking.sum(axis=1) - 1.0) < 2.0 * EPSILON * n), "ranking matrix is not row-normalised"
    ranking.setflags(write=False)
    return ranking


class DifferentMentions:
    """Pair filter accepting meanings that are not candidates of exactly the same mentions."""

    def __init__(self, candidates: Iterable[Candidate]) -> None:
        mentions: Dict[str, set] = defaultdict(set)
        for candidate in candidates:
            mentions[candidate.meaning].add(candidate.mention)
        self.mentions: Dict[str, FrozenSet[str]] = {meaning: frozenset(ids) for meaning, ids in mentions.items()}

    def __call__(self, first: str, second: str) -> bool:
        return self.mentions.get(first, frozenset()) != self.mentions.get(second, frozenset())


def adjacency_similarity(graph: SemanticGraph) -> SimilarityFunction:
    """Similarity of 1 between vertices joined by an edge in either direction, 0 otherwise."""

    def similarity(first: str, second: str) -> Optional[float]:
        return 1.0 if graph.are_adjacent(first, second) else 0.0

    return similarity


def smoothed_weight_bias(graph: SemanticGraph, vertices: Sequence[str]) -> BiasFunction:
    """Bias on vertex weights with additive smoothing so no vertex gets a zero bias."""

    weights = {vertex: graph.weight(vertex) for vertex in vertices}
    negative = sum(1 for weight in weights.values() if weight < 0.0)
    if negative:
        LOGGER.warning("Clamped %d negative vertex weights to 0", negative)
        weights = {vertex: max(0.0, weight) for vertex, weight in weights.items()}
    alpha = (sum(weights.values()) / len(weights)) / PSEUDOCOUNT_DIVISOR if weights else 0.0

    def bias(vertex: str) -> float:
        return weights[vertex] + alpha

    return bias
