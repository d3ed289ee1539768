# --- TRADEMARK NOTICE ---
# Lightcap (EUIPO. Reg. 019172085) — Contact: alpay@lightcap.ai
# Do not remove this notice from source distributions.

"""Rank meanings and graph vertices with biased PageRank.

Both rankings follow the "Biased LexRank" recipe (Otterbacher et al., 2009):
build a biased stochastic matrix over the items and take its stationary
distribution as the ranking.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np

from ..config import RankingConfig
from ..logging import get_logger
from ..structures import BiasFunction, Candidate, PairFilter, SemanticGraph, SimilarityFunction
from .matrix import DifferentMentions, adjacency_similarity, build_ranking_matrix, smoothed_weight_bias
from .power_iteration import DEFAULT_MAX_ITERATIONS, power_iteration, rebase

LOGGER = get_logger(__name__)


def rank(
    items: Sequence[str],
    bias: BiasFunction,
    similarity: SimilarityFunction,
    *,
    pair_filter: Optional[PairFilter] = None,
    sim_threshold: float = 0.0,
    damping: float = 0.2,
    symmetric: bool = True,
    make_positive: bool = True,
    stopping_threshold: float = 1e-4,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    rebased: bool = False,
) -> np.ndarray:
    """Return a ranking vector aligned with ``items``."""

    items = list(items)
    if not items:
        return np.zeros(0, dtype=np.float64)
    matrix = build_ranking_matrix(
        items,
        bias,
        similarity,
        pair_filter=pair_filter,
        sim_threshold=sim_threshold,
        damping=damping,
        symmetric=symmetric,
        make_positive=make_positive,
    )
    scores = power_iteration(matrix, stopping_threshold, max_iterations, labels=items)
    return rebase(scores) if rebased else scores


def rank_meanings(
    candidates: Iterable[Candidate],
    bias: BiasFunction,
    similarity: SimilarityFunction,
    config: Optional[RankingConfig] = None,
) -> Dict[str, float]:
    """Rank the distinct meanings of ``candidates``.

    Meanings competing for exactly the same mentions are never compared, so
    alternative senses of one word do not reinforce each other.
    """

    config = config or RankingConfig()
    candidates = list(candidates)
    references: List[str] = list(dict.fromkeys(candidate.meaning for candidate in candidates))
    if not references:
        return {}
    scores = rank(
        references,
        bias,
        similarity,
        pair_filter=DifferentMentions(candidates),
        sim_threshold=config.sim_threshold,
        damping=config.damping_meanings,
        stopping_threshold=config.stopping_threshold,
        max_iterations=config.max_iterations,
        rebased=config.rebase,
    )
    LOGGER.info("Ranked %d meanings", len(references))
    return {reference: float(score) for reference, score in zip(references, scores)}


def rank_vertices(graph: SemanticGraph, config: Optional[RankingConfig] = None) -> Dict[str, float]:
    """Rank the vertices of ``graph`` biased by their current weights.

    Returns a new weight map; the graph itself is left untouched.
    """

    config = config or RankingConfig()
    vertices = graph.vertices()
    if not vertices:
        return {}
    scores = rank(
        vertices,
        smoothed_weight_bias(graph, vertices),
        adjacency_similarity(graph),
        damping=config.damping_vertices,
        stopping_threshold=config.stopping_threshold,
        max_iterations=config.max_iterations,
        rebased=config.rebase,
    )
    LOGGER.info("Ranked %d vertices", len(vertices))
    return {vertex: float(score) for vertex, score in zip(vertices, scores)}


def meaning_weights_to_vertices(graph: SemanticGraph, meaning_scores: Dict[str, float]) -> Dict[str, float]:
    """Project meaning scores onto the vertices that carry those meanings."""

    weights = graph.weights()
    for vertex in graph.vertices():
        meaning = graph.meaning(vertex)
        if meaning is not None and meaning in meaning_scores:
            weights[vertex] = meaning_scores[meaning]
    return weights
