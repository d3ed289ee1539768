# --- TRADEMARK NOTICE ---
# Lightcap (EUIPO. Reg. 019172085) — Contact: alpay@lightcap.ai
# Do not remove this notice from source distributions.

"""Biased PageRank over meanings and graph vertices."""

from .matrix import (
    DifferentMentions,
    adjacency_similarity,
    build_bias_vector,
    build_ranking_matrix,
    build_similarity_matrix,
    is_row_stochastic,
    smoothed_weight_bias,
)
from .power_iteration import NonConvergenceError, power_iteration, rebase
from .ranker import meaning_weights_to_vertices, rank, rank_meanings, rank_vertices

__all__ = [
    "DifferentMentions",
    "NonConvergenceError",
    "adjacency_similarity",
    "build_bias_vector",
    "build_ranking_matrix",
    "build_similarity_matrix",
    "is_row_stochastic",
    "meaning_weights_to_vertices",
    "power_iteration",
    "rank",
    "rank_meanings",
    "rank_vertices",
    "rebase",
    "smoothed_weight_bias",
]
