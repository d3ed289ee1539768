"""Greedy removal of near-duplicate subgraphs."""

from __future__ import annotations

from typing import Dict, List, Sequence

from .logging import get_logger
from .similarity import CanonicalTree, TreeEditSimilarity
from .structures import Subgraph

LOGGER = get_logger(__name__)


class RedundancyRemover:
    """Keep high-value subgraphs that are not too similar to one already kept."""

    def __init__(self, tree_similarity: TreeEditSimilarity, threshold: float = 0.8) -> None:
        if not 0.0 <= threshold <= 1.0:
            raise ValueError("threshold must lie in [0, 1]")
        self.tree_similarity = tree_similarity
        self.threshold = float(threshold)

    def filter(self, subgraphs: Sequence[Subgraph], keep_count: int) -> List[Subgraph]:
        if keep_count <= 0:
            return []
        ranked = sorted(subgraphs, key=lambda subgraph: subgraph.value, reverse=True)
        trees: Dict[int, CanonicalTree] = {}
        kept: List[Subgraph] = []
        dropped = 0
        for candidate in ranked:
            if len(kept) >= keep_count:
                break
            tree = trees.setdefault(id(candidate), CanonicalTree.from_subgraph(candidate))
            redundant = False
            for other in kept:
                score = self.tree_similarity.similarity(tree, trees[id(other)])
                if score > self.threshold:
                    redundant = True
                    break
            if redundant:
                dropped += 1
                continue
            kept.append(candidate)
        LOGGER.info("Kept %d of %d subgraphs (%d redundant)", len(kept), len(subgraphs), dropped)
        return kept
