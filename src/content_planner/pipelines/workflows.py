"""High-level workflow chaining ranking, extraction and redundancy removal."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

import numpy as np

from ..config import ExtractionConfig, PlannerConfig
from ..extraction import Explorer, SubgraphExtractor, finite_verbs, make_policy
from ..extraction.explorer import StartPredicate
from ..logging import get_logger
from ..ranking import meaning_weights_to_vertices, rank_meanings, rank_vertices
from ..redundancy import RedundancyRemover
from ..similarity import TreeEditSimilarity
from ..structures import BiasFunction, Candidate, SemanticGraph, SimilarityFunction, Subgraph
from ..utils.random import ensure_rng, seed_everything

LOGGER = get_logger(__name__)


@dataclass
class PlanResult:
    weights: Dict[str, float]
    extracted: List[Subgraph] = field(default_factory=list)
    selected: List[Subgraph] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            "weights": dict(sorted(self.weights.items())),
            "num_extracted": len(self.extracted),
            "subgraphs": [subgraph.to_dict() for subgraph in self.selected],
        }


def build_extractor(
    config: ExtractionConfig,
    rng: Optional[np.random.Generator] = None,
    start_vertices: Optional[StartPredicate] = None,
) -> SubgraphExtractor:
    """Instantiate a :class:`SubgraphExtractor` from ``config``.

    An explicit ``start_vertices`` predicate takes precedence over
    ``config.start_from_verbs``.
    """
    rng = ensure_rng(rng)
    if start_vertices is None and config.start_from_verbs:
        start_vertices = finite_verbs
    explorer = Explorer(config.explorer, config.expansion, start_vertices=start_vertices)
    return SubgraphExtractor(
        explorer,
        make_policy(config.start_policy, config.temperature, rng),
        make_policy(config.expand_policy, config.temperature, rng),
        lambda_=config.lambda_,
        max_num_extractions=config.max_num_extractions,
    )


def rank_graph(
    graph: SemanticGraph,
    similarity: SimilarityFunction,
    config: Optional[PlannerConfig] = None,
    *,
    candidates: Optional[Iterable[Candidate]] = None,
    meaning_bias: Optional[BiasFunction] = None,
) -> Dict[str, float]:
    """Return vertex weights, optionally seeded by a ranking of meanings."""

    config = config or PlannerConfig()
    if candidates is not None and meaning_bias is not None:
        scores = rank_meanings(candidates, meaning_bias, similarity, config.ranking)
        graph = graph.with_weights(meaning_weights_to_vertices(graph, scores))
    return rank_vertices(graph, config.ranking)


def plan(
    graph: SemanticGraph,
    similarity: SimilarityFunction,
    config: Optional[PlannerConfig] = None,
    *,
    candidates: Optional[Iterable[Candidate]] = None,
    meaning_bias: Optional[BiasFunction] = None,
    start_vertices: Optional[StartPredicate] = None,
) -> PlanResult:
    """Rank ``graph``, extract subgraphs and keep the non-redundant ones."""

    config = config or PlannerConfig()
    seed = seed_everything(config.seed)
    LOGGER.info("Planning over %d vertices with seed %d", len(graph), seed)

    weights = rank_graph(graph, similarity, config, candidates=candidates, meaning_bias=meaning_bias)
    ranked = graph.with_weights(weights)

    extractor = build_extractor(config.extraction, ensure_rng(seed), start_vertices)
    extracted = extractor.extract_many(ranked, config.extraction.num_subgraphs_extract)

    remover = RedundancyRemover(
        TreeEditSimilarity(similarity, config.redundancy.tree_edit_delta),
        config.redundancy.threshold,
    )
    selected = remover.filter(extracted, config.redundancy.num_subgraphs)
    return PlanResult(weights, extracted, selected)
