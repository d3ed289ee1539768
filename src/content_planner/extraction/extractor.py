# --- TRADEMARK NOTICE ---
# Lightcap (EUIPO. Reg. 019172085) — Contact: alpay@lightcap.ai
# Do not remove this notice from source distributions.

"""Stochastic hill-climbing extraction of dense connected subgraphs."""

from __future__ import annotations

import time
from typing import Iterable, List, Optional, Sequence, Set

from ..logging import get_logger
from ..structures import SemanticGraph, State, Subgraph
from .explorer import Explorer
from .policy import SelectionPolicy

LOGGER = get_logger(__name__)


class SubgraphExtractor:
    """Grow subgraphs from start states while their value strictly improves.

    The value of a vertex set ``V`` is ``lambda * sum(w) - cost * |V| +
    cost * |V_total|`` where ``cost`` defaults to the mean vertex weight, so
    a vertex pays off only when its weight beats the average.
    """

    def __init__(
        self,
        explorer: Explorer,
        start_policy: SelectionPolicy,
        expand_policy: SelectionPolicy,
        lambda_: float = 1.0,
        max_num_extractions: int = 1000,
    ) -> None:
        if max_num_extractions < 0:
            raise ValueError("max_num_extractions must be non-negative")
        self.explorer = explorer
        self.start_policy = start_policy
        self.expand_policy = expand_policy
        self.lambda_ = float(lambda_)
        self.max_num_extractions = int(max_num_extractions)
        self.visited_starts: Set[State] = set()

    def value(self, vertices: Iterable[str], graph: SemanticGraph, cost: float) -> float:
        vertices = list(vertices)
        total = sum(graph.weight(vertex) for vertex in vertices)
        return self.lambda_ * total - cost * len(vertices) + cost * len(graph)

    def extract_one(self, graph: SemanticGraph, cost: Optional[float] = None) -> Optional[Subgraph]:
        """Run one extraction; ``None`` when no start state is available."""
        if cost is None:
            cost = graph.average_weight()
        return self._extract(graph, cost, self.explorer.start_states(graph))

    def _extract(self, graph: SemanticGraph, cost: float, starts: Sequence[State]) -> Optional[Subgraph]:
        if self.start_policy.is_deterministic:
            starts = [state for state in starts if state not in self.visited_starts]
        if not starts:
            return None

        values = [self.value(state.vertices, graph, cost) for state in starts]
        index = self.start_policy.select(values)
        state, best = starts[index], values[index]
        if self.start_policy.is_deterministic:
            self.visited_starts.add(state)

        steps = 0
        while True:
            expansions = self.explorer.next_states(state, graph)
            if not expansions:
                break
            values = [self.value(candidate.vertices, graph, cost) for candidate in expansions]
            index = self.expand_policy.select(values)
            if values[index] <= best:
                break
            state, best = expansions[index], values[index]
            steps += 1
        LOGGER.debug("Extracted %d vertices from %s after %d expansions", len(state.vertices), state.root, steps)
        return Subgraph.from_state(state, graph, best)

    def extract_many(self, graph: SemanticGraph, target_count: int) -> List[Subgraph]:
        """Extract up to ``target_count`` distinct, connected subgraphs.

        Results are ordered by decreasing average vertex weight. Fewer results
        are returned when the attempt cap is reached first.
        """

        if target_count <= 0 or len(graph) == 0:
            return []
        started = time.perf_counter()
        self.visited_starts.clear()
        cost = graph.average_weight()
        starts = self.explorer.start_states(graph)

        results: List[Subgraph] = []
        seen: Set[frozenset] = set()
        attempts = invalid = duplicates = 0
        while len(results) < target_count and attempts < self.max_num_extractions:
            attempts += 1
            subgraph = self._extract(graph, cost, starts)
            if subgraph is None:
                invalid += 1
                # deterministic restarts exhausted every start state
                break
            if not subgraph.edges or not subgraph.is_connected:
                invalid += 1
                continue
            if subgraph.vertices in seen:
                duplicates += 1
                continue
            seen.add(subgraph.vertices)
            results.append(subgraph)

        results.sort(key=lambda subgraph: subgraph.average_weight, reverse=True)
        LOGGER.info(
            "Extracted %d/%d subgraphs in %d attempts (%d invalid, %d duplicates) in %.3fs",
            len(results),
            target_count,
            attempts,
            invalid,
            duplicates,
            time.perf_counter() - started,
        )
        return results
