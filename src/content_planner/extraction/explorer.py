# --- TRADEMARK NOTICE ---
# Lightcap (EUIPO. Reg. 019172085) — Contact: alpay@lightcap.ai
# Do not remove this notice from source distributions.

"""Graph exploration policies for subgraph extraction.

An explorer proposes the states a search may start from and the states that
extend a given one. Every proposed vertex is expanded to its *closure*: the
vertices that must come with it so the subgraph has no dangling argument or
modifier.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, FrozenSet, List, Optional, Set

from ..semantics import AMRSemantics
from ..structures import SemanticGraph, State

StartPredicate = Callable[[str, SemanticGraph], bool]


def finite_verbs(vertex: str, graph: SemanticGraph) -> bool:
    """Start predicate accepting vertices mentioned as finite verbs."""
    return graph.is_finite_verb(vertex)


class ExplorerKind(str, Enum):
    SINGLE_VERTEX = "single_vertex"
    REQUIREMENTS = "requirements"


class ExpansionPolicy(str, Enum):
    SAME_SOURCE = "same_source"
    NON_CORE_ONLY = "non_core_only"
    ALL = "all"


@dataclass(frozen=True, order=True)
class Neighbour:
    vertex: str
    role: str
    source: str
    target: str


class Explorer:
    """Proposes start states and expansions for the extraction search."""

    def __init__(
        self,
        kind: ExplorerKind = ExplorerKind.REQUIREMENTS,
        expansion: ExpansionPolicy = ExpansionPolicy.NON_CORE_ONLY,
        semantics: Optional[AMRSemantics] = None,
        start_vertices: Optional[StartPredicate] = None,
    ) -> None:
        self.kind = ExplorerKind(kind)
        self.expansion = ExpansionPolicy(expansion)
        self.semantics = semantics or AMRSemantics()
        self.start_vertices = start_vertices

    # Neighbourhood ---------------------------------------------------------------
    @staticmethod
    def neighbours(vertex: str, graph: SemanticGraph) -> Set[Neighbour]:
        result: Set[Neighbour] = set()
        for source, target, role in graph.incident_edges(vertex):
            other = target if source == vertex else source
            result.add(Neighbour(other, role, source, target))
        return result

    def _admits(self, neighbour: Neighbour, source: str, graph: SemanticGraph) -> bool:
        if self.expansion is ExpansionPolicy.ALL:
            return True
        same_source = source in graph.sources(neighbour.vertex)
        if self.expansion is ExpansionPolicy.SAME_SOURCE:
            return same_source
        # neighbours pointed to by non-core relations may come from other sources
        return same_source or (not self.semantics.is_core(neighbour.role) and neighbour.target == neighbour.vertex)

    def is_allowed(self, neighbour: Neighbour, state: State, graph: SemanticGraph) -> bool:
        return neighbour.vertex not in state.vertices and self._admits(neighbour, state.source, graph)

    # Closure ---------------------------------------------------------------------
    def required_closure(self, seed: str, source: str, graph: SemanticGraph) -> FrozenSet[str]:
        """Vertices that must accompany ``seed`` for the subgraph to stay well formed.

        Required neighbours are pulled in whatever their source; ``source`` only
        restricts which neighbours later expansions may grow towards.
        """
        if self.kind is ExplorerKind.SINGLE_VERTEX:
            return frozenset([seed])

        closure = {seed}
        frontier = [seed]
        while frontier:
            added: List[str] = []
            for vertex in frontier:
                for neighbour in sorted(self.neighbours(vertex, graph)):
                    if neighbour.vertex in closure:
                        continue
                    if not self.semantics.is_required(vertex, neighbour.source, neighbour.target, neighbour.role, graph):
                        continue
                    closure.add(neighbour.vertex)
                    added.append(neighbour.vertex)
            frontier = added
        return frozenset(closure)

    # States ----------------------------------------------------------------------
    def start_states(self, graph: SemanticGraph) -> List[State]:
        states: List[State] = []
        seen: Set[State] = set()
        for vertex in graph.vertices():
            if self.start_vertices is not None and not self.start_vertices(vertex, graph):
                continue
            for source in sorted(graph.sources(vertex)):
                state = State(vertex, source, self.required_closure(vertex, source, graph))
                if state not in seen:
                    seen.add(state)
                    states.append(state)
        return states

    def next_states(self, state: State, graph: SemanticGraph) -> List[State]:
        states: List[State] = []
        seen: Set[FrozenSet[str]] = set()
        for vertex in sorted(state.vertices):
            for neighbour in sorted(self.neighbours(vertex, graph)):
                if not self.is_allowed(neighbour, state, graph):
                    continue
                candidate = state.extend(self.required_closure(neighbour.vertex, state.source, graph))
                if candidate.vertices not in seen:
                    seen.add(candidate.vertices)
                    states.append(candidate)
        return states
