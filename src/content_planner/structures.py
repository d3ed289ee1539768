"""Semantic graphs, meanings and the subgraphs extracted from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

import networkx as nx

DEFAULT_SOURCE = "document"

BiasFunction = Callable[[str], float]
SimilarityFunction = Callable[[str, str], Optional[float]]
PairFilter = Callable[[str, str], bool]


@dataclass(frozen=True)
class Meaning:
    """A word sense, a named entity or any other referent of a mention."""

    id: int
    reference: str
    label: str = ""
    is_named_entity: bool = False

    def __str__(self) -> str:
        return f"{self.reference}-{self.label}" if self.label else self.reference


class MeaningStore:
    """Arena of meanings indexed by generated integer ids."""

    def __init__(self) -> None:
        self._meanings: List[Meaning] = []
        self._by_reference: Dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._meanings)

    def __contains__(self, reference: object) -> bool:
        return reference in self._by_reference

    def __iter__(self) -> Iterator[Meaning]:
        return iter(self._meanings)

    def intern(self, reference: str, label: str = "", is_named_entity: bool = False) -> Meaning:
        """Return the meaning for ``reference``, creating it on first use."""
        index = self._by_reference.get(reference)
        if index is not None:
            return self._meanings[index]
        meaning = Meaning(id=len(self._meanings), reference=reference, label=label, is_named_entity=is_named_entity)
        self._meanings.append(meaning)
        self._by_reference[reference] = meaning.id
        return meaning

    def get(self, reference: str) -> Meaning:
        if reference not in self._by_reference:
            raise KeyError(f"Unknown meaning reference: {reference}")
        return self._meanings[self._by_reference[reference]]

    def by_id(self, meaning_id: int) -> Meaning:
        return self._meanings[meaning_id]


@dataclass(frozen=True)
class Candidate:
    """A candidate meaning for one mention of the text."""

    meaning: str
    mention: str


class SemanticGraph:
    """Directed multigraph of semantic vertices connected by labelled roles.

    Each vertex carries a weight, an optional meaning reference and the set of
    sources (sentences, documents) it was found in.
    """

    def __init__(self, graph: Optional[nx.MultiDiGraph] = None) -> None:
        self._graph = graph if graph is not None else nx.MultiDiGraph()

    # Building --------------------------------------------------------------------
    def add_vertex(
        self,
        vertex: str,
        *,
        weight: float = 0.0,
        meaning: Optional[str] = None,
        sources: Iterable[str] = (),
        finite_verb: bool = False,
    ) -> None:
        tags = frozenset(sources) or frozenset([DEFAULT_SOURCE])
        if vertex in self._graph:
            data = self._graph.nodes[vertex]
            data["sources"] = data["sources"] | tags
            data["weight"] = float(weight)
            data["finite_verb"] = bool(data.get("finite_verb")) or finite_verb
            if meaning is not None:
                data["meaning"] = meaning
            return
        self._graph.add_node(vertex, weight=float(weight), meaning=meaning, sources=tags, finite_verb=finite_verb)

    def add_edge(self, source: str, target: str, role: str) -> None:
        for vertex in (source, target):
            if vertex not in self._graph:
                self.add_vertex(vertex)
        self._graph.add_edge(source, target, role=role)

    def with_weights(self, weights: Mapping[str, float]) -> "SemanticGraph":
        """Return a copy of this graph whose vertex weights are taken from ``weights``."""
        graph = self._graph.copy()
        for vertex, weight in weights.items():
            if vertex in graph:
                graph.nodes[vertex]["weight"] = float(weight)
        return SemanticGraph(graph)

    # Querying --------------------------------------------------------------------
    @property
    def nx_graph(self) -> nx.MultiDiGraph:
        return self._graph

    def __contains__(self, vertex: object) -> bool:
        return vertex in self._graph

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def vertices(self) -> List[str]:
        """Return the vertex ids in sorted order."""
        return sorted(self._graph.nodes)

    def edges(self) -> List[Tuple[str, str, str]]:
        return sorted((u, v, data["role"]) for u, v, data in self._graph.edges(data=True))

    def weight(self, vertex: str) -> float:
        return float(self._graph.nodes[vertex]["weight"])

    def weights(self) -> Dict[str, float]:
        return {vertex: float(data["weight"]) for vertex, data in self._graph.nodes(data=True)}

    def meaning(self, vertex: str) -> Optional[str]:
        return self._graph.nodes[vertex]["meaning"]

    def sources(self, vertex: str) -> frozenset:
        return self._graph.nodes[vertex]["sources"]

    def is_finite_verb(self, vertex: str) -> bool:
        return bool(self._graph.nodes[vertex].get("finite_verb", False))

    def out_edges(self, vertex: str) -> List[Tuple[str, str, str]]:
        return [(u, v, data["role"]) for u, v, data in self._graph.out_edges(vertex, data=True)]

    def in_edges(self, vertex: str) -> List[Tuple[str, str, str]]:
        return [(u, v, data["role"]) for u, v, data in self._graph.in_edges(vertex, data=True)]

    def incident_edges(self, vertex: str) -> List[Tuple[str, str, str]]:
        return self.out_edges(vertex) + self.in_edges(vertex)

    def are_adjacent(self, first: str, second: str) -> bool:
        return self._graph.has_edge(first, second) or self._graph.has_edge(second, first)

    def average_weight(self) -> float:
        weights = [float(w) for _, w in self._graph.nodes(data="weight")]
        return sum(weights) / len(weights) if weights else 0.0


@dataclass(frozen=True)
class State:
    """Candidate subgraph grown during extraction."""

    root: str
    source: str
    vertices: frozenset = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        # the root always belongs to its own state
        object.__setattr__(self, "vertices", frozenset(self.vertices) | {self.root})

    def extend(self, vertices: Iterable[str]) -> "State":
        return State(self.root, self.source, self.vertices | frozenset(vertices))


@dataclass(frozen=True)
class Subgraph:
    """Induced subgraph of a :class:`SemanticGraph` with the value it was extracted with."""

    base: SemanticGraph = field(compare=False, repr=False)
    root: str
    vertices: frozenset
    value: float = 0.0

    @classmethod
    def from_state(cls, state: State, base: SemanticGraph, value: float) -> "Subgraph":
        return cls(base=base, root=state.root, vertices=frozenset(state.vertices), value=float(value))

    def view(self) -> nx.MultiDiGraph:
        """Read-only induced subgraph view over the base graph."""
        return self.base.nx_graph.subgraph(self.vertices)

    @property
    def edges(self) -> List[Tuple[str, str, str]]:
        return sorted((u, v, data["role"]) for u, v, data in self.view().edges(data=True))

    @property
    def is_connected(self) -> bool:
        if not self.vertices:
            return False
        return nx.is_weakly_connected(self.view())

    @property
    def average_weight(self) -> float:
        if not self.vertices:
            return 0.0
        return sum(self.base.weight(v) for v in self.vertices) / len(self.vertices)

    def to_dict(self) -> Dict[str, object]:
        return {
            "root": self.root,
            "value": self.value,
            "average_weight": self.average_weight,
            "vertices": [
                {"id": v, "meaning": self.base.meaning(v), "weight": self.base.weight(v)}
                for v in sorted(self.vertices)
            ],
            "edges": [{"source": u, "target": v, "role": role} for u, v, role in self.edges],
        }
