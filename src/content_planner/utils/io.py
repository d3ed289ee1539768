"""I/O helpers for graph documents and JSON results."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

import yaml

from ..logging import get_logger
from ..structures import Candidate, MeaningStore, SemanticGraph

LOGGER = get_logger(__name__)


def save_json(path: Path, data: Any, *, indent: int = 2) -> None:
    """Write ``data`` to ``path`` as JSON with UTF-8 encoding."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as stream:
        json.dump(data, stream, indent=indent, ensure_ascii=False)
        stream.write("\n")


def load_yaml_or_json(path: Path) -> Dict[str, Any]:
    """Load a mapping from YAML or JSON depending on the file suffix."""
    with path.open("r", encoding="utf-8") as stream:
        if path.suffix.lower() in {".yaml", ".yml"}:
            loaded = yaml.safe_load(stream) or {}
        else:
            loaded = json.load(stream)
    if not isinstance(loaded, Mapping):
        msg = f"Expected mapping at root of {path}"
        raise TypeError(msg)
    return dict(loaded)


class SimilarityTable:
    """Symmetric similarity oracle backed by a table of known pairs."""

    def __init__(self, entries: Iterable[Mapping[str, Any]] = ()) -> None:
        self._values: Dict[frozenset, float] = {}
        for entry in entries:
            self.set(str(entry["a"]), str(entry["b"]), float(entry["value"]))

    def __len__(self) -> int:
        return len(self._values)

    def set(self, first: str, second: str, value: float) -> None:
        self._values[frozenset((first, second))] = value

    def __call__(self, first: str, second: str) -> Optional[float]:
        if first == second:
            return 1.0
        return self._values.get(frozenset((first, second)))


@dataclass
class GraphDocument:
    """A semantic graph together with the oracles it was shipped with."""

    graph: SemanticGraph
    similarity: SimilarityTable
    meanings: MeaningStore
    meaning_weights: Dict[str, float] = field(default_factory=dict)
    candidates: List[Candidate] = field(default_factory=list)

    def meaning_bias(self, reference: str) -> float:
        return self.meaning_weights.get(reference, 0.0)


def parse_graph_document(data: Mapping[str, Any]) -> GraphDocument:
    """Build a :class:`GraphDocument` from its JSON mapping."""

    graph = SemanticGraph()
    meanings = MeaningStore()
    candidates: List[Candidate] = []
    for entry in data.get("vertices", []):
        if "id" not in entry:
            msg = f"Vertex entry without an id: {entry!r}"
            raise ValueError(msg)
        vertex = str(entry["id"])
        meaning = entry.get("meaning")
        if meaning is not None:
            meaning = str(meaning)
            meanings.intern(meaning, label=str(entry.get("label", "")), is_named_entity=bool(entry.get("named_entity")))
            candidates.append(Candidate(meaning, str(entry.get("mention", vertex))))
        graph.add_vertex(
            vertex,
            weight=float(entry.get("weight", 0.0)),
            meaning=meaning,
            sources=[str(source) for source in entry.get("sources", [])],
            finite_verb=bool(entry.get("finite_verb", False)),
        )
    for entry in data.get("edges", []):
        missing = {"source", "target", "role"} - set(entry)
        if missing:
            msg = f"Edge entry missing {', '.join(sorted(missing))}: {entry!r}"
            raise ValueError(msg)
        graph.add_edge(str(entry["source"]), str(entry["target"]), str(entry["role"]))

    weights = {str(key): float(value) for key, value in (data.get("meaning_weights") or {}).items()}
    table = SimilarityTable(data.get("similarities", []))
    LOGGER.info(
        "Loaded graph with %d vertices, %d meanings and %d similarity pairs",
        len(graph),
        len(meanings),
        len(table),
    )
    return GraphDocument(graph, table, meanings, weights, candidates)


def load_graph_document(path: Path) -> GraphDocument:
    return parse_graph_document(load_yaml_or_json(Path(path)))
