"""Role semantics used to keep extracted subgraphs well formed.

Each role maps to the endpoint that must already be selected for the opposite
endpoint to become *required*. For instance ``:ARG0`` maps to ``SOURCE``: once
a predicate is selected its agent has to come along, whereas selecting the
agent alone does not pull in the predicate. Inverse roles (``:ARG0-of``) flip
the direction.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet, Optional

from .structures import SemanticGraph

INVERSE_SUFFIX = "-of"
INSTANCE = ":instance"
INTERROGATIVE_MARKERS: FrozenSet[str] = frozenset({"amr-unknown", "amr-choice"})


class Endpoint(str, Enum):
    SOURCE = "source"
    TARGET = "target"
    BOTH = "both"


CORE_ARGUMENTS = tuple(f":ARG{i}" for i in range(6)) + tuple(f":op{i}" for i in range(1, 11))
DATE_ROLES = (
    ":calendar",
    ":century",
    ":day",
    ":dayperiod",
    ":decade",
    ":era",
    ":month",
    ":quarter",
    ":season",
    ":timezone",
    ":weekday",
    ":year",
    ":year2",
)


def _build_requirements() -> Dict[str, Endpoint]:
    table: Dict[str, Endpoint] = {INSTANCE: Endpoint.SOURCE}
    for role in CORE_ARGUMENTS + (":ord", ":poss"):
        table[role] = Endpoint.SOURCE
        table[role + INVERSE_SUFFIX] = Endpoint.TARGET
    # polarity and quantities bind head and marker in both directions
    for role in (":polarity", ":quant"):
        table[role] = Endpoint.BOTH
        table[role + INVERSE_SUFFIX] = Endpoint.BOTH
    for role in (":domain", ":mode", ":unit", ":value") + DATE_ROLES:
        table[role] = Endpoint.SOURCE
    # a modifier is meaningless without the head it modifies
    table[":mod"] = Endpoint.TARGET
    return table


ROLE_REQUIREMENTS: Dict[str, Endpoint] = _build_requirements()
CORE_ROLES: FrozenSet[str] = frozenset(CORE_ARGUMENTS) | frozenset(r + INVERSE_SUFFIX for r in CORE_ARGUMENTS)


class AMRSemantics:
    """Requiredness rules for AMR-style semantic graphs."""

    def __init__(self, requirements: Optional[Dict[str, Endpoint]] = None) -> None:
        self.requirements = dict(ROLE_REQUIREMENTS if requirements is None else requirements)

    def is_core(self, role: str) -> bool:
        return role in CORE_ROLES

    def is_required(self, selected: str, source: str, target: str, role: str, graph: SemanticGraph) -> bool:
        """Return whether the endpoint opposite to ``selected`` must be included.

        ``selected`` is the vertex already in the subgraph and must be either
        ``source`` or ``target`` of the edge labelled ``role``.
        """

        source_selected = selected == source
        target_selected = selected == target
        if not (source_selected or target_selected):
            msg = f"{selected!r} is not an endpoint of {source!r} -{role}-> {target!r}"
            raise ValueError(msg)

        endpoint = self.requirements.get(role)
        if endpoint is Endpoint.SOURCE:
            return source_selected
        if endpoint is Endpoint.TARGET:
            return target_selected
        if endpoint is Endpoint.BOTH:
            return True
        return source_selected and self.is_interrogative(target, graph)

    @staticmethod
    def is_interrogative(vertex: str, graph: SemanticGraph) -> bool:
        """Interrogative and choice markers, either as meaning or through an instance edge."""
        if graph.meaning(vertex) in INTERROGATIVE_MARKERS or vertex in INTERROGATIVE_MARKERS:
            return True
        return any(role == INSTANCE and target in INTERROGATIVE_MARKERS for _, target, role in graph.out_edges(vertex))
