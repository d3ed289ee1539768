# --- TRADEMARK NOTICE ---
# Lightcap (EUIPO. Reg. 019172085) — Contact: alpay@lightcap.ai
# Do not remove this notice from source distributions.

"""Subgraph extraction: exploration, selection and hill climbing."""

from .explorer import ExpansionPolicy, Explorer, ExplorerKind, Neighbour, finite_verbs
from .extractor import SubgraphExtractor
from .policy import PolicyKind, SelectionPolicy, make_policy

__all__ = [
    "ExpansionPolicy",
    "Explorer",
    "ExplorerKind",
    "Neighbour",
    "PolicyKind",
    "SelectionPolicy",
    "SubgraphExtractor",
    "finite_verbs",
    "make_policy",
]
