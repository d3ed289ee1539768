"""Content planner package."""

from .config import PlannerConfig, load_config
from .extraction import Explorer, SelectionPolicy, SubgraphExtractor
from .pipelines import PlanResult, plan
from .ranking import NonConvergenceError, build_ranking_matrix, power_iteration, rank_meanings, rank_vertices
from .redundancy import RedundancyRemover
from .semantics import AMRSemantics
from .similarity import CanonicalTree, TreeEditSimilarity
from .structures import Candidate, MeaningStore, SemanticGraph, State, Subgraph

__all__ = [
    "AMRSemantics",
    "Candidate",
    "CanonicalTree",
    "Explorer",
    "MeaningStore",
    "NonConvergenceError",
    "PlanResult",
    "PlannerConfig",
    "RedundancyRemover",
    "SelectionPolicy",
    "SemanticGraph",
    "State",
    "Subgraph",
    "SubgraphExtractor",
    "TreeEditSimilarity",
    "build_ranking_matrix",
    "load_config",
    "plan",
    "power_iteration",
    "rank_meanings",
    "rank_vertices",
]

__version__ = "0.1.0"
