"""Utility helpers shared across the content planner."""

from .io import GraphDocument, SimilarityTable, load_graph_document, load_yaml_or_json, parse_graph_document, save_json
from .random import deterministic_hash, ensure_rng, resolve_seed, seed_everything

__all__ = [
    "GraphDocument",
    "SimilarityTable",
    "deterministic_hash",
    "ensure_rng",
    "load_graph_document",
    "load_yaml_or_json",
    "parse_graph_document",
    "resolve_seed",
    "save_json",
    "seed_everything",
]
