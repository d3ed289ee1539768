"""Predefined planning pipelines."""

from .workflows import PlanResult, build_extractor, plan, rank_graph

__all__ = ["PlanResult", "build_extractor", "plan", "rank_graph"]
