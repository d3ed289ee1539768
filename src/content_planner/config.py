"""Configuration helpers for the content planner."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Optional, cast

import yaml

from .utils.io import load_yaml_or_json

EXPLORER_KINDS = ("single_vertex", "requirements")
EXPANSION_POLICIES = ("same_source", "non_core_only", "all")
SELECTION_POLICIES = ("argmax", "softmax")


def _check_unit_interval(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        msg = f"{name} must lie in [0, 1], got {value}"
        raise ValueError(msg)


def _check_choice(name: str, value: str, choices: tuple[str, ...]) -> None:
    if value not in choices:
        msg = f"{name} must be one of {', '.join(choices)}; got {value!r}"
        raise ValueError(msg)


@dataclass
class RankingConfig:
    """Parameters of meaning and vertex ranking."""

    damping_meanings: float = 0.2
    damping_vertices: float = 0.2
    sim_threshold: float = 0.0
    stopping_threshold: float = 1e-4
    max_iterations: int = 100_000
    rebase: bool = False

    def __post_init__(self) -> None:
        _check_unit_interval("damping_meanings", self.damping_meanings)
        _check_unit_interval("damping_vertices", self.damping_vertices)
        if self.stopping_threshold <= 0:
            raise ValueError("stopping_threshold must be positive")
        if self.max_iterations <= 0:
            raise ValueError("max_iterations must be positive")


@dataclass
class ExtractionConfig:
    """Parameters of subgraph extraction."""

    lambda_: float = 1.0
    explorer: str = "requirements"
    expansion: str = "non_core_only"
    start_policy: str = "softmax"
    expand_policy: str = "argmax"
    temperature: float = 1e-3
    num_subgraphs_extract: int = 100
    max_num_extractions: int = 1000
    start_from_verbs: bool = False

    def __post_init__(self) -> None:
        _check_choice("explorer", self.explorer, EXPLORER_KINDS)
        _check_choice("expansion", self.expansion, EXPANSION_POLICIES)
        _check_choice("start_policy", self.start_policy, SELECTION_POLICIES)
        _check_choice("expand_policy", self.expand_policy, SELECTION_POLICIES)
        if self.temperature <= 0:
            raise ValueError("temperature must be positive")
        if self.num_subgraphs_extract < 0 or self.max_num_extractions < 0:
            raise ValueError("extraction counts must be non-negative")


@dataclass
class RedundancyConfig:
    """Parameters of redundancy removal."""

    num_subgraphs: int = 10
    threshold: float = 0.8
    tree_edit_delta: float = 0.0

    def __post_init__(self) -> None:
        _check_unit_interval("threshold", self.threshold)
        _check_unit_interval("tree_edit_delta", self.tree_edit_delta)
        if self.num_subgraphs < 0:
            raise ValueError("num_subgraphs must be non-negative")


def _section(cls: type, data: Mapping[str, Any]) -> Any:
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        msg = f"Unknown {cls.__name__} keys: {', '.join(sorted(unknown))}"
        raise ValueError(msg)
    return cls(**data)


@dataclass
class PlannerConfig:
    """Top-level configuration of the ranking and extraction engine."""

    ranking: RankingConfig = field(default_factory=RankingConfig)
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    redundancy: RedundancyConfig = field(default_factory=RedundancyConfig)
    seed: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlannerConfig:
        unknown = set(data) - {"ranking", "extraction", "redundancy", "seed"}
        if unknown:
            msg = f"Unknown configuration sections: {', '.join(sorted(unknown))}"
            raise ValueError(msg)
        return cls(
            ranking=_section(RankingConfig, data.get("ranking") or {}),
            extraction=_section(ExtractionConfig, data.get("extraction") or {}),
            redundancy=_section(RedundancyConfig, data.get("redundancy") or {}),
            seed=data.get("seed"),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def save(self, path: Path) -> None:
        """Write the configuration as YAML or JSON depending on the suffix."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf8") as handle:
            if path.suffix.lower() in {".yaml", ".yml"}:
                yaml.safe_dump(self.to_dict(), handle, sort_keys=False)
            else:
                json.dump(self.to_dict(), handle, indent=2)


def _merge_dict(base: dict[str, Any], overrides: Iterable[dict[str, Any]]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for override in overrides:
        for key, value in override.items():
            existing = result.get(key)
            if isinstance(value, dict) and isinstance(existing, dict):
                nested = _merge_dict(cast(dict[str, Any], existing), [value])
                result[key] = nested
            else:
                result[key] = value
    return result


def load_config(
    path: Optional[Path] = None,
    overrides: Optional[Iterable[dict[str, Any]]] = None,
) -> PlannerConfig:
    """Load configuration from disk and merge overrides."""

    overrides = list(overrides or [])
    if path is None:
        base: dict[str, Any] = {}
    else:
        base = load_yaml_or_json(Path(path))

    merged = _merge_dict(base, overrides)
    return PlannerConfig.from_dict(merged)
