# --- TRADEMARK NOTICE ---
# Lightcap (EUIPO. Reg. 019172085) — Contact: alpay@lightcap.ai
# Do not remove this notice from source distributions.

"""Policies choosing one candidate out of a weighted list."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

import numpy as np

from ..utils.random import ensure_rng


class PolicyKind(str, Enum):
    ARGMAX = "argmax"
    SOFTMAX = "softmax"


@dataclass
class SelectionPolicy:
    """Arg-max or soft-max selection over candidate weights.

    Soft-max with a low temperature strongly favours the heaviest candidate
    while leaving the others a small chance, which lets repeated extractions
    land on different local optima.
    """

    kind: PolicyKind = PolicyKind.ARGMAX
    temperature: float = 1e-3
    rng: np.random.Generator = field(default_factory=np.random.default_rng, repr=False)

    def __post_init__(self) -> None:
        self.kind = PolicyKind(self.kind)
        if self.temperature <= 0:
            raise ValueError("temperature must be positive")

    @classmethod
    def argmax(cls) -> "SelectionPolicy":
        return cls(PolicyKind.ARGMAX)

    @classmethod
    def softmax(cls, temperature: float = 1e-3, seed: int | np.random.Generator | None = None) -> "SelectionPolicy":
        return cls(PolicyKind.SOFTMAX, temperature, ensure_rng(seed))

    @property
    def is_deterministic(self) -> bool:
        return self.kind is PolicyKind.ARGMAX

    def select(self, weights: Sequence[float]) -> int:
        values = np.asarray(weights, dtype=np.float64)
        if values.size == 0:
            raise ValueError("Cannot select from an empty list of weights")
        if values.size == 1:
            return 0
        if self.kind is PolicyKind.ARGMAX:
            return int(np.argmax(values))  # first occurrence wins ties
        return self._sample(values)

    def probabilities(self, weights: Sequence[float]) -> np.ndarray:
        """Selection distribution used by the soft-max policy."""
        values = np.asarray(weights, dtype=np.float64)
        low, high = float(values.min()), float(values.max())
        if high == low:
            return np.full(values.size, 1.0 / values.size)
        rebased = (values - low) / (high - low)
        logits = rebased / self.temperature
        exps = np.exp(logits - logits.max())
        return exps / exps.sum()

    def _sample(self, values: np.ndarray) -> int:
        distribution = self.probabilities(values)
        cumulative = np.cumsum(distribution)
        draw = self.rng.random() * cumulative[-1]
        index = int(np.searchsorted(cumulative, draw, side="right"))
        return min(index, values.size - 1)


def make_policy(name: str, temperature: float = 1e-3, rng: Optional[np.random.Generator] = None) -> SelectionPolicy:
    kind = PolicyKind(name)
    if kind is PolicyKind.ARGMAX:
        return SelectionPolicy.argmax()
    return SelectionPolicy.softmax(temperature, rng)
