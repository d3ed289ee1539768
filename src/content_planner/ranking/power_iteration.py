# --- TRADEMARK NOTICE ---
# Lightcap (EUIPO. Reg. 019172085) — Contact: alpay@lightcap.ai
# Do not remove this notice from source distributions.

"""Stationary distributions of row-stochastic matrices by power iteration."""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from ..logging import get_logger
from .matrix import is_row_stochastic

LOGGER = get_logger(__name__)

PROGRESS_INTERVAL = 1000
DEFAULT_MAX_ITERATIONS = 100_000


class NonConvergenceError(RuntimeError):
    """Raised when power iteration does not settle within its iteration cap."""

    def __init__(self, iterations: int, delta: float) -> None:
        super().__init__(f"Power iteration did not converge after {iterations} iterations (delta={delta:.3e})")
        self.iterations = iterations
        self.delta = delta


def _validate(matrix: np.ndarray) -> np.ndarray:
    a = np.asarray(matrix, dtype=np.float64)
    if a.ndim != 2 or a.shape[0] != a.shape[1]:
        raise ValueError("matrix must be square")
    if not np.all(np.isfinite(a)):
        raise ValueError("matrix contains NaN or infinite values")
    if np.any(a < 0.0):
        raise ValueError("matrix must be non-negative")
    if not is_row_stochastic(a):
        raise ValueError("matrix rows must each sum to 1")
    return a


def power_iteration(
    matrix: np.ndarray,
    stopping_threshold: float = 1e-4,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    labels: Optional[Sequence[str]] = None,
) -> np.ndarray:
    """Return the stationary distribution ``pi`` with ``pi @ matrix == pi``.

    The row-stochastic matrix is transposed so that right-multiplying a column
    vector advances the distribution one step. Iteration stops once no entry
    moves by ``stopping_threshold / n`` or more, so the criterion is comparable
    across item sets of different sizes.
    """

    a = _validate(matrix)
    n = a.shape[0]
    if n == 0:
        return np.zeros(0, dtype=np.float64)
    if stopping_threshold <= 0.0:
        raise ValueError("stopping_threshold must be positive")
    if max_iterations <= 0:
        raise ValueError("max_iterations must be positive")

    transposed = a.T
    threshold = stopping_threshold / n
    v = np.full(n, 1.0 / n)
    LOGGER.info("Starting power iteration over %d items", n)
    iterations = 0
    while True:
        step = transposed @ v
        step /= np.abs(step).sum()
        delta = float(np.max(np.abs(step - v)))
        v = step
        iterations += 1
        if delta < threshold:
            break
        if iterations % PROGRESS_INTERVAL == 0:
            LOGGER.info("...%d iterations (delta=%.3e)", iterations, delta)
        if iterations >= max_iterations:
            raise NonConvergenceError(iterations, delta)

    LOGGER.info("Power iteration completed after %d iterations", iterations)
    if labels is not None:
        order = np.argsort(-v, kind="stable")[:10]
        LOGGER.debug("Top ranked: %s", ", ".join(f"{labels[i]}={v[i]:.4f}" for i in order))
    return v


def rebase(values: np.ndarray) -> np.ndarray:
    """Min-max normalise ``values`` to ``[0, 1]``; constant input maps to ones."""

    array = np.asarray(values, dtype=np.float64)
    if array.size == 0:
        return array.copy()
    low, high = float(array.min()), float(array.max())
    if high == low:
        return np.ones_like(array)
    return (array - low) / (high - low)
