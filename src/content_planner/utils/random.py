"""Seeds and random generators for reproducible extraction runs."""

from __future__ import annotations

import hashlib
import os
import random
from typing import Optional

import numpy as np

SEED_ENV = "CONTENT_PLANNER_SEED"
_SEED_MODULUS = 2**32


def deterministic_hash(value: str) -> int:
    """Stable 32-bit hash of ``value``, independent of ``PYTHONHASHSEED``."""
    digest = hashlib.sha256(value.encode("utf-8")).digest()
    return int.from_bytes(digest[:4], byteorder="big", signed=False)


def resolve_seed(seed: Optional[int] = None) -> int:
    """Return ``seed`` or derive one from ``$CONTENT_PLANNER_SEED``.

    Numeric environment values are used as they are; any other text is hashed.
    """
    if seed is not None:
        return int(seed) % _SEED_MODULUS
    value = os.getenv(SEED_ENV, "content-planner").strip()
    if value.isdigit():
        return int(value) % _SEED_MODULUS
    return deterministic_hash(value)


def seed_everything(seed: Optional[int] = None) -> int:
    """Seed the ``random`` module and NumPy's legacy global state; return the seed."""
    resolved = resolve_seed(seed)
    random.seed(resolved)
    np.random.seed(resolved)
    return resolved


def ensure_rng(seed: int | np.random.Generator | None) -> np.random.Generator:
    """Return ``seed`` if it already is a generator, otherwise build one from it."""
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)
