"""Logging configuration for the content planner."""

from __future__ import annotations

import logging
from typing import Optional, Union

_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_PACKAGE_LOGGER = "content_planner"


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        msg = f"Unknown logging level: {level!r}"
        raise ValueError(msg)
    return resolved


def configure_logging(level: Union[int, str] = logging.INFO, handler: Optional[logging.Handler] = None) -> None:
    """Configure root logging with a consistent format.

    ``level`` accepts either a numeric level or its name (``"debug"``,
    ``"INFO"``...), so command line flags can be passed through unchanged.
    """
    numeric = _resolve_level(level)
    logging.basicConfig(level=numeric, format=_DEFAULT_FORMAT, handlers=[handler] if handler else None, force=True)
    logging.getLogger(_PACKAGE_LOGGER).setLevel(numeric)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for ``name`` inside the package namespace."""
    if name != _PACKAGE_LOGGER and not name.startswith(f"{_PACKAGE_LOGGER}."):
        name = f"{_PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
