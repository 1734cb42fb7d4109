"""Logging helpers: plain messages to stderr under the makeuniversal namespace."""

from __future__ import annotations

import logging
import os
import sys

ROOT_LOGGER = "makeuniversal"
LEVEL_ENV = "MAKEUNIVERSAL_LOG_LEVEL"


def _resolve_level() -> int:
    raw = os.environ.get(LEVEL_ENV, "").strip().upper()
    if raw:
        level = logging.getLevelName(raw)
        if isinstance(level, int):
            return level
    return logging.INFO


def configure_logging(*, quiet: bool = False, verbose: bool = False) -> logging.Logger:
    """Set the makeuniversal logger level from CLI flags; flags override the environment."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = _resolve_level()
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
    root.propagate = False
    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
