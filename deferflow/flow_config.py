"""
Environment-driven settings and debug tracing.

Values are read on every call so tests and long-lived hosts can change them
without reloading the package.
"""
import os
import sys
from typing import Optional

DEFAULT_YIELD_EVERY = 100


def _dbg(*parts):
    if debug_enabled():
        try:
            print("[DBG]", *parts, file=sys.stderr)
        except (OSError, ValueError):
            pass


def debug_enabled() -> bool:
    return bool(os.environ.get("DEFERFLOW_DEBUG"))


def max_loop_iterations() -> Optional[int]:
    """Upper bound on loop iterations, or None when loops are unbounded."""
    raw = os.environ.get("DEFERFLOW_MAX_LOOP_ITERS")
    if raw is None or not raw.strip():
        return None
    try:
        limit = int(raw)
    except ValueError:
        _dbg("config", "ignoring DEFERFLOW_MAX_LOOP_ITERS", repr(raw))
        return None
    return limit if limit > 0 else None


def yield_every() -> int:
    """How many loop iterations run between cooperative yields to the event loop."""
    raw = os.environ.get("DEFERFLOW_YIELD_EVERY")
    if raw is None:
        return DEFAULT_YIELD_EVERY
    try:
        every = int(raw)
    except ValueError:
        _dbg("config", "ignoring DEFERFLOW_YIELD_EVERY", repr(raw))
        return DEFAULT_YIELD_EVERY
    return every if every >= 1 else DEFAULT_YIELD_EVERY
