from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from mica.config import get_max_depth
from mica.errors import MicaRecursionError

# Nesting depth of the reader/evaluator call currently running. A ContextVar
# keeps independent evaluations (threads, nested interpreters) from sharing it.
_depth: ContextVar[int] = ContextVar("mica_depth", default=0)

# Process-wide limit; None means "read MICA_MAX_DEPTH on first use".
_max_depth: Optional[int] = None


def set_max_depth(limit: Optional[int]) -> None:
    global _max_depth
    _max_depth = limit


def get_depth_limit() -> int:
    global _max_depth
    if _max_depth is None:
        _max_depth = get_max_depth()
    return _max_depth


def current_depth() -> int:
    return _depth.get()


@contextmanager
def nesting(what: str = "evaluation") -> Iterator[int]:
    """Count one level of reader/evaluator recursion, failing past the limit."""
    depth = _depth.get() + 1
    limit = get_depth_limit()
    if depth > limit:
        raise MicaRecursionError(f"{what} nested deeper than {limit} levels")
    token = _depth.set(depth)
    try:
        yield depth
    finally:
        _depth.reset(token)
