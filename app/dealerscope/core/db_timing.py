from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

# Mutable cell: worker threads and child tasks add to the same total.
_db_time_ms: ContextVar[list[float] | None] = ContextVar("dealerscope_db_time_ms", default=None)


@contextmanager
def db_timer() -> Iterator[None]:
    """Accumulate SQL execution time for the current request while active."""
    token = _db_time_ms.set([0.0])
    try:
        yield
    finally:
        _db_time_ms.reset(token)


def add_db_time(delta_ms: float) -> None:
    cell = _db_time_ms.get()
    if cell is None:
        return
    cell[0] += delta_ms


def get_db_time_ms() -> float | None:
    cell = _db_time_ms.get()
    return cell[0] if cell is not None else None
