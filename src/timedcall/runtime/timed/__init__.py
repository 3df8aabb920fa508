"""Timed callback runner: run an operation while ticking at a fixed interval.

Example:
    >>> from timedcall.runtime.timed import run_with_timed_callback
    >>> result = await run_with_timed_callback(job(), 1.0, lambda: print("tick"))
"""

from __future__ import annotations

from .adapters import AsyncTick, AsyncTickAdapter, SyncTickAdapter, as_async_tick
from .runner import (
    Interval,
    Invocation,
    RunnerState,
    TimedCallbackRunner,
    coerce_interval,
    run_with_timed_callback,
    with_timed_callback,
)
from .ticker import CancelSignal, TickerLoop

__all__ = [
    "AsyncTick",
    "AsyncTickAdapter",
    "SyncTickAdapter",
    "as_async_tick",
    "Interval",
    "Invocation",
    "RunnerState",
    "TimedCallbackRunner",
    "coerce_interval",
    "run_with_timed_callback",
    "with_timed_callback",
    "CancelSignal",
    "TickerLoop",
]
