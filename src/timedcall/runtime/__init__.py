"""Runtime layer: the timed runner, concurrency helpers, observability."""

from .concurrency import Settled, first_settled, settled_from, wait_settled
from .observability import configure_logging, get_logger
from .timed import (
    CancelSignal,
    Invocation,
    RunnerState,
    TickerLoop,
    TimedCallbackRunner,
    as_async_tick,
    run_with_timed_callback,
    with_timed_callback,
)

__all__ = [
    "Settled",
    "first_settled",
    "settled_from",
    "wait_settled",
    "configure_logging",
    "get_logger",
    "CancelSignal",
    "Invocation",
    "RunnerState",
    "TickerLoop",
    "TimedCallbackRunner",
    "as_async_tick",
    "run_with_timed_callback",
    "with_timed_callback",
]
