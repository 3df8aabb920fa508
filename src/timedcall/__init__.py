"""timedcall - run an async operation while a callback ticks at a fixed interval.

A progress/heartbeat combinator: the primary operation runs to completion,
the tick callback fires once per interval while it is pending, ticking stops
the moment it settles, and the primary's value (or failure) is returned.

Quick Start:
    >>> import asyncio, time
    >>> from timedcall import run_with_timed_callback
    >>>
    >>> async def main():
    ...     started = time.monotonic()
    ...     result = await run_with_timed_callback(
    ...         slow_job(),
    ...         1.0,
    ...         lambda: print(f"{time.monotonic() - started:.1f}s"),
    ...     )

Tick shapes (sync, async, or returning an awaitable) are all accepted:
    >>> async def ping(): await client.ping()
    >>> await run_with_timed_callback(upload(), 5.0, ping)

Reusable runner and decorator:
    >>> from timedcall import TimedCallbackRunner, with_timed_callback
    >>> @with_timed_callback(2.0, report_progress)
    ... async def build(): ...

Configuration (pydantic-settings, TIMEDCALL_ prefix):
    TIMEDCALL_TICKER_DEFAULT_INTERVAL=1.0
    TIMEDCALL_TICKER_ON_TICK_FAILURE=await_primary | abandon
    TIMEDCALL_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

__version__ = "0.1.0"

from .foundation import (
    FailureSource,
    TickFailurePolicy,
    TimedCallSettings,
    clear_settings_cache,
    get_settings,
)
from .runtime import (
    CancelSignal,
    Invocation,
    RunnerState,
    Settled,
    TickerLoop,
    TimedCallbackRunner,
    as_async_tick,
    configure_logging,
    get_logger,
    run_with_timed_callback,
    with_timed_callback,
)

__all__ = [
    "__version__",
    # Core
    "run_with_timed_callback",
    "with_timed_callback",
    "TimedCallbackRunner",
    "Invocation",
    "RunnerState",
    # Ticker
    "TickerLoop",
    "CancelSignal",
    "as_async_tick",
    # Outcomes & errors
    "Settled",
    "FailureSource",
    "TickFailurePolicy",
    # Settings & logging
    "TimedCallSettings",
    "get_settings",
    "clear_settings_cache",
    "configure_logging",
    "get_logger",
]
