"""Run an operation while a callback fires at a fixed interval.

The runner races a primary awaitable against a runner-owned ticker loop.
As soon as the primary settles the ticker is signalled, drained, and the
primary's outcome is returned. The ticker task never outlives the call.

Key Features:
    - Fast path: an already-done future settles at once, zero ticks
    - Sequential ticks: a slow tick stretches the period, never overlaps
    - Primary is observed, never cancelled (unless the runner created it)
    - Tick failures surface unwrapped; policy decides whether primary is awaited

Example:
    >>> started = time.monotonic()
    >>> result = await run_with_timed_callback(
    ...     fetch_report(),
    ...     1.0,
    ...     lambda: print(f"{time.monotonic() - started:.1f}s elapsed"),
    ... )

    >>> # Reusable runner / decorator
    >>> heartbeat = TimedCallbackRunner(5.0, send_heartbeat)
    >>> @heartbeat.wrap
    ... async def long_job(): ...
"""

from __future__ import annotations

import asyncio
import functools
import time
from datetime import timedelta
from enum import StrEnum
from typing import Annotated, Awaitable, Callable, Generic, ParamSpec, TypeVar

from pydantic import Field, TypeAdapter

from timedcall.foundation.config import TickFailurePolicy, get_settings
from timedcall.foundation.errors import FailureSource, combine_failures, describe_failure
from timedcall.runtime.concurrency import first_settled, settled_from, wait_settled
from timedcall.runtime.observability import get_logger

from .adapters import AsyncTick, as_async_tick
from .ticker import CancelSignal, TickerLoop

T = TypeVar("T")
P = ParamSpec("P")

logger = get_logger("runner")

Interval = float | timedelta

_IntervalAdapter: TypeAdapter[float] = TypeAdapter(Annotated[float, Field(gt=0, allow_inf_nan=False, strict=True)])

# Strong references to runner-owned primaries left running by ABANDON
_abandoned: set[asyncio.Future[object]] = set()


class RunnerState(StrEnum):
    """Invocation lifecycle states."""
    IDLE = "idle"          # Not yet started
    RACING = "racing"      # Primary and ticker running concurrently
    DRAINING = "draining"  # Cancellation sent, ticker being observed
    SETTLED = "settled"    # Outcome delivered


def coerce_interval(interval: Interval | None) -> float:
    """Normalize an interval to positive float seconds.

    None falls back to the configured default interval.

    Raises:
        pydantic.ValidationError: If the interval is not a finite number > 0,
            or is a bool or str (a ValueError)
    """
    if interval is None:
        return get_settings().ticker.default_interval
    if isinstance(interval, timedelta):
        interval = interval.total_seconds()
    elif isinstance(interval, int) and not isinstance(interval, bool):
        interval = float(interval)
    return _IntervalAdapter.validate_python(interval)


def _as_future(primary: Awaitable[T]) -> tuple[asyncio.Future[T], bool]:
    """Return (future, owned). Coroutines become runner-owned tasks."""
    if asyncio.isfuture(primary):
        return primary, False  # type: ignore[return-value]
    if not asyncio.iscoroutine(primary) and not hasattr(primary, "__await__"):
        raise TypeError(f"primary must be awaitable, got {type(primary).__name__}")
    return asyncio.ensure_future(primary), True


def _log_abandoned(future: asyncio.Future[object]) -> None:
    _abandoned.discard(future)
    outcome = settled_from(future)
    if outcome.is_rejected and not outcome.is_cancelled:
        logger.warning(
            "abandoned primary failed: %s", describe_failure(outcome.error),  # type: ignore[arg-type]
            extra={"failure_source": FailureSource.PRIMARY},
        )


class Invocation(Generic[T]):
    """One run of the combinator.

    Holds the per-call state (lifecycle, ticker) so nothing is shared between
    calls. Single use: run() may be awaited once.
    """

    __slots__ = ("name", "interval", "policy", "_tick", "_state", "_ticker")

    def __init__(self, interval: float, tick: AsyncTick, policy: TickFailurePolicy, *, name: str | None = None) -> None:
        self.name = name or "timed-callback"
        self.interval = interval
        self.policy = policy
        self._tick = tick
        self._state = RunnerState.IDLE
        self._ticker: TickerLoop | None = None

    @property
    def state(self) -> RunnerState:
        return self._state

    @property
    def ticks(self) -> int:
        """Completed tick invocations (0 when the fast path was taken)."""
        return self._ticker.ticks if self._ticker else 0

    async def run(self, primary: Awaitable[T]) -> T:
        if self._state is not RunnerState.IDLE:
            raise RuntimeError("Invocation can only be run once")
        future, owned = _as_future(primary)

        if future.done():
            self._state = RunnerState.SETTLED
            logger.debug("%s: primary already settled, skipping ticker", self.name)
            return future.result()

        started = time.monotonic()
        signal = CancelSignal()
        self._ticker = TickerLoop(self.interval, self._tick, signal, name=self.name)
        ticker_task = asyncio.create_task(self._ticker.run(), name=f"{self.name}-ticker")
        self._state = RunnerState.RACING
        logger.debug("%s: ticker started, interval=%.3fs", self.name, self.interval)

        try:
            await first_settled(future, ticker_task)  # type: ignore[arg-type]
            self._state = RunnerState.DRAINING
            signal.cancel()
            tick_error = await self._drain(ticker_task)

            if tick_error is not None and not future.done() and self.policy is TickFailurePolicy.ABANDON:
                logger.warning(
                    "%s: tick failed, abandoning pending primary: %s", self.name, describe_failure(tick_error),
                    extra={"failure_source": FailureSource.TICK},
                )
                if owned:
                    _abandoned.add(future)  # type: ignore[arg-type]
                    future.add_done_callback(_log_abandoned)  # type: ignore[arg-type]
                raise tick_error

            outcome = await wait_settled(future)
        except asyncio.CancelledError:
            await self._abort(signal, ticker_task, future, owned)
            raise
        finally:
            self._state = RunnerState.SETTLED

        logger.debug("%s: settled after %.3fs with %d ticks", self.name, time.monotonic() - started, self.ticks)
        if tick_error is None:
            return outcome.unwrap()
        if outcome.is_rejected:
            raise combine_failures(outcome.error, tick_error)  # type: ignore[arg-type]
        raise tick_error

    async def _drain(self, ticker_task: asyncio.Task[int]) -> BaseException | None:
        """Observe ticker termination. Cancellation is swallowed, other failures returned."""
        outcome = await wait_settled(ticker_task)
        if outcome.error is None or outcome.is_cancelled:
            return None
        logger.warning(
            "%s: tick callback failed: %s", self.name, describe_failure(outcome.error),  # type: ignore[arg-type]
            extra={"failure_source": FailureSource.TICK},
        )
        return outcome.error

    async def _abort(
        self,
        signal: CancelSignal,
        ticker_task: asyncio.Task[int],
        future: asyncio.Future[T],
        owned: bool,
    ) -> None:
        """External cancellation: stop the ticker now, cancel only what we own."""
        logger.debug("%s: cancelled while %s", self.name, self._state)
        signal.cancel()
        ticker_task.cancel()
        if owned:
            future.cancel()
        await asyncio.wait({ticker_task})
        if not ticker_task.cancelled():
            ticker_task.exception()  # mark retrieved


class TimedCallbackRunner:
    """Reusable binding of interval, tick and failure policy.

    Each run() creates a fresh Invocation; no state is kept between calls,
    so one runner may serve any number of concurrent runs.

    Args:
        interval: Seconds (or timedelta) between ticks; None uses settings
        tick: Sync or async zero-argument callable; its result is discarded
        on_tick_failure: TickFailurePolicy; None uses settings
        offload: Run a sync tick in the thread pool; None uses settings.
            A thread cannot be interrupted: if the run is cancelled from
            outside mid-tick, that tick keeps running in its thread after
            CancelledError is raised
        name: Label for log records and the ticker task

    Example:
        >>> runner = TimedCallbackRunner(timedelta(seconds=2), lambda: print("."))
        >>> data = await runner.run(download(url))
    """

    __slots__ = ("interval", "policy", "name", "_tick")

    def __init__(
        self,
        interval: Interval | None,
        tick: Callable[[], object],
        *,
        on_tick_failure: TickFailurePolicy | str | None = None,
        offload: bool | None = None,
        name: str | None = None,
    ) -> None:
        settings = get_settings().ticker
        self.interval = coerce_interval(interval)
        self.policy = TickFailurePolicy(on_tick_failure) if on_tick_failure is not None else settings.on_tick_failure
        self.name = name
        self._tick = as_async_tick(tick, offload=settings.offload_sync if offload is None else offload)

    def invocation(self) -> Invocation[object]:
        """Create a fresh single-use invocation (exposes state and tick count)."""
        return Invocation(self.interval, self._tick, self.policy, name=self.name)

    async def run(self, primary: Awaitable[T]) -> T:
        """Run primary to completion while ticking. Returns primary's value."""
        return await self.invocation().run(primary)  # type: ignore[return-value]

    def wrap(self, func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        """Decorator: every call of func runs through this runner."""
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            return await self.run(func(*args, **kwargs))
        return wrapper

    def __repr__(self) -> str:
        return f"TimedCallbackRunner(interval={self.interval}, tick={self._tick!r}, policy={self.policy})"


async def run_with_timed_callback(
    primary: Awaitable[T],
    interval: Interval | None,
    tick: Callable[[], object],
    *,
    on_tick_failure: TickFailurePolicy | str | None = None,
    offload: bool | None = None,
    name: str | None = None,
) -> T:
    """Run primary to completion, calling tick every interval until it settles.

    Args:
        primary: Future/task (observed, never cancelled) or coroutine
        interval: Seconds or timedelta between ticks (> 0)
        tick: Sync or async zero-argument callable
        on_tick_failure: Behavior toward a pending primary when a tick fails
        offload: Run a sync tick in the default thread pool (an in-flight
            offloaded tick finishes in its thread even if the run is cancelled)
        name: Label for log records

    Returns:
        The primary's value

    Raises:
        Exception: The primary's failure, unaltered
        Exception: A tick failure, unaltered
        ExceptionGroup: Both legs failed (primary first)
        pydantic.ValidationError: If interval is not > 0
    """
    runner = TimedCallbackRunner(interval, tick, on_tick_failure=on_tick_failure, offload=offload, name=name)
    return await runner.run(primary)


def with_timed_callback(
    interval: Interval | None,
    tick: Callable[[], object],
    **options: object,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """Decorator factory: run every call of the decorated coroutine function with a ticker.

    Example:
        >>> @with_timed_callback(1.0, lambda: print("still running"))
        ... async def build():
        ...     ...
    """
    return TimedCallbackRunner(interval, tick, **options).wrap  # type: ignore[arg-type]
