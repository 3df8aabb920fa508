"""Tick callback adapters.

Every tick shape is lifted into one capability: a zero-argument callable
returning an awaitable completion. Accepted shapes:
    - async def tick() -> ...          passed through
    - def tick() -> None               called, then reports completion
    - def tick() -> Awaitable[...]     called, returned awaitable is awaited
Any result a tick produces is discarded.

Example:
    >>> tick = as_async_tick(lambda: print("still working"))
    >>> await tick()
"""

from __future__ import annotations

import asyncio
import contextvars
import functools
import inspect
from dataclasses import dataclass
from typing import Awaitable, Callable

AsyncTick = Callable[[], Awaitable[None]]


@dataclass(slots=True)
class SyncTickAdapter:
    """Wrap a sync tick to be awaitable.

    Runs inline by default: the call completes before the adapter reports
    completion. With offload=True the call runs in the default thread pool
    with the caller's context copied. Cancelling the awaiting task only
    abandons the executor future; the thread finishes the call regardless.
    """

    func: Callable[[], object]
    offload: bool = False

    async def __call__(self) -> None:
        if self.offload:
            loop = asyncio.get_running_loop()
            ctx = contextvars.copy_context()
            result = await loop.run_in_executor(None, functools.partial(ctx.run, self.func))
        else:
            result = self.func()
        if inspect.isawaitable(result):
            await result

    def __repr__(self) -> str:
        return f"SyncTickAdapter({self.func!r}, offload={self.offload})"


@dataclass(slots=True)
class AsyncTickAdapter:
    """Await a coroutine-function tick, discarding its result."""

    func: Callable[[], Awaitable[object]]

    async def __call__(self) -> None:
        await self.func()

    def __repr__(self) -> str:
        return f"AsyncTickAdapter({self.func!r})"


def _is_async_callable(func: object) -> bool:
    while isinstance(func, functools.partial):
        func = func.func
    return inspect.iscoroutinefunction(func) or inspect.iscoroutinefunction(getattr(func, "__call__", None))


def as_async_tick(tick: Callable[[], object], *, offload: bool = False) -> AsyncTick:
    """Lift any supported tick shape into an async zero-argument callable.

    Args:
        tick: Sync or async zero-argument callable
        offload: Run a sync tick in the default thread pool

    Raises:
        TypeError: If tick is not callable
    """
    if isinstance(tick, (SyncTickAdapter, AsyncTickAdapter)):
        return tick
    if not callable(tick):
        raise TypeError(f"tick must be callable, got {type(tick).__name__}")
    if _is_async_callable(tick):
        return AsyncTickAdapter(tick)  # type: ignore[arg-type]
    return SyncTickAdapter(tick, offload=offload)
