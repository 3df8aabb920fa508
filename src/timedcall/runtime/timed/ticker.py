"""Ticker loop with cooperative cancellation.

The ticker waits one interval, invokes the tick, awaits it, and repeats until
its CancelSignal fires. Cancellation only stops the *next* iteration: a tick
already in flight is allowed to finish.

Example:
    >>> signal = CancelSignal()
    >>> loop = TickerLoop(1.0, as_async_tick(report), signal)
    >>> task = asyncio.create_task(loop.run())
    >>> ...
    >>> signal.cancel()
    >>> await task
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from timedcall.runtime.observability import get_logger

from .adapters import AsyncTick

logger = get_logger("ticker")


@dataclass(slots=True)
class CancelSignal:
    """Set-once cancellation flag.

    Single writer (the runner), any number of readers (the ticker).
    Calling cancel() again is a no-op.
    """

    _event: asyncio.Event = field(default_factory=asyncio.Event, repr=False)

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    async def wait(self) -> None:
        await self._event.wait()

    async def sleep(self, delay: float) -> bool:
        """Wait for delay seconds or until cancelled.

        Returns:
            True if the full delay elapsed, False if cancellation fired first
        """
        if self._event.is_set():
            return False
        try:
            await asyncio.wait_for(self._event.wait(), timeout=delay)
        except TimeoutError:
            return True
        return False


class TickerLoop:
    """Sequential tick loop bound to one runner invocation.

    Ticks never overlap: the next interval wait starts only after the
    previous tick has completed, so a slow tick stretches the period.
    A failing tick ends the loop with that failure.
    """

    __slots__ = ("interval", "_tick", "_signal", "_ticks", "_name")

    def __init__(self, interval: float, tick: AsyncTick, signal: CancelSignal, *, name: str | None = None) -> None:
        self.interval = interval
        self._tick = tick
        self._signal = signal
        self._ticks = 0
        self._name = name or "ticker"

    @property
    def ticks(self) -> int:
        """Number of tick invocations that completed."""
        return self._ticks

    async def run(self) -> int:
        """Run until cancelled. Returns the number of completed ticks."""
        while await self._signal.sleep(self.interval):
            await self._tick()
            self._ticks += 1
            logger.debug("%s tick %d completed", self._name, self._ticks)
        logger.debug("%s stopped after %d ticks", self._name, self._ticks)
        return self._ticks
