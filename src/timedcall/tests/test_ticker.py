"""Tests for CancelSignal and TickerLoop."""

from __future__ import annotations

import asyncio
import time

import pytest

from timedcall import CancelSignal, TickerLoop, as_async_tick


@pytest.mark.asyncio
async def test_signal_sleep_elapses_when_not_cancelled() -> None:
    signal = CancelSignal()
    assert await signal.sleep(0.01) is True
    assert not signal.cancelled


@pytest.mark.asyncio
async def test_signal_sleep_interrupted_by_cancel() -> None:
    signal = CancelSignal()
    asyncio.get_running_loop().call_later(0.05, signal.cancel)

    started = time.monotonic()
    assert await signal.sleep(5.0) is False
    assert time.monotonic() - started < 1.0


@pytest.mark.asyncio
async def test_signal_cancel_is_idempotent() -> None:
    signal = CancelSignal()
    signal.cancel()
    signal.cancel()
    assert signal.cancelled
    assert await signal.sleep(5.0) is False
    await asyncio.wait_for(signal.wait(), timeout=0.1)


@pytest.mark.asyncio
async def test_ticker_counts_ticks_until_cancelled() -> None:
    signal = CancelSignal()
    calls: list[int] = []
    loop = TickerLoop(0.05, as_async_tick(lambda: calls.append(1)), signal)

    task = asyncio.create_task(loop.run())
    await asyncio.sleep(0.28)
    signal.cancel()
    ticks = await task

    assert ticks == loop.ticks == len(calls)
    assert 4 <= ticks <= 6


@pytest.mark.asyncio
async def test_ticker_lets_in_flight_tick_finish() -> None:
    signal = CancelSignal()
    completed: list[bool] = []

    async def tick() -> None:
        signal.cancel()  # cancellation arrives mid-tick
        await asyncio.sleep(0.05)
        completed.append(True)

    ticks = await TickerLoop(0.01, as_async_tick(tick), signal).run()

    assert ticks == 1
    assert completed == [True]


@pytest.mark.asyncio
async def test_ticker_ends_on_tick_failure() -> None:
    signal = CancelSignal()

    def tick() -> None:
        raise KeyError("bad")

    loop = TickerLoop(0.01, as_async_tick(tick), signal)
    with pytest.raises(KeyError):
        await loop.run()
    assert loop.ticks == 0


@pytest.mark.asyncio
async def test_ticker_cancelled_before_start_never_ticks() -> None:
    signal = CancelSignal()
    signal.cancel()
    calls: list[int] = []

    assert await TickerLoop(0.01, as_async_tick(lambda: calls.append(1)), signal).run() == 0
    assert calls == []
