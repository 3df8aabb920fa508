"""Tests for tick callback adapters."""

from __future__ import annotations

import asyncio
import functools
import threading

import pytest

from timedcall.runtime.timed import AsyncTickAdapter, SyncTickAdapter, as_async_tick


@pytest.mark.asyncio
async def test_sync_tick_runs_inline() -> None:
    seen: list[int] = []
    tick = as_async_tick(lambda: seen.append(threading.get_ident()))

    assert isinstance(tick, SyncTickAdapter)
    assert await tick() is None
    assert seen == [threading.get_ident()]


@pytest.mark.asyncio
async def test_sync_tick_offloaded_to_thread() -> None:
    seen: list[int] = []
    tick = as_async_tick(lambda: seen.append(threading.get_ident()), offload=True)

    await tick()
    assert seen and seen[0] != threading.get_ident()


@pytest.mark.asyncio
async def test_async_tick_passed_through_and_result_discarded() -> None:
    async def tick() -> str:
        return "ignored"

    adapted = as_async_tick(tick)
    assert isinstance(adapted, AsyncTickAdapter)
    assert await adapted() is None


@pytest.mark.asyncio
async def test_partial_of_async_function_detected() -> None:
    calls: list[str] = []

    async def tick(label: str) -> None:
        calls.append(label)

    adapted = as_async_tick(functools.partial(tick, "p"))
    assert isinstance(adapted, AsyncTickAdapter)
    await adapted()
    assert calls == ["p"]


@pytest.mark.asyncio
async def test_sync_tick_returning_awaitable_is_awaited() -> None:
    done = asyncio.Event()

    async def mark() -> None:
        done.set()

    await as_async_tick(lambda: mark())()
    assert done.is_set()


def test_adapter_is_not_rewrapped() -> None:
    adapted = as_async_tick(lambda: None)
    assert as_async_tick(adapted) is adapted


def test_non_callable_rejected() -> None:
    with pytest.raises(TypeError, match="callable"):
        as_async_tick(3)  # type: ignore[arg-type]
