"""Tests for environment-driven settings and their use as runner defaults."""

from __future__ import annotations

import asyncio

import pytest
from pydantic import ValidationError

from timedcall import TickFailurePolicy, TimedCallbackRunner, clear_settings_cache, get_settings
from timedcall.runtime.timed import SyncTickAdapter


def test_defaults() -> None:
    settings = get_settings()
    assert settings.ticker.default_interval == 1.0
    assert settings.ticker.on_tick_failure is TickFailurePolicy.AWAIT_PRIMARY
    assert settings.ticker.offload_sync is False
    assert settings.logging.level == "INFO"
    assert settings.logging.stream == "stderr"
    assert settings.logging.timestamps is True
    assert settings.effective_log_level == "INFO"


def test_settings_are_cached() -> None:
    assert get_settings() is get_settings()


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIMEDCALL_TICKER_DEFAULT_INTERVAL", "0.25")
    monkeypatch.setenv("TIMEDCALL_TICKER_ON_TICK_FAILURE", "ABANDON")
    monkeypatch.setenv("TIMEDCALL_TICKER_OFFLOAD_SYNC", "true")
    monkeypatch.setenv("TIMEDCALL_LOG_LEVEL", "debug")
    clear_settings_cache()

    settings = get_settings()
    assert settings.ticker.default_interval == 0.25
    assert settings.ticker.on_tick_failure is TickFailurePolicy.ABANDON
    assert settings.ticker.offload_sync is True
    assert settings.logging.level == "DEBUG"


def test_debug_forces_debug_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIMEDCALL_DEBUG", "1")
    clear_settings_cache()
    assert get_settings().effective_log_level == "DEBUG"


def test_invalid_default_interval(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIMEDCALL_TICKER_DEFAULT_INTERVAL", "0")
    clear_settings_cache()
    with pytest.raises(ValidationError):
        get_settings()


def test_runner_falls_back_to_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIMEDCALL_TICKER_DEFAULT_INTERVAL", "0.5")
    monkeypatch.setenv("TIMEDCALL_TICKER_ON_TICK_FAILURE", "abandon")
    monkeypatch.setenv("TIMEDCALL_TICKER_OFFLOAD_SYNC", "true")
    clear_settings_cache()

    runner = TimedCallbackRunner(None, lambda: None)
    assert runner.interval == 0.5
    assert runner.policy is TickFailurePolicy.ABANDON
    assert isinstance(runner._tick, SyncTickAdapter) and runner._tick.offload


def test_explicit_options_win_over_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIMEDCALL_TICKER_ON_TICK_FAILURE", "abandon")
    clear_settings_cache()

    runner = TimedCallbackRunner(2.0, lambda: None, on_tick_failure=TickFailurePolicy.AWAIT_PRIMARY, offload=False)
    assert runner.interval == 2.0
    assert runner.policy is TickFailurePolicy.AWAIT_PRIMARY


@pytest.mark.asyncio
async def test_default_interval_drives_ticks(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIMEDCALL_TICKER_DEFAULT_INTERVAL", "0.05")
    clear_settings_cache()
    ticks: list[int] = []

    await TimedCallbackRunner(None, lambda: ticks.append(1)).run(asyncio.sleep(0.28))
    assert 4 <= len(ticks) <= 6
