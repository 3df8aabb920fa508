"""Failure classification for timed callback runs.

The runner never wraps a single failure: a primary failure or a tick failure
reaches the caller as the original exception. Only when both legs fail is a
standard exception group built, primary first.
"""

from __future__ import annotations

from enum import StrEnum


class FailureSource(StrEnum):
    """Which leg of a run produced a failure."""
    PRIMARY = "primary"
    TICK = "tick"


def describe_failure(exc: BaseException) -> str:
    """Short `Type: message` form for log records."""
    msg = str(exc)
    return f"{type(exc).__name__}: {msg}" if msg else type(exc).__name__


def combine_failures(primary: BaseException, tick: BaseException) -> BaseExceptionGroup[BaseException]:
    """Group a primary failure with the tick failure that preceded it.

    Returns an ExceptionGroup when both are plain Exceptions, otherwise a
    BaseExceptionGroup. The primary failure is always first.
    """
    return BaseExceptionGroup("primary operation and tick callback both failed", [primary, tick])

