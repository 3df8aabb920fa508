"""Foundation layer: configuration and error classification."""

from .config import (
    LoggingSettings,
    TickerSettings,
    TickFailurePolicy,
    TimedCallSettings,
    clear_settings_cache,
    get_settings,
)
from .errors import FailureSource, combine_failures, describe_failure

__all__ = [
    "LoggingSettings",
    "TickerSettings",
    "TickFailurePolicy",
    "TimedCallSettings",
    "clear_settings_cache",
    "get_settings",
    "FailureSource",
    "combine_failures",
    "describe_failure",
]
