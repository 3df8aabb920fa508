"""Configuration management using pydantic-settings."""

from .settings import (
    LoggingSettings,
    TickerSettings,
    TickFailurePolicy,
    TimedCallSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "LoggingSettings",
    "TickerSettings",
    "TickFailurePolicy",
    "TimedCallSettings",
    "clear_settings_cache",
    "get_settings",
]
