"""Environment-based configuration using pydantic-settings.

Provides type-safe, validated defaults for the timed callback runner,
loaded from environment variables. Supports .env files and nested configuration.

Example:
    >>> from timedcall.foundation.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.ticker.default_interval)
    1.0
    >>> print(settings.logging.level)
    'INFO'

    # Or with environment variables:
    # TIMEDCALL_TICKER_DEFAULT_INTERVAL=0.5
    # TIMEDCALL_TICKER_ON_TICK_FAILURE=abandon
    # TIMEDCALL_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache
from typing import Literal

from pydantic import Field, PositiveFloat, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TickFailurePolicy(StrEnum):
    """What the runner does when the tick callback fails while primary is pending."""
    AWAIT_PRIMARY = "await_primary"  # Settle only after primary settles
    ABANDON = "abandon"              # Raise immediately, leave primary running


class TickerSettings(BaseSettings):
    """Ticker defaults applied when a runner option is left as None."""

    model_config = SettingsConfigDict(
        env_prefix="TIMEDCALL_TICKER_",
        extra="ignore",
    )

    default_interval: PositiveFloat = Field(default=1.0, description="Tick interval in seconds")
    on_tick_failure: TickFailurePolicy = Field(
        default=TickFailurePolicy.AWAIT_PRIMARY,
        description="Behavior toward a pending primary when a tick fails",
    )
    offload_sync: bool = Field(default=False, description="Run sync ticks in the default thread pool")

    @field_validator("on_tick_failure", mode="before")
    @classmethod
    def _normalize_policy(cls, v: object) -> object:
        return v.strip().lower() if isinstance(v, str) else v


class LoggingSettings(BaseSettings):
    """Handler installed by configure_logging() on the `timedcall` logger."""

    model_config = SettingsConfigDict(
        env_prefix="TIMEDCALL_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "text"] = "text"
    stream: Literal["stderr", "stdout"] = Field(default="stderr", description="Stream the handler writes to")
    timestamps: bool = Field(default=True, description="Prefix records with a timestamp")

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v


class TimedCallSettings(BaseSettings):
    """Root settings for timedcall.

    Loads configuration from environment variables with TIMEDCALL_ prefix.

    Example environment variables:
        TIMEDCALL_DEBUG=true
        TIMEDCALL_TICKER_DEFAULT_INTERVAL=2.5
        TIMEDCALL_TICKER_OFFLOAD_SYNC=true
        TIMEDCALL_LOG_FORMAT=json
    """

    model_config = SettingsConfigDict(
        env_prefix="TIMEDCALL_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Enable debug mode")

    ticker: TickerSettings = Field(default_factory=TickerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @computed_field
    @property
    def effective_log_level(self) -> str:
        """DEBUG when debug mode is on, otherwise the configured level."""
        return "DEBUG" if self.debug else self.logging.level


@lru_cache(maxsize=1)
def get_settings() -> TimedCallSettings:
    """Get the global settings instance (cached)."""
    return TimedCallSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
