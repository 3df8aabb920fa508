from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

from timedcall.foundation.config import clear_settings_cache


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop TIMEDCALL_* env vars and the cached settings around every test."""
    for key in list(os.environ):
        if key.startswith("TIMEDCALL_"):
            monkeypatch.delenv(key, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()
