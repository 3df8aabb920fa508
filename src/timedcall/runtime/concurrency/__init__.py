"""Concurrency helpers for observing futures without owning them."""

from __future__ import annotations

from .wait import Settled, first_settled, settled_from, wait_settled

__all__ = [
    "Settled",
    "first_settled",
    "settled_from",
    "wait_settled",
]
