"""Wait strategies for observing concurrent operations without owning them.

Provides the two patterns the timed runner is built from:
    - first_settled: Wait until any future settles, cancel nothing
    - settled_from: Snapshot a done future as a Settled outcome

Example:
    >>> done, pending = await first_settled(primary_task, ticker_task)
    >>> outcome = settled_from(primary_task)
    >>> outcome.unwrap()
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class Settled(Generic[T]):
    """Outcome of a done future: a value, or the error it raised.

    A cancelled future settles with its CancelledError as the error.
    """

    value: T | None = None
    error: BaseException | None = None

    @property
    def is_rejected(self) -> bool:
        return self.error is not None

    @property
    def is_cancelled(self) -> bool:
        return isinstance(self.error, asyncio.CancelledError)

    def unwrap(self) -> T:
        """Get value or raise stored error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


def settled_from(future: asyncio.Future[T]) -> Settled[T]:
    """Snapshot a done future.

    Marks the future's exception as retrieved, so asyncio does not report
    it as never retrieved.

    Raises:
        asyncio.InvalidStateError: If the future is still pending
    """
    if not future.done():
        raise asyncio.InvalidStateError("settled_from() requires a done future")
    if future.cancelled():
        # .exception() raises on a cancelled future
        try:
            future.result()
        except asyncio.CancelledError as e:
            return Settled(error=e)
    error = future.exception()
    return Settled(error=error) if error is not None else Settled(value=future.result())


async def first_settled(
    *futures: asyncio.Future[object],
) -> tuple[set[asyncio.Future[object]], set[asyncio.Future[object]]]:
    """Wait until any future settles.

    Lower-level than a race: returns (done, pending) like asyncio.wait and
    never cancels the pending ones. Futures already done come back at once.

    Raises:
        ValueError: If no futures provided
    """
    if not futures:
        raise ValueError("first_settled() requires at least one future")
    return await asyncio.wait(set(futures), return_when=asyncio.FIRST_COMPLETED)


async def wait_settled(future: asyncio.Future[T]) -> Settled[T]:
    """Wait for a future without letting its failure escape.

    Uses asyncio.wait so a failing future is observed rather than raised;
    a cancellation of the *caller* still propagates.
    """
    await asyncio.wait({future})
    return settled_from(future)
