"""Settle-all fan-out: run independent awaitables, keep every outcome.

Siblings never cancel each other and one failure never hides the others'
results. Cancellation of the caller still propagates.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Settled(Generic[T]):
    """Outcome of one fan-out branch: exactly one of value/error is meaningful."""

    value: T | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def settle_all(aws: Iterable[Awaitable[T]]) -> list[Settled[T]]:
    """Await everything concurrently; outcomes come back in input order."""
    results = await asyncio.gather(*aws, return_exceptions=True)
    settled: list[Settled[T]] = []
    for result in results:
        if isinstance(result, Exception):
            settled.append(Settled(error=result))
        elif isinstance(result, BaseException):
            # CancelledError, KeyboardInterrupt: not a branch failure
            raise result
        else:
            settled.append(Settled(value=result))
    return settled
