# site_crawler/crawler/gate.py
"""
Bounded fetch gate: at most ``limit`` admitted operations run at once.
"""
from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, TypeVar

T = TypeVar("T")


class FetchGate:
    """Concurrency limiter for outbound fetches.

    Waiters are served in FIFO order (``asyncio.Semaphore`` semantics).
    Only fetches are throttled; traversal branches queue here freely.
    The counters are plain attributes so tests can observe the bound.
    """

    def __init__(self, limit: int = 5) -> None:
        if limit < 1:
            raise ValueError("limit must be >= 1")
        self.limit = limit
        self._semaphore = asyncio.Semaphore(limit)
        self.in_flight = 0
        self.peak_in_flight = 0
        self.waiting = 0
        self.completed = 0

    async def admit(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run ``operation()`` once a slot is free and return its result."""
        self.waiting += 1
        try:
            await self._semaphore.acquire()
        finally:
            self.waiting -= 1
        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        try:
            return await operation()
        finally:
            self.in_flight -= 1
            self.completed += 1
            self._semaphore.release()
