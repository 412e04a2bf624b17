"""Clock sources for frame pacing.

The frame loop asks a :class:`TimeSource` for monotonic time and sleeps
through it, so tests can drive the loop deterministically:

    ts = SimTimeSource()
    task = asyncio.create_task(controller.run())
    ts.advance(1 / 60)   # wakes the loop for exactly one more frame
"""

from __future__ import annotations

import asyncio
import heapq
import time
from typing import Protocol

__all__ = [
    "TimeSource",
    "RealTimeSource",
    "SimTimeSource",
]


class TimeSource(Protocol):
    def monotonic(self) -> float:
        """Return monotonic time in seconds."""
        ...

    async def sleep(self, seconds: float) -> None:
        ...


class RealTimeSource:
    """System monotonic clock with ``asyncio.sleep``."""

    def monotonic(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


class SimTimeSource:
    """Deterministic simulated clock.

    ``sleep`` parks the caller until :meth:`advance` moves simulated time
    past its due time. Zero-length sleeps just yield to the event loop.
    """

    def __init__(self, *, start: float = 0.0) -> None:
        self._now = float(start)
        self._sleepers: list[tuple[float, int, asyncio.Future[None]]] = []
        self._seq = 0

    def monotonic(self) -> float:
        return self._now

    def advance(self, dt: float) -> None:
        if dt < 0:
            raise ValueError(f"Cannot advance time backwards: dt={dt}")
        self._now += dt
        while self._sleepers and self._sleepers[0][0] <= self._now:
            _due, _seq, fut = heapq.heappop(self._sleepers)
            if not fut.done():
                fut.set_result(None)

    async def sleep(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError(f"Sleep duration must be non-negative: {seconds}")
        if seconds == 0:
            await asyncio.sleep(0)
            return
        fut: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._seq += 1
        heapq.heappush(self._sleepers, (self._now + seconds, self._seq, fut))
        await fut
