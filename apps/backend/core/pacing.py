"""
Randomized pacing between browser actions.

Jittered waits give client-side rendering time to settle and keep request
timing from looking scripted. The sleep coroutine and random source are
injectable so tests can run with NoDelayPacer.
"""
import asyncio
import logging
import random
from typing import Awaitable, Callable, Optional, Sequence

logger = logging.getLogger(__name__)

DEFAULT_SETTLE = (1.5, 4.0)
DEFAULT_REQUEST_DELAY = (1.5, 3.0)


class Pacer:
    """Jittered delay provider"""

    def __init__(
        self,
        request_delay: Sequence[float] = DEFAULT_REQUEST_DELAY,
        rng: Optional[random.Random] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None
    ):
        self.request_delay = tuple(request_delay)
        self._rng = rng or random.Random()
        self._sleep = sleep or asyncio.sleep

    def jitter(self, bounds: Sequence[float]) -> float:
        low, high = bounds
        if high <= low:
            return max(0.0, float(low))
        return self._rng.uniform(low, high)

    async def wait(self, bounds: Sequence[float]) -> float:
        seconds = self.jitter(bounds)
        if seconds > 0:
            logger.debug(f"[pacing] Waiting {seconds:.2f}s")
            await self._sleep(seconds)
        return seconds

    async def settle(self, bounds: Optional[Sequence[float]] = None) -> float:
        """Wait after a navigation so the DOM can finish mutating."""
        return await self.wait(bounds or DEFAULT_SETTLE)

    async def between_requests(self, bounds: Optional[Sequence[float]] = None) -> float:
        """Wait between successive detail-page visits. Always applied."""
        return await self.wait(bounds or self.request_delay)


class NoDelayPacer(Pacer):
    """Pacer that records requested waits without sleeping."""

    def __init__(self):
        super().__init__()
        self.waits = []

    async def wait(self, bounds: Sequence[float]) -> float:
        self.waits.append(tuple(bounds))
        return 0.0
