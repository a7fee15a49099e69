"""Pacing for Jira label updates.

Concurrent update tasks share one limiter. ``wait`` keeps a minimum gap
between writes; ``pause`` pushes every pending write back, e.g. after Jira
answers 429 with a Retry-After header.
"""

import asyncio
import time


class RateLimiter:
    def __init__(self, delay_ms: int = 200):
        self.delay = max(delay_ms, 0) / 1000.0
        self._next_slot = 0.0
        self._lock = asyncio.Lock()

    async def wait(self) -> None:
        async with self._lock:
            now = time.monotonic()
            if self._next_slot > now:
                await asyncio.sleep(self._next_slot - now)
                now = self._next_slot
            self._next_slot = now + self.delay

    def pause(self, seconds: float) -> None:
        """Hold back all writes for at least ``seconds`` from now."""
        self._next_slot = max(self._next_slot, time.monotonic() + max(seconds, 0.0))
