import asyncio
import logging
import time
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    Fixed-window request limiter for the upstream API.

    At most ``max_requests`` calls are let through per ``window_seconds``.
    Once the window is used up, ``acquire`` sleeps until it ends and then
    starts a fresh window.

    Example:
        >>> limiter = RateLimiter(max_requests=100, window_seconds=60)
        >>> await limiter.acquire()  # before every outbound request
    """

    def __init__(
        self,
        max_requests: int = 100,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._sleep = sleep
        self.count = 0
        self.last_reset = clock()
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        async with self._lock:
            now = self._clock()

            if now - self.last_reset > self.window_seconds:
                self.count = 0
                self.last_reset = now

            if self.count >= self.max_requests:
                wait_time = self.window_seconds - (now - self.last_reset)
                logger.info(f"Rate limit reached, waiting {wait_time:.2f}s")
                await self._sleep(wait_time)
                self.count = 0
                self.last_reset = self._clock()

            self.count += 1
