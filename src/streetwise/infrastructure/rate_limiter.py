"""
Request throttler.

Spaces outbound page loads with a random human-like delay and enforces a
per-minute request cap on top of it.
"""

import asyncio
import logging
import random
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Set

logger = logging.getLogger(__name__)

MINUTE_MS = 60_000


@dataclass
class ThrottleConfig:
    """Configuration for the request throttler."""
    # Random delay bounds before each request (milliseconds)
    min_delay: int = 2000
    max_delay: int = 8000

    # Requests allowed per rolling minute before the delay is stretched
    requests_per_minute: int = 30

    # Advisory only; reported in stats but not enforced
    requests_per_hour: int = 1000


class RequestThrottler:
    """
    Throttler combining a random delay with a per-minute cap.

    Each ``throttle()`` call sleeps a uniform random delay in
    ``[min_delay, max_delay]`` ms. When the per-minute counter has reached
    ``requests_per_minute`` and the previous request was less than a minute
    ago, the delay is raised to the remainder of that minute. Every request
    schedules a release one minute later that lowers the counter by
    ``requests_per_minute`` (never below zero).
    """

    def __init__(
        self,
        config: Optional[ThrottleConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the throttler.

        Args:
            config: Throttle configuration
            rng: Random source for delays
        """
        self.config = config or ThrottleConfig()
        self._rng = rng or random.Random()

        self._request_count = 0
        self._last_request_time: Optional[float] = None  # monotonic seconds
        self._release_handles: Set[asyncio.TimerHandle] = set()

        # Statistics
        self._total_requests = 0
        self._total_wait_ms = 0

    async def throttle(self) -> int:
        """
        Wait before the next request.

        Returns:
            Delay that was applied (milliseconds)
        """
        delay = self._rng.randint(self.config.min_delay, self.config.max_delay)

        if self._last_request_time is not None:
            elapsed_ms = int((time.monotonic() - self._last_request_time) * 1000)
            if elapsed_ms < MINUTE_MS and self._request_count >= self.config.requests_per_minute:
                delay = max(delay, MINUTE_MS - elapsed_ms)
                logger.info(f"Rate limit reached, waiting {delay}ms")

        logger.debug(f"Throttling request for {delay}ms")
        await asyncio.sleep(delay / 1000)

        self._last_request_time = time.monotonic()
        self._request_count += 1
        self._total_requests += 1
        self._total_wait_ms += delay
        self._schedule_release()

        return delay

    def _schedule_release(self) -> None:
        loop = asyncio.get_running_loop()
        handle = loop.call_later(MINUTE_MS / 1000, lambda: self._release(handle))
        self._release_handles.add(handle)

    def _release(self, handle: asyncio.TimerHandle) -> None:
        self._release_handles.discard(handle)
        self._request_count = max(0, self._request_count - self.config.requests_per_minute)

    def configure(
        self,
        min_delay: Optional[int] = None,
        max_delay: Optional[int] = None,
        requests_per_minute: Optional[int] = None,
        requests_per_hour: Optional[int] = None,
    ) -> None:
        """Update throttle settings. Values left as None (or 0) are unchanged."""
        if min_delay:
            self.config.min_delay = min_delay
        if max_delay:
            self.config.max_delay = max_delay
        if requests_per_minute:
            self.config.requests_per_minute = requests_per_minute
        if requests_per_hour:
            self.config.requests_per_hour = requests_per_hour

        if self.config.min_delay > self.config.max_delay:
            self.config.max_delay = self.config.min_delay

        logger.info(f"Throttling configured: {self.config}")

    def reset(self) -> None:
        """Reset throttler to initial state, cancelling pending releases."""
        for handle in self._release_handles:
            handle.cancel()
        self._release_handles.clear()
        self._request_count = 0
        self._last_request_time = None
        self._total_requests = 0
        self._total_wait_ms = 0

    @property
    def request_count(self) -> int:
        """Requests counted against the current minute."""
        return self._request_count

    def get_stats(self) -> Dict[str, Any]:
        return {
            "min_delay": self.config.min_delay,
            "max_delay": self.config.max_delay,
            "requests_per_minute": self.config.requests_per_minute,
            "requests_per_hour": self.config.requests_per_hour,
            "current_minute_requests": self._request_count,
            "total_requests": self._total_requests,
            "total_wait_ms": self._total_wait_ms,
        }
