"""
Fixed-window request rate limiter.

Each client owns one limiter. Counters live behind a `threading.Lock` that
is never held across an await, so granting tokens stays consistent when
callers live on several event loops. A Client, however, stays on one loop.
"""

import asyncio
import logging
import threading
import time
from typing import Callable

# Emit a stats line every this many granted requests.
_STATS_EVERY = 10

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    Paces outbound requests to a budget of N requests per window.

    Features:
    - Fixed window that resets once, on the first request past its end
    - Cancellable waits (task cancellation ends the wait immediately)
    - Cumulative request counter for diagnostics
    """

    def __init__(
        self,
        requests_per_window: int = 50,
        window: float = 60.0,
        *,
        clock: Callable[[], float] = time.monotonic,
        logger: logging.Logger | None = None,
    ):
        """
        Initialize the limiter.

        Args:
            requests_per_window: Budget of requests granted per window
            window: Window length in seconds
            clock: Monotonic time source, in seconds
            logger: Logger for diagnostics (default: module logger)
        """
        if requests_per_window < 1:
            raise ValueError("requests_per_window must be at least 1")
        if window <= 0:
            raise ValueError("window must be positive")

        self.requests_per_window = requests_per_window
        self.window = window
        self._clock = clock
        self._logger = logger or globals()["logger"]
        self._lock = threading.Lock()
        self._available = requests_per_window
        self._window_start = clock()
        self._window_requests = 0
        self._total_requests = 0

    @classmethod
    def per_minute(cls, requests: int, **kwargs) -> "RateLimiter":
        """Create a limiter allowing `requests` per minute."""
        return cls(requests_per_window=requests, window=60.0, **kwargs)

    @property
    def total_requests(self) -> int:
        """Requests granted over the limiter's lifetime."""
        with self._lock:
            return self._total_requests

    @property
    def window_requests(self) -> int:
        """Requests granted in the current window."""
        with self._lock:
            return self._window_requests

    def _try_acquire(self) -> float:
        """Take a token if one is available.

        Returns 0 when a token was taken, otherwise the seconds left until
        the current window rolls over.
        """
        with self._lock:
            now = self._clock()
            elapsed = now - self._window_start
            if elapsed >= self.window:
                self._window_start = now
                self._available = self.requests_per_window
                self._window_requests = 0
                elapsed = 0.0

            if self._available > 0:
                self._available -= 1
                self._window_requests += 1
                self._total_requests += 1
                if self._total_requests % _STATS_EVERY == 0:
                    self._logger.debug(
                        f"Rate limiter stats: {self._total_requests} total, "
                        f"{self._window_requests} in window ({elapsed:.1f}s elapsed)"
                    )
                return 0.0

            return self.window - elapsed

    async def wait(self) -> None:
        """
        Wait until a request may be sent.

        Raises:
            asyncio.CancelledError: If the calling task is cancelled, either
                before the wait starts or while it is suspended
        """
        while True:
            delay = self._try_acquire()
            if delay <= 0:
                return
            self._logger.debug(
                f"Rate limit budget of {self.requests_per_window} reached, "
                f"waiting {delay:.2f}s for window rollover"
            )
            await asyncio.sleep(delay)
