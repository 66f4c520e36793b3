"""In-memory fixed-window rate limiter keyed by client IP.

Each IP owns a bucket of ``capacity`` tokens that refills all at once when
its window expires.  The bucket map is guarded by a ``threading.Lock`` so the
read-modify-write in :meth:`RateLimiter.take` stays atomic when handlers run
on worker threads.

Buckets of idle IPs would otherwise live forever; :meth:`RateLimiter.sweep`
drops every expired bucket and is called periodically by the scheduler
(see ``app.scheduler.jobs``).
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass


@dataclass
class RateBucket:
    """Remaining tokens for one IP and the moment its window ends."""
    tokens: int
    reset_at: float


class RateLimiter:
    """Fixed-window token bucket per client IP."""

    def __init__(
        self,
        capacity: int = 30,
        window_seconds: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.capacity = capacity
        self.window_seconds = window_seconds
        self._clock = clock
        self._buckets: dict[str, RateBucket] = {}
        self._lock = threading.Lock()

    def take(self, ip: str) -> bool:
        """Consume one token for *ip*.

        Returns True when the request is admitted, False when the bucket is
        empty.  A missing or expired bucket is replaced by a fresh one that
        already accounts for the current request.
        """
        now = self._clock()
        with self._lock:
            bucket = self._buckets.get(ip)
            if bucket is None or now > bucket.reset_at:
                self._buckets[ip] = RateBucket(
                    tokens=self.capacity - 1,
                    reset_at=now + self.window_seconds,
                )
                return True
            if bucket.tokens <= 0:
                return False
            bucket.tokens -= 1
            return True

    def sweep(self) -> int:
        """Drop every bucket whose window has expired.

        Returns the number of buckets removed.
        """
        now = self._clock()
        with self._lock:
            expired = [ip for ip, b in self._buckets.items() if now > b.reset_at]
            for ip in expired:
                del self._buckets[ip]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._buckets)
