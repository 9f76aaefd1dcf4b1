"""Sliding-window rate limiter."""

import logging
import threading
import time
from collections import deque
from typing import Callable

from open_finance.models.events import RateLimitExceededEvent
from open_finance.services.ports import EventSink

logger = logging.getLogger(__name__)


class SlidingWindowRateLimiter:
    """Count requests per ``(identifier, endpoint)`` over a sliding window.

    All reads and writes go through one lock, so concurrent ``record``
    calls from many request threads are counted exactly.

    Parameters
    ----------
    limit : int
        Requests allowed inside one window.
    window_seconds : float
        Window length in seconds.
    clock : Callable[[], float] | None
        Monotonic clock, injectable for tests.
    event_sink : EventSink | None
        When given, a ``RateLimitExceededEvent`` is published each time
        ``is_within_limit`` answers False.
    """

    def __init__(
        self,
        limit: int = 300,
        window_seconds: float = 60.0,
        clock: Callable[[], float] | None = None,
        event_sink: EventSink | None = None,
    ) -> None:
        if limit <= 0:
            raise ValueError("limit must be positive")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock or time.monotonic
        self._event_sink = event_sink
        self._hits: dict[tuple[str, str], deque[float]] = {}
        self._lock = threading.Lock()

    def _count(self, key: tuple[str, str], now: float) -> int:
        hits = self._hits.get(key)
        if hits is None:
            return 0
        cutoff = now - self.window_seconds
        while hits and hits[0] <= cutoff:
            hits.popleft()
        if not hits:
            del self._hits[key]
        return len(hits)

    def is_within_limit(self, identifier: str, endpoint: str) -> bool:
        with self._lock:
            count = self._count((identifier, endpoint), self._clock())
        within = count < self.limit
        if not within:
            logger.warning(
                "Rate limit reached for %s on %s (%d/%d)",
                identifier, endpoint, count, self.limit,
            )
            if self._event_sink is not None:
                self._event_sink.publish(
                    RateLimitExceededEvent(
                        identifier=identifier,
                        endpoint=endpoint,
                        current_count=count,
                        limit=self.limit,
                    )
                )
        return within

    def record(self, identifier: str, endpoint: str) -> None:
        with self._lock:
            now = self._clock()
            key = (identifier, endpoint)
            self._count(key, now)
            self._hits.setdefault(key, deque()).append(now)

    def remaining(self, identifier: str, endpoint: str) -> int:
        with self._lock:
            count = self._count((identifier, endpoint), self._clock())
        return max(0, self.limit - count)

    def reset(self, identifier: str | None = None) -> None:
        """Forget recorded requests for one identifier, or for everyone."""
        with self._lock:
            if identifier is None:
                self._hits.clear()
            else:
                for key in [k for k in self._hits if k[0] == identifier]:
                    del self._hits[key]
