"""Per-caller fixed-window admission control.

One ``AdmissionController`` is built per application and shared by every
request handler. Counters live in the ``limits`` in-memory storage; the
increment and the read of the remaining budget happen under one lock, so
concurrent requests cannot lose updates or admit more than the capacity.
"""

import logging
import math
import threading
import time
from collections.abc import Mapping
from dataclasses import dataclass

from limits import RateLimitItemPerSecond
from limits.storage import MemoryStorage
from limits.strategies import FixedWindowRateLimiter

from specforge.errors.exceptions import AdmissionDeniedError
from specforge.results import Err, Ok, Result

logger = logging.getLogger(__name__)

ANONYMOUS_KEY = "anonymous"


@dataclass(frozen=True)
class AdmissionDecision:
    remaining: int


def resolve_client_key(headers: Mapping[str, str]) -> str:
    """First X-Forwarded-For entry, else X-Real-IP, else empty."""
    forwarded = headers.get("x-forwarded-for", "")
    first = forwarded.split(",")[0].strip() if forwarded else ""
    if first:
        return first
    return (headers.get("x-real-ip") or "").strip()


class AdmissionController:
    """Fixed-window request budget keyed by caller identity.

    The first request in a window opens it with a count of one. Each later
    request increments the count and is admitted while the count stays
    within ``capacity``. Callers without an identity share one bucket.
    """

    def __init__(self, capacity: int, window_seconds: int, enabled: bool = True):
        self.capacity = capacity
        self.window_seconds = window_seconds
        self.enabled = enabled
        self._item = RateLimitItemPerSecond(capacity, window_seconds)
        self._storage = MemoryStorage()
        self._limiter = FixedWindowRateLimiter(self._storage)
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings) -> "AdmissionController":
        return cls(
            capacity=settings.rate_limit_capacity,
            window_seconds=settings.rate_limit_window_seconds,
            enabled=settings.rate_limit_enabled,
        )

    def admit(self, client_key: str) -> Result[AdmissionDecision]:
        key = client_key or ANONYMOUS_KEY
        if not self.enabled:
            return Ok(AdmissionDecision(remaining=self.capacity))

        with self._lock:
            admitted = self._limiter.hit(self._item, key)
            stats = self._limiter.get_window_stats(self._item, key)
        remaining = max(0, stats.remaining)

        if not admitted:
            retry_after = max(1, math.ceil(stats.reset_time - time.time()))
            logger.warning("admission_denied", extra={"client_key": key, "retry_after": retry_after})
            return Err(AdmissionDeniedError(retry_after=retry_after))
        return Ok(AdmissionDecision(remaining=remaining))

    def reset(self) -> None:
        self._storage.reset()
