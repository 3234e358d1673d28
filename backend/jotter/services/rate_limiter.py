"""
Jotter Backend: Note Creation Rate Limiter
===========================================

What:  Per-client sliding window limiter for POST /notes.
How:   Keeps a log of recent hit timestamps per client key.
Who:   Built once in create_app() and stored on app.state; the create handler
       receives it through the get_note_rate_limiter dependency.

Algorithm: Sliding Window Log
    1. Each client key maps to a list of hit timestamps
    2. On each hit, drop timestamps older than the window
    3. If the remaining count >= limit, reject
    4. Otherwise record the hit and allow

    Default: 5 creations per 60 seconds per client.

Scope:
    State lives in process memory and is never persisted. With several
    worker processes each one enforces its own limit.
"""

import logging
import time
from collections import defaultdict
from typing import Callable, Dict, List

logger = logging.getLogger(__name__)

Clock = Callable[[], float]

# Prune idle clients once this many keys are tracked
_PRUNE_THRESHOLD = 1000


class RateLimiter:
    """
    In-memory sliding window rate limiter.

    Args:
        limit:          Max hits allowed per window
        window_seconds: Window length in seconds
        clock:          Monotonic time source, injectable for tests
    """

    def __init__(self, limit: int, window_seconds: float, clock: Clock = time.monotonic):
        if limit < 1:
            raise ValueError("limit must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: Dict[str, List[float]] = defaultdict(list)

    def _recent(self, client_key: str, now: float) -> List[float]:
        window_start = now - self.window_seconds
        hits = [ts for ts in self._hits.get(client_key, ()) if ts > window_start]
        if hits:
            self._hits[client_key] = hits
        else:
            self._hits.pop(client_key, None)
        return hits

    def allow(self, client_key: str) -> bool:
        """Record a hit for `client_key`; False when it is over the limit."""
        now = self._clock()
        hits = self._recent(client_key, now)

        if len(hits) >= self.limit:
            logger.warning(
                "Rate limit exceeded for %s: %d hits in %ss window",
                client_key,
                len(hits),
                self.window_seconds,
            )
            return False

        self._hits[client_key].append(now)

        if len(self._hits) > _PRUNE_THRESHOLD:
            self._prune(now)
        return True

    def retry_after(self, client_key: str) -> int:
        """Whole seconds until `client_key` may be allowed again (0 if now)."""
        now = self._clock()
        hits = self._recent(client_key, now)
        if len(hits) < self.limit:
            return 0
        oldest = hits[-self.limit]
        return int(oldest + self.window_seconds - now) + 1

    def reset(self) -> None:
        self._hits.clear()

    def _prune(self, now: float) -> None:
        """Drop clients with no hits inside the current window."""
        window_start = now - self.window_seconds
        idle = [key for key, hits in self._hits.items() if not hits or hits[-1] <= window_start]
        for key in idle:
            del self._hits[key]
        if idle:
            logger.debug("Pruned %d idle rate-limit entries", len(idle))
