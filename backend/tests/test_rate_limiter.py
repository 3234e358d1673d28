"""
Jotter Backend: Rate Limiter Unit Tests
========================================

Uses a hand-driven clock so window expiry is deterministic.
"""

import pytest

from jotter.services.rate_limiter import RateLimiter


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class TestRateLimiter:

    def setup_method(self):
        self.clock = FakeClock()
        self.limiter = RateLimiter(limit=5, window_seconds=60, clock=self.clock)

    def test_allows_up_to_limit(self):
        assert all(self.limiter.allow("1.2.3.4") for _ in range(5))
        assert self.limiter.allow("1.2.3.4") is False

    def test_clients_are_independent(self):
        for _ in range(5):
            self.limiter.allow("a")
        assert self.limiter.allow("a") is False
        assert self.limiter.allow("b") is True

    def test_window_slides(self):
        for _ in range(5):
            self.limiter.allow("a")
            self.clock.advance(10)
        # Oldest hit was at t=1000; now t=1050
        assert self.limiter.allow("a") is False
        self.clock.advance(10.5)
        assert self.limiter.allow("a") is True

    def test_rejected_hits_are_not_recorded(self):
        for _ in range(5):
            self.limiter.allow("a")
        for _ in range(3):
            assert self.limiter.allow("a") is False
        self.clock.advance(60.1)
        assert all(self.limiter.allow("a") for _ in range(5))

    def test_retry_after(self):
        assert self.limiter.retry_after("a") == 0
        for _ in range(5):
            self.limiter.allow("a")
        self.clock.advance(20)
        assert self.limiter.retry_after("a") == 41

    def test_reset(self):
        for _ in range(5):
            self.limiter.allow("a")
        self.limiter.reset()
        assert self.limiter.allow("a") is True

    @pytest.mark.parametrize("limit,window", [(0, 60), (5, 0), (5, -1)])
    def test_rejects_bad_configuration(self, limit, window):
        with pytest.raises(ValueError):
            RateLimiter(limit=limit, window_seconds=window)
