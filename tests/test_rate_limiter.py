"""Tests for the per-key sliding-window rate limiter."""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

from healthbridge.services.rate_limiter import SlidingWindowRateLimiter


class FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _limiter_with_clock(clock: FakeClock, **kwargs) -> SlidingWindowRateLimiter:
    with patch("healthbridge.services.rate_limiter.time.monotonic", new=clock):
        return SlidingWindowRateLimiter(**kwargs)


class TestAdmission:
    def test_defaults(self):
        rl = SlidingWindowRateLimiter()
        for _ in range(30):
            assert rl.admit("10.0.0.1") is True
        assert rl.admit("10.0.0.1") is False

    def test_allows_up_to_capacity(self):
        rl = SlidingWindowRateLimiter(max_requests=3, window_seconds=60)
        assert [rl.admit("key-a") for _ in range(3)] == [True, True, True]

    def test_blocks_over_capacity(self):
        rl = SlidingWindowRateLimiter(max_requests=2, window_seconds=60)
        rl.admit("key-a")
        rl.admit("key-a")
        decision = rl.check("key-a")
        assert decision.allowed is False
        assert decision.headers["X-RateLimit-Remaining"] == "0"

    def test_denied_attempts_are_not_recorded(self):
        clock = FakeClock()
        rl = _limiter_with_clock(clock, max_requests=1, window_seconds=60)
        with patch("healthbridge.services.rate_limiter.time.monotonic", new=clock):
            assert rl.admit("key-a") is True
            clock.now = 59.0
            assert rl.admit("key-a") is False
            # Only the t=0 stamp counts; the t=59 denial must not extend the block
            clock.now = 60.0
            assert rl.admit("key-a") is True

    def test_different_keys_independent(self):
        rl = SlidingWindowRateLimiter(max_requests=1, window_seconds=60)
        assert rl.admit("key-a") is True
        assert rl.admit("key-a") is False
        assert rl.admit("key-b") is True

    def test_headers_info(self):
        rl = SlidingWindowRateLimiter(max_requests=5, window_seconds=60)
        headers = rl.check("key-a").headers
        assert headers["X-RateLimit-Limit"] == "5"
        assert headers["X-RateLimit-Remaining"] == "4"
        assert headers["X-RateLimit-Reset"] == "60"

    def test_clear_resets_state(self):
        rl = SlidingWindowRateLimiter(max_requests=1, window_seconds=60)
        rl.admit("key-a")
        assert rl.admit("key-a") is False
        rl.clear()
        assert rl.admit("key-a") is True


class TestSlidingWindow:
    def test_window_expiry(self):
        rl = SlidingWindowRateLimiter(max_requests=1, window_seconds=1)
        assert rl.admit("key-a") is True

        future = time.monotonic() + 2
        with patch("healthbridge.services.rate_limiter.time.monotonic", return_value=future):
            assert rl.admit("key-a") is True

    def test_window_slides_instead_of_resetting(self):
        clock = FakeClock()
        rl = _limiter_with_clock(clock, max_requests=2, window_seconds=60)
        with patch("healthbridge.services.rate_limiter.time.monotonic", new=clock):
            assert rl.admit("key-a") is True  # t=0
            clock.now = 30.0
            assert rl.admit("key-a") is True  # t=30
            clock.now = 45.0
            assert rl.admit("key-a") is False
            clock.now = 60.0
            assert rl.admit("key-a") is True  # t=0 stamp has aged out
            clock.now = 61.0
            # A fixed 60 s bucket would have reset here; the t=30 stamp still counts
            assert rl.admit("key-a") is False
            clock.now = 90.0
            assert rl.admit("key-a") is True

    def test_reset_header_counts_down(self):
        clock = FakeClock()
        rl = _limiter_with_clock(clock, max_requests=5, window_seconds=60)
        with patch("healthbridge.services.rate_limiter.time.monotonic", new=clock):
            rl.admit("key-a")
            clock.now = 20.0
            assert rl.check("key-a").reset == 40


class TestEviction:
    def test_sweep_evicts_stale_windows(self):
        clock = FakeClock()
        rl = _limiter_with_clock(clock, max_requests=5, window_seconds=60, sweep_interval=10)
        with patch("healthbridge.services.rate_limiter.time.monotonic", new=clock):
            rl.admit("stale")
            rl.admit("busy")
            clock.now = 30.0
            rl.admit("busy")
            clock.now = 70.0
            rl.admit("new")  # triggers the sweep

        assert "stale" not in rl._windows
        assert set(rl._windows) == {"busy", "new"}
        assert rl.active_keys == 2

    def test_sweep_not_run_before_interval(self):
        clock = FakeClock()
        rl = _limiter_with_clock(clock, max_requests=5, window_seconds=1, sweep_interval=100)
        with patch("healthbridge.services.rate_limiter.time.monotonic", new=clock):
            rl.admit("a")
            clock.now = 50.0
            rl.admit("b")
        assert rl.active_keys == 2

    def test_explicit_sweep_returns_count(self):
        clock = FakeClock()
        rl = _limiter_with_clock(clock, max_requests=5, window_seconds=60)
        with patch("healthbridge.services.rate_limiter.time.monotonic", new=clock):
            rl.admit("a")
            rl.admit("b")
            clock.now = 120.0
            assert rl.sweep() == 2
        assert rl.active_keys == 0

    def test_evicted_window_is_not_reused(self):
        rl = SlidingWindowRateLimiter(max_requests=5, window_seconds=60)
        orphan = rl._get_window("key-a")
        rl.sweep()  # empty window counts as stale
        assert orphan.evicted is True

        assert rl.admit("key-a") is True
        assert rl._windows["key-a"] is not orphan
        assert len(rl._windows["key-a"].stamps) == 1

    def test_sweep_skips_busy_window(self):
        rl = SlidingWindowRateLimiter(max_requests=5, window_seconds=60)
        win = rl._get_window("key-a")
        with win.lock:
            assert rl.sweep() == 0
        assert rl.active_keys == 1


class TestConcurrency:
    def test_same_key_never_exceeds_capacity(self):
        rl = SlidingWindowRateLimiter(max_requests=30, window_seconds=60)
        with ThreadPoolExecutor(max_workers=16) as pool:
            results = list(pool.map(lambda _: rl.admit("shared"), range(200)))
        assert results.count(True) == 30

    def test_other_keys_not_blocked_by_held_window(self):
        rl = SlidingWindowRateLimiter(max_requests=5, window_seconds=60)
        win = rl._get_window("key-a")
        with win.lock:
            with ThreadPoolExecutor(max_workers=1) as pool:
                future = pool.submit(rl.admit, "key-b")
                assert future.result(timeout=2) is True
