"""In-memory sliding-window rate limiter keyed by client address."""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from dataclasses import dataclass, field

from healthbridge.config import settings

logger = logging.getLogger(__name__)


@dataclass
class _Window:
    """Timestamps of admitted requests for one key, oldest first."""

    stamps: deque[float] = field(default_factory=deque)
    lock: threading.Lock = field(default_factory=threading.Lock)
    evicted: bool = False


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    reset: int

    @property
    def headers(self) -> dict[str, str]:
        return {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(self.reset),
        }


class SlidingWindowRateLimiter:
    """Thread-safe per-key sliding-window rate limiter.

    Each key owns its own lock, so checks for one client never wait on
    another. The registry lock only guards the key -> window mapping.

    Keys with no activity inside the window are evicted by a sweep that
    piggybacks on admission checks and runs at most once per
    ``sweep_interval`` seconds.
    """

    def __init__(
        self,
        max_requests: int = 30,
        window_seconds: float = 60,
        sweep_interval: float | None = None,
    ):
        self._max_requests = max_requests
        self._window = window_seconds
        self._sweep_interval = window_seconds if sweep_interval is None else sweep_interval
        self._windows: dict[str, _Window] = {}
        self._lock = threading.Lock()
        self._last_sweep = time.monotonic()

    @property
    def active_keys(self) -> int:
        with self._lock:
            return len(self._windows)

    def admit(self, key: str) -> bool:
        return self.check(key).allowed

    def check(self, key: str) -> RateLimitDecision:
        """Record an attempt for *key* and decide whether it may proceed.

        Denied attempts are not recorded.
        """
        now = time.monotonic()
        self._maybe_sweep(now)
        window_start = now - self._window

        while True:
            win = self._get_window(key)
            with win.lock:
                if win.evicted:
                    # Lost a race with the sweeper; pick up the fresh window
                    continue

                dq = win.stamps
                while dq and dq[0] <= window_start:
                    dq.popleft()

                allowed = len(dq) < self._max_requests
                if allowed:
                    dq.append(now)

                remaining = max(self._max_requests - len(dq), 0)
                reset = int(self._window - (now - dq[0]) if dq else self._window)
                return RateLimitDecision(
                    allowed=allowed,
                    limit=self._max_requests,
                    remaining=remaining,
                    reset=reset,
                )

    def sweep(self) -> int:
        """Evict windows with no timestamp inside the current window.

        Windows whose lock is held by an in-flight check are skipped.
        Returns the number of evicted keys.
        """
        now = time.monotonic()
        window_start = now - self._window
        evicted = 0
        with self._lock:
            self._last_sweep = now
            for key, win in list(self._windows.items()):
                if not win.lock.acquire(blocking=False):
                    continue
                try:
                    if not win.stamps or win.stamps[-1] <= window_start:
                        win.evicted = True
                        del self._windows[key]
                        evicted += 1
                finally:
                    win.lock.release()
        if evicted:
            logger.debug("Rate limiter evicted %d stale keys", evicted)
        return evicted

    def clear(self) -> None:
        """Remove all tracked state (useful in tests)."""
        with self._lock:
            for win in self._windows.values():
                win.evicted = True
            self._windows.clear()

    def _get_window(self, key: str) -> _Window:
        with self._lock:
            win = self._windows.get(key)
            if win is None:
                win = self._windows[key] = _Window()
            return win

    def _maybe_sweep(self, now: float) -> None:
        with self._lock:
            due = now - self._last_sweep >= self._sweep_interval
        if due:
            self.sweep()


# Module-level singleton initialized from config
rate_limiter = SlidingWindowRateLimiter(
    max_requests=settings.rate_limit_per_minute,
    window_seconds=settings.rate_limit_window,
    sweep_interval=settings.rate_limit_sweep_interval,
)
