"""Lightweight models used by the SDK client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

_HEADER_NAMES = ("x-ratelimit-limit", "x-ratelimit-remaining", "x-ratelimit-reset")


@dataclass(frozen=True)
class RateLimitInfo:
    """Sliding-window quota as reported by the server."""

    limit: int
    remaining: int
    reset: int

    @property
    def exhausted(self) -> bool:
        return self.remaining <= 0

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> RateLimitInfo | None:
        """Parse ``X-RateLimit-*`` headers, returning *None* if any is absent."""
        values = [headers.get(name) for name in _HEADER_NAMES]
        if any(v is None for v in values):
            return None
        try:
            limit, remaining, reset = (int(v) for v in values)
        except ValueError:
            return None
        return cls(limit=limit, remaining=remaining, reset=reset)
