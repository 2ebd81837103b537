"""Exception hierarchy for the HealthBridge SDK."""

from __future__ import annotations

from healthbridge.sdk.models import RateLimitInfo


class HealthBridgeError(Exception):
    """Base exception for all HealthBridge API errors."""

    def __init__(self, status_code: int, detail: str) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{status_code}: {detail}")


class ValidationError(HealthBridgeError):
    """Raised on 400 or 422 responses."""


class NotFoundError(HealthBridgeError):
    """Raised on 404 responses (the location could not be geocoded)."""


class RateLimitError(HealthBridgeError):
    """Raised on 429 responses."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        rate_limit_info: RateLimitInfo | None = None,
    ) -> None:
        super().__init__(status_code, detail)
        self.rate_limit_info = rate_limit_info


class UpstreamError(HealthBridgeError):
    """Raised on 502 responses (geocoder or map database unavailable)."""
