"""Error kinds surfaced by the resource discovery pipeline."""

from __future__ import annotations


class DiscoveryError(Exception):
    """Base class for every failure a discovery request can end in.

    Each subclass carries the HTTP status the API layer responds with and
    a caller-safe ``detail`` message.
    """

    status_code: int = 500
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class RateLimited(DiscoveryError):
    """Admission denied for the caller's key."""

    status_code = 429
    default_detail = "Too many requests. Please try again in a minute."

    def __init__(
        self,
        detail: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(detail)
        self.headers = headers or {}


class InvalidInput(DiscoveryError):
    status_code = 400
    default_detail = "Location must be a non-empty string."


class LocationNotFound(DiscoveryError):
    status_code = 404
    default_detail = "Location not found. Please try a different search term."


class UpstreamUnavailable(DiscoveryError):
    """Transport failure, non-success status or timeout from a provider."""

    status_code = 502
    default_detail = "Failed to fetch resources. Please try again."

    def __init__(self, detail: str | None = None, provider: str = "") -> None:
        super().__init__(detail)
        self.provider = provider


class InternalError(DiscoveryError):
    """Unexpected failure, including malformed provider payloads."""

    status_code = 500
    default_detail = "Internal server error"
