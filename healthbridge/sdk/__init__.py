"""HealthBridge Python SDK: typed clients for the HealthBridge Resource API."""

from __future__ import annotations

from healthbridge.sdk.client import AsyncHealthBridgeClient, HealthBridgeClient
from healthbridge.sdk.exceptions import (
    HealthBridgeError,
    NotFoundError,
    RateLimitError,
    UpstreamError,
    ValidationError,
)
from healthbridge.sdk.models import RateLimitInfo

__all__ = [
    "AsyncHealthBridgeClient",
    "HealthBridgeClient",
    "HealthBridgeError",
    "NotFoundError",
    "RateLimitError",
    "UpstreamError",
    "ValidationError",
    "RateLimitInfo",
]
