"""Async and sync HTTP clients for the HealthBridge API."""

from __future__ import annotations

from typing import Any

import httpx

from healthbridge.api.schemas import HealthResponse, ResourcesResponse
from healthbridge.sdk.exceptions import (
    HealthBridgeError,
    NotFoundError,
    RateLimitError,
    UpstreamError,
    ValidationError,
)
from healthbridge.sdk.models import RateLimitInfo

_STATUS_MAP: dict[int, type[HealthBridgeError]] = {
    400: ValidationError,
    404: NotFoundError,
    422: ValidationError,
    429: RateLimitError,
    502: UpstreamError,
}


def _build_exception(
    status_code: int,
    detail: str,
    rate_limit_info: RateLimitInfo | None,
) -> HealthBridgeError:
    exc_cls = _STATUS_MAP.get(status_code, HealthBridgeError)
    if exc_cls is RateLimitError:
        return RateLimitError(status_code, detail, rate_limit_info)
    return exc_cls(status_code, detail)


def _parse_detail(response: httpx.Response) -> str:
    """Extract the ``detail`` field from a JSON error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict):
        return str(body.get("detail", response.text))
    return response.text


def _resource_params(location: str | None, type: str | None) -> dict[str, Any]:
    params: dict[str, Any] = {}
    if location is not None:
        params["location"] = location
    if type is not None:
        params["type"] = type
    return params


# ---------------------------------------------------------------------------
# Async client
# ---------------------------------------------------------------------------


class AsyncHealthBridgeClient:
    """Async client for the HealthBridge API (backed by ``httpx.AsyncClient``)."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        *,
        _transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        kwargs: dict[str, Any] = {"base_url": base_url, "timeout": timeout}
        if _transport is not None:
            kwargs["transport"] = _transport
        self._client = httpx.AsyncClient(**kwargs)
        self.last_rate_limit: RateLimitInfo | None = None

    async def __aenter__(self) -> AsyncHealthBridgeClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    def _handle_response(self, response: httpx.Response) -> None:
        self.last_rate_limit = RateLimitInfo.from_headers(response.headers)
        if response.status_code >= 400:
            raise _build_exception(
                response.status_code, _parse_detail(response), self.last_rate_limit,
            )

    async def health(self) -> HealthResponse:
        resp = await self._client.get("/health")
        self._handle_response(resp)
        return HealthResponse.model_validate(resp.json())

    async def resources(
        self,
        location: str | None = None,
        *,
        type: str | None = None,
    ) -> ResourcesResponse:
        """Search resources near *location* (server default when omitted)."""
        resp = await self._client.get(
            "/v1/resources", params=_resource_params(location, type)
        )
        self._handle_response(resp)
        return ResourcesResponse.model_validate(resp.json())


# ---------------------------------------------------------------------------
# Sync client
# ---------------------------------------------------------------------------


class HealthBridgeClient:
    """Synchronous client for the HealthBridge API (backed by ``httpx.Client``)."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        *,
        _transport: httpx.BaseTransport | None = None,
    ) -> None:
        kwargs: dict[str, Any] = {"base_url": base_url, "timeout": timeout}
        if _transport is not None:
            kwargs["transport"] = _transport
        self._client = httpx.Client(**kwargs)
        self.last_rate_limit: RateLimitInfo | None = None

    def __enter__(self) -> HealthBridgeClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _handle_response(self, response: httpx.Response) -> None:
        self.last_rate_limit = RateLimitInfo.from_headers(response.headers)
        if response.status_code >= 400:
            raise _build_exception(
                response.status_code, _parse_detail(response), self.last_rate_limit,
            )

    def health(self) -> HealthResponse:
        resp = self._client.get("/health")
        self._handle_response(resp)
        return HealthResponse.model_validate(resp.json())

    def resources(
        self,
        location: str | None = None,
        *,
        type: str | None = None,
    ) -> ResourcesResponse:
        resp = self._client.get(
            "/v1/resources", params=_resource_params(location, type)
        )
        self._handle_response(resp)
        return ResourcesResponse.model_validate(resp.json())
