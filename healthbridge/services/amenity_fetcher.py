from __future__ import annotations

import logging

import httpx

from healthbridge.config import settings
from healthbridge.errors import InternalError, UpstreamUnavailable
from healthbridge.models import RawAmenity
from healthbridge.services.metrics import metrics
from healthbridge.services.overpass_query import QuerySpec

logger = logging.getLogger(__name__)


async def fetch_amenities(query: QuerySpec) -> list[RawAmenity]:
    """Run *query* against the Overpass interpreter.

    Exactly one request is made; failures are not retried.
    """
    headers = {
        "Content-Type": "text/plain",
        "User-Agent": settings.user_agent,
    }
    try:
        async with httpx.AsyncClient(timeout=query.timeout) as client:
            resp = await client.post(
                settings.overpass_url,
                content=query.to_overpass_ql(),
                headers=headers,
            )
            resp.raise_for_status()
    except httpx.HTTPError as exc:
        metrics.inc_overpass(False)
        logger.warning("Overpass request failed: %s", exc.__class__.__name__)
        raise UpstreamUnavailable(
            "Failed to fetch resources from map database",
            provider="overpass",
        ) from exc

    try:
        data = resp.json()
    except ValueError as exc:
        metrics.inc_overpass(False)
        raise InternalError("Unexpected response from map database") from exc

    elements = data.get("elements") if isinstance(data, dict) else None
    if not isinstance(elements, list):
        metrics.inc_overpass(False)
        raise InternalError("Unexpected response from map database")

    metrics.inc_overpass(True)
    amenities = [RawAmenity.from_element(el) for el in elements if isinstance(el, dict)]
    logger.debug("Overpass returned %d elements", len(amenities))
    return amenities
