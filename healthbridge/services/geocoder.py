from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from healthbridge.config import settings
from healthbridge.errors import InternalError, LocationNotFound, UpstreamUnavailable
from healthbridge.models import Coordinate, GeocodeResult
from healthbridge.services.metrics import metrics

logger = logging.getLogger(__name__)


async def geocode(location: str) -> GeocodeResult:
    """Resolve free text to a coordinate using Nominatim's first candidate."""
    try:
        results = await _search_nominatim(location)
    except UpstreamUnavailable:
        metrics.inc_geocoder("failure")
        raise

    if not isinstance(results, list):
        metrics.inc_geocoder("failure")
        raise InternalError("Unexpected response from geocoding provider")
    if not results:
        metrics.inc_geocoder("not_found")
        raise LocationNotFound()

    try:
        result = _parse_candidate(results[0], location)
    except InternalError:
        metrics.inc_geocoder("failure")
        raise
    metrics.inc_geocoder("ok")
    return result


async def _search_nominatim(location: str):
    params = {
        "q": location,
        "format": "json",
        "limit": 1,
    }
    headers = {"User-Agent": settings.user_agent}
    try:
        async with httpx.AsyncClient(timeout=settings.geocoder_timeout) as client:
            resp = await client.get(settings.nominatim_url, params=params, headers=headers)
            resp.raise_for_status()
    except httpx.HTTPError as exc:
        logger.warning("Nominatim request failed: %s", exc.__class__.__name__)
        raise UpstreamUnavailable(
            "Geocoding provider is unavailable. Please try again.",
            provider="nominatim",
        ) from exc

    try:
        return resp.json()
    except ValueError as exc:
        raise InternalError("Unexpected response from geocoding provider") from exc


def _parse_candidate(hit, location: str) -> GeocodeResult:
    if not isinstance(hit, dict):
        raise InternalError("Unexpected response from geocoding provider")
    try:
        coordinate = Coordinate(lat=float(hit["lat"]), lng=float(hit["lon"]))
    except (KeyError, TypeError, ValueError, ValidationError) as exc:
        raise InternalError("Unexpected response from geocoding provider") from exc
    return GeocodeResult(
        coordinate=coordinate,
        display_name=hit.get("display_name") or location,
    )
