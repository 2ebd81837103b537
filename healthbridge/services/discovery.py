"""Resource discovery: free-text location -> nearby deduplicated resources."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence

from healthbridge.errors import DiscoveryError, InternalError, InvalidInput, RateLimited
from healthbridge.models import Coordinate, DiscoveryResult, GeocodeResult, RawAmenity
from healthbridge.services.amenity_fetcher import fetch_amenities
from healthbridge.services.dedup import dedupe
from healthbridge.services.geocoder import geocode
from healthbridge.services.metrics import metrics
from healthbridge.services.normalizer import normalize_all
from healthbridge.services.overpass_query import QuerySpec, build_query
from healthbridge.services.rate_limiter import SlidingWindowRateLimiter, rate_limiter

logger = logging.getLogger(__name__)


class ResourceDiscoveryService:
    """Runs one discovery request through every pipeline stage in order.

    Stages are sequential because each needs the previous result. Any
    stage failure ends the request; nothing is retried.
    """

    def __init__(
        self,
        limiter: SlidingWindowRateLimiter | None = None,
        geocoder: Callable[[str], Awaitable[GeocodeResult]] | None = None,
        query_builder: Callable[[Coordinate], QuerySpec] | None = None,
        fetcher: Callable[[QuerySpec], Awaitable[Sequence[RawAmenity]]] | None = None,
    ) -> None:
        # Unset collaborators resolve to the module-level functions at call time
        self._limiter = limiter
        self._geocode = geocoder
        self._build_query = query_builder
        self._fetch = fetcher

    async def discover(self, client_key: str, location_text: str | None) -> DiscoveryResult:
        limiter = self._limiter or rate_limiter
        geocoder = self._geocode or geocode
        query_builder = self._build_query or build_query
        fetcher = self._fetch or fetch_amenities

        decision = limiter.check(client_key)
        if not decision.allowed:
            metrics.inc_rate_limited()
            logger.info("Rate limited client")
            raise RateLimited(headers=decision.headers)

        location = (location_text or "").strip()
        if not location:
            raise InvalidInput()

        try:
            place = await geocoder(location)
            query = query_builder(place.coordinate)
            raw = await fetcher(query)
            resources = dedupe(normalize_all(raw))
        except DiscoveryError:
            raise
        except Exception as exc:
            logger.exception("Discovery pipeline failed unexpectedly")
            raise InternalError() from exc

        logger.info(
            "Discovered %d resources (%d raw elements)", len(resources), len(raw)
        )
        metrics.add_resources(len(resources))
        return DiscoveryResult(
            coordinate=place.coordinate,
            display_name=place.display_name,
            resources=tuple(resources),
            rate_limit_headers=decision.headers,
        )


# Module-level singleton wired to the process-wide rate limiter
discovery_service = ResourceDiscoveryService()
