from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from healthbridge.api.exception_handlers import (
    discovery_exception_handler,
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from healthbridge.api.middleware import RequestLoggingMiddleware
from healthbridge.api.routes.resources import router as resources_router
from healthbridge.api.schemas import HealthResponse
from healthbridge.config import settings
from healthbridge.errors import DiscoveryError
from healthbridge.logging_config import setup_logging
from healthbridge.services.metrics import metrics
from healthbridge.services.rate_limiter import rate_limiter

logger = logging.getLogger("healthbridge")

_DESCRIPTION = """\
Find free and low-cost health and subsistence resources near a place.

Given a free-text location, the API geocodes it with **Nominatim** and
queries **OpenStreetMap** (via Overpass) for clinics, hospitals, doctors,
pharmacies, food banks and drinking-water points within a fixed radius.

### Rate limiting

Requests are rate-limited per client address using a sliding window.
Resource responses include `X-RateLimit-Limit`, `X-RateLimit-Remaining`
and `X-RateLimit-Reset` headers.
"""

_OPENAPI_TAGS = [
    {
        "name": "system",
        "description": "Health checks and operational endpoints.",
    },
    {
        "name": "resources",
        "description": "Nearby resource discovery for a free-text location.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level, settings.log_format)
    logger.info(
        "HealthBridge starting: radius=%dm, rate limit=%d/%ds",
        settings.search_radius_m,
        settings.rate_limit_per_minute,
        settings.rate_limit_window,
    )
    yield


app = FastAPI(
    title="HealthBridge Resource API",
    version="0.1.0",
    summary="Nearby health and subsistence resources",
    description=_DESCRIPTION,
    openapi_tags=_OPENAPI_TAGS,
    lifespan=lifespan,
)

# Exception handlers
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(DiscoveryError, discovery_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# CORS
origins = [o.strip() for o in settings.cors_origins.split(",")]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_methods=["GET"],
    allow_headers=["*"],
    expose_headers=["X-RateLimit-Limit", "X-RateLimit-Remaining", "X-RateLimit-Reset"],
)

# Request logging
app.add_middleware(RequestLoggingMiddleware)

app.include_router(resources_router)


@app.get(
    "/health",
    tags=["system"],
    summary="Health check",
    response_model=HealthResponse,
)
async def health():
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "rate_limiter": {"active_keys": rate_limiter.active_keys},
        "uptime_seconds": metrics.uptime_seconds(),
    }


@app.get(
    "/metrics",
    tags=["system"],
    summary="Application metrics",
    description="Request counters, latency percentiles, provider outcomes "
    "and rate limiter state.",
)
async def get_metrics():
    snap = metrics.snapshot()
    snap["rate_limiter"] = {"active_keys": rate_limiter.active_keys}
    return snap
