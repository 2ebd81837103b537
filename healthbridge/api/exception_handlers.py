"""Global exception handlers for structured JSON error responses."""

from __future__ import annotations

import logging
import traceback

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from healthbridge.errors import DiscoveryError, InternalError, RateLimited

logger = logging.getLogger("healthbridge.errors")


def _error_body(status_code: int, detail) -> dict:
    return {"error": True, "status_code": status_code, "detail": detail}


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return structured JSON for all HTTP exceptions (4xx/5xx)."""
    headers = {}
    if exc.headers:
        headers = {
            k: v for k, v in exc.headers.items() if k.startswith("X-RateLimit-")
        }

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.status_code, exc.detail),
        headers=headers,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content=_error_body(422, exc.errors()),
    )


async def discovery_exception_handler(
    request: Request, exc: DiscoveryError
) -> JSONResponse:
    """Map pipeline error kinds onto their HTTP status.

    Rate-limited responses keep their ``X-RateLimit-*`` headers so clients
    can see when to retry. Internal errors log the chained cause but only
    ever return the generic detail.
    """
    headers = {}
    if isinstance(exc, RateLimited):
        headers = dict(exc.headers)
    elif isinstance(exc, InternalError):
        logger.error(
            "Internal error on %s %s", request.method, request.url.path, exc_info=exc
        )
    elif exc.status_code >= 500:
        logger.warning(
            "%s on %s %s", type(exc).__name__, request.method, request.url.path
        )

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.status_code, exc.detail),
        headers=headers,
    )


async def unhandled_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Catch-all for unhandled exceptions.

    Logs the full traceback server-side but returns a generic 500 response
    with no internal details leaked.
    """
    logger.error(
        "Unhandled exception on %s %s:\n%s",
        request.method,
        request.url.path,
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
    )

    return JSONResponse(
        status_code=500,
        content=_error_body(500, "Internal server error"),
    )
