from __future__ import annotations

from fastapi import Request

from healthbridge.config import settings

UNKNOWN_CLIENT = "unknown"


def get_client_key(request: Request) -> str:
    """Identify the caller for rate limiting by network address.

    ``X-Forwarded-For`` is only honoured when ``trust_forwarded_for`` is
    set, since clients can otherwise forge it to dodge the limiter.
    """
    if settings.trust_forwarded_for:
        forwarded = request.headers.get("x-forwarded-for", "")
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_CLIENT
