"""Request correlation ID via contextvars."""

from __future__ import annotations

import re
import uuid
from contextvars import ContextVar

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Incoming IDs are echoed into headers and logs, so only accept a safe shape.
_INCOMING_ID_RE = re.compile(r"[A-Za-z0-9._-]{1,64}")


def generate_request_id() -> str:
    """Return a new 32-character hex request ID."""
    return uuid.uuid4().hex


def resolve_request_id(incoming: str | None) -> str:
    """Reuse a caller-supplied ID when well formed, else generate one."""
    if incoming and _INCOMING_ID_RE.fullmatch(incoming):
        return incoming
    return generate_request_id()


def get_request_id() -> str:
    return request_id_var.get()
