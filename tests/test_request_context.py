"""Tests for request ID generation and contextvar propagation."""

from __future__ import annotations

import re

import pytest

from healthbridge.services.request_context import (
    generate_request_id,
    get_request_id,
    request_id_var,
    resolve_request_id,
)


def test_generate_request_id_is_hex():
    rid = generate_request_id()
    assert re.fullmatch(r"[0-9a-f]{32}", rid), f"Not 32 hex chars: {rid}"


def test_generate_request_id_unique():
    ids = {generate_request_id() for _ in range(100)}
    assert len(ids) == 100


def test_resolve_keeps_well_formed_incoming():
    assert resolve_request_id("abc-123_X.y") == "abc-123_X.y"


@pytest.mark.parametrize("incoming", [None, "", "has space", "x" * 65, "new\nline"])
def test_resolve_generates_for_missing_or_unsafe(incoming):
    rid = resolve_request_id(incoming)
    assert rid != incoming
    assert re.fullmatch(r"[0-9a-f]{32}", rid)


def test_set_and_get():
    token = request_id_var.set("abc123")
    try:
        assert get_request_id() == "abc123"
    finally:
        request_id_var.reset(token)
