"""Tests for pipeline value types."""

from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from healthbridge.models import Coordinate, RawAmenity, ResourceRecord


@pytest.mark.parametrize(
    "lat, lng",
    [(90.5, 0.0), (-91.0, 0.0), (0.0, 180.1), (0.0, -181.0), (math.nan, 0.0), (0.0, math.inf)],
)
def test_coordinate_rejects_invalid(lat, lng):
    with pytest.raises(ValidationError):
        Coordinate(lat=lat, lng=lng)


def test_coordinate_bounds_inclusive():
    Coordinate(lat=90, lng=-180)
    Coordinate(lat=-90, lng=180)


def test_coordinate_is_frozen():
    c = Coordinate(lat=1.0, lng=2.0)
    with pytest.raises(ValidationError):
        c.lat = 3.0


def test_resource_record_requires_name():
    with pytest.raises(ValidationError):
        ResourceRecord(name="", coordinate=Coordinate(lat=0, lng=0), category="clinic")


def test_raw_amenity_from_element_node():
    raw = RawAmenity.from_element(
        {"type": "node", "lat": 1.5, "lon": 2.5, "tags": {"amenity": "clinic", "beds": 12}}
    )
    assert (raw.lat, raw.lon) == (1.5, 2.5)
    assert raw.tags == {"amenity": "clinic", "beds": "12"}


def test_raw_amenity_from_element_ignores_bool_and_junk():
    raw = RawAmenity.from_element({"type": "node", "lat": True, "lon": "east", "tags": None})
    assert raw.lat is None
    assert raw.lon is None
    assert raw.tags == {}
