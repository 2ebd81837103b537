"""Tests for Overpass query construction."""

from __future__ import annotations

import pytest

from healthbridge.models import Coordinate
from healthbridge.services.overpass_query import AMENITY_CATEGORIES, QuerySpec, build_query

LA = Coordinate(lat=34.05, lng=-118.24)


def test_defaults():
    query = build_query(LA)
    assert query.radius_m == 5000
    assert query.categories == AMENITY_CATEGORIES
    assert query.timeout == 25
    assert query.center == LA


def test_category_set_is_fixed():
    assert set(AMENITY_CATEGORIES) == {
        "clinic",
        "hospital",
        "doctors",
        "pharmacy",
        "food_bank",
        "drinking_water",
        "water_point",
    }


def test_ql_covers_nodes_and_ways_for_every_category():
    ql = build_query(LA).to_overpass_ql()
    for category in AMENITY_CATEGORIES:
        assert f'node["amenity"="{category}"](around:5000,34.05,-118.24);' in ql
        assert f'way["amenity"="{category}"](around:5000,34.05,-118.24);' in ql


def test_ql_header_and_output_mode():
    ql = build_query(LA).to_overpass_ql()
    lines = ql.splitlines()
    assert lines[0] == "[out:json][timeout:25];"
    assert lines[-1] == "out center;"


def test_custom_radius_and_narrowed_categories():
    query = build_query(LA, radius_m=1200, categories=("hospital",))
    ql = query.to_overpass_ql()
    assert "(around:1200," in ql
    assert "clinic" not in ql
    assert ql.count("hospital") == 2


def test_rejects_categories_outside_fixed_set():
    with pytest.raises(ValueError, match="Unsupported"):
        build_query(LA, categories=("hospital", "nightclub"))


def test_rejects_empty_categories():
    with pytest.raises(ValueError):
        build_query(LA, categories=())


@pytest.mark.parametrize("radius", [0, -10])
def test_rejects_non_positive_radius(radius):
    with pytest.raises(ValueError):
        build_query(LA, radius_m=radius)


def test_query_spec_is_immutable():
    query = build_query(LA)
    with pytest.raises(AttributeError):
        query.radius_m = 1  # type: ignore[misc]
    assert isinstance(query, QuerySpec)
