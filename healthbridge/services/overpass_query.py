"""Overpass QL construction for the amenity radius search."""

from __future__ import annotations

from dataclasses import dataclass

from healthbridge.config import settings
from healthbridge.models import Coordinate

AMENITY_CATEGORIES: tuple[str, ...] = (
    "clinic",
    "hospital",
    "doctors",
    "pharmacy",
    "food_bank",
    "drinking_water",
    "water_point",
)

# Nodes are point features; ways are mapped outlines that need ``out center``.
ELEMENT_KINDS: tuple[str, ...] = ("node", "way")


@dataclass(frozen=True)
class QuerySpec:
    """A bounded-radius, multi-category amenity search around one point."""

    center: Coordinate
    radius_m: int
    categories: tuple[str, ...]
    timeout: int = 25

    def to_overpass_ql(self) -> str:
        lat = self.center.lat
        lng = self.center.lng
        clauses = [
            f'  {kind}["amenity"="{category}"](around:{self.radius_m},{lat},{lng});'
            for category in self.categories
            for kind in ELEMENT_KINDS
        ]
        return "\n".join(
            [
                f"[out:json][timeout:{self.timeout}];",
                "(",
                *clauses,
                ");",
                "out center;",
            ]
        )


def build_query(
    center: Coordinate,
    radius_m: int | None = None,
    categories: tuple[str, ...] = AMENITY_CATEGORIES,
) -> QuerySpec:
    """Return the amenity query for *center*.

    *categories* may only narrow the fixed category set; anything outside
    it raises ``ValueError``.
    """
    if radius_m is None:
        radius_m = settings.search_radius_m
    if radius_m <= 0:
        raise ValueError(f"radius_m must be positive, got {radius_m}")

    unknown = [c for c in categories if c not in AMENITY_CATEGORIES]
    if unknown:
        raise ValueError(f"Unsupported amenity categories: {', '.join(unknown)}")
    if not categories:
        raise ValueError("At least one amenity category is required")

    return QuerySpec(
        center=center,
        radius_m=int(radius_m),
        categories=tuple(categories),
        timeout=settings.overpass_timeout,
    )
