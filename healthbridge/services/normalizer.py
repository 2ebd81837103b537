"""Map raw Overpass elements onto uniform resource records."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import ValidationError

from healthbridge.models import Coordinate, RawAmenity, ResourceRecord

UNNAMED_RESOURCE = "Unnamed Resource"


def resolve_coordinate(raw: RawAmenity) -> Coordinate | None:
    """Prefer the element's own point, then the centroid of an area."""
    for lat, lng in ((raw.lat, raw.lon), (raw.center_lat, raw.center_lon)):
        if lat is None or lng is None:
            continue
        try:
            return Coordinate(lat=lat, lng=lng)
        except ValidationError:
            continue
    return None


def resolve_name(tags: dict[str, str]) -> str:
    for key in ("name", "amenity"):
        value = (tags.get(key) or "").strip()
        if value:
            return value
    return UNNAMED_RESOURCE


def normalize(raw: RawAmenity) -> ResourceRecord | None:
    """Return a record for *raw*, or ``None`` when it has no usable location."""
    coordinate = resolve_coordinate(raw)
    if coordinate is None:
        return None
    return ResourceRecord(
        name=resolve_name(raw.tags),
        coordinate=coordinate,
        category=raw.tags.get("amenity", ""),
    )


def normalize_all(raws: Iterable[RawAmenity]) -> list[ResourceRecord]:
    records = []
    for raw in raws:
        record = normalize(raw)
        if record is not None:
            records.append(record)
    return records
