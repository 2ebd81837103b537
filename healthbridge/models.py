"""Value types passed between discovery pipeline stages."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Coordinate(BaseModel):
    """A WGS84 point. Non-finite or out-of-range values fail validation."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class GeocodeResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    coordinate: Coordinate
    display_name: str


class RawAmenity(BaseModel):
    """One element of an Overpass response, before normalization.

    Nodes carry ``lat``/``lon`` directly; ways carry the centroid computed
    by ``out center`` in ``center_lat``/``center_lon``.
    """

    element_type: str = "node"
    lat: float | None = None
    lon: float | None = None
    center_lat: float | None = None
    center_lon: float | None = None
    tags: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_element(cls, element: dict) -> RawAmenity:
        center = element.get("center")
        if not isinstance(center, dict):
            center = {}
        tags = element.get("tags")
        if not isinstance(tags, dict):
            tags = {}
        return cls(
            element_type=str(element.get("type", "node")),
            lat=_as_float(element.get("lat")),
            lon=_as_float(element.get("lon")),
            center_lat=_as_float(center.get("lat")),
            center_lon=_as_float(center.get("lon")),
            tags={str(k): str(v) for k, v in tags.items()},
        )


class ResourceRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    coordinate: Coordinate
    category: str


class DiscoveryResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    coordinate: Coordinate
    display_name: str
    resources: tuple[ResourceRecord, ...] = ()
    # X-RateLimit-* values from the admission check that let this request in
    rate_limit_headers: dict[str, str] = Field(default_factory=dict, exclude=True)


def _as_float(value) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
