"""Pydantic response models for OpenAPI documentation."""

from __future__ import annotations

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------


class ErrorResponse(BaseModel):
    """Structured error returned by all non-2xx responses."""

    error: bool = Field(True, description="Always true for error responses")
    status_code: int = Field(..., description="HTTP status code")
    detail: str = Field(..., description="Human-readable error message")


# ---------------------------------------------------------------------------
# /health
# ---------------------------------------------------------------------------


class RateLimiterHealth(BaseModel):
    """Rate limiter subsystem status."""

    active_keys: int = Field(..., description="Number of tracked client windows")


class HealthResponse(BaseModel):
    status: str = Field(..., description="Overall status, 'healthy' when up")
    timestamp: str = Field(..., description="Server time (ISO 8601, UTC)")
    rate_limiter: RateLimiterHealth | None = Field(
        None, description="Rate limiter health"
    )
    uptime_seconds: float | None = Field(
        None, description="Seconds since the process started"
    )


# ---------------------------------------------------------------------------
# /v1/resources
# ---------------------------------------------------------------------------


class PlaceModel(BaseModel):
    """A single health or subsistence resource near the searched location."""

    name: str = Field(
        ...,
        description=(
            "OSM `name` tag, falling back to the amenity tag or "
            "'Unnamed Resource'"
        ),
    )
    lat: float = Field(..., description="Latitude (centroid for mapped areas)")
    lng: float = Field(..., description="Longitude (centroid for mapped areas)")
    type: str = Field(
        ..., description="Raw OSM `amenity` tag, e.g. 'hospital' or 'food_bank'"
    )
    display_type: str = Field(
        ...,
        description=(
            "Display group derived from the name: hospital, clinic, "
            "food_bank or drinking_water"
        ),
    )
    display_label: str = Field(..., description="Human label for `display_type`")
    directions_url: str = Field(..., description="Google Maps directions link")


class ResourcesResponse(BaseModel):
    lat: float = Field(..., description="Latitude of the geocoded location")
    lng: float = Field(..., description="Longitude of the geocoded location")
    location: str = Field(
        ..., description="Display name of the location as resolved by the geocoder"
    )
    count: int = Field(..., description="Number of places returned")
    places: list[PlaceModel] = Field(
        default_factory=list,
        description="Deduplicated resources, in provider order",
    )
