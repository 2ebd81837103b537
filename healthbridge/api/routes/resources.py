"""GET /v1/resources: health and subsistence resources near a location."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, Query, Response

from healthbridge.api.dependencies import get_client_key
from healthbridge.api.schemas import ErrorResponse, ResourcesResponse
from healthbridge.config import settings
from healthbridge.models import ResourceRecord
from healthbridge.services import discovery
from healthbridge.services.classifier import DISPLAY_LABELS, classify, directions_url

router = APIRouter(prefix="/v1", tags=["resources"])

TypeFilter = Literal["all", "hospital", "clinic", "food_bank", "drinking_water"]


def _place(record: ResourceRecord) -> dict:
    display_type = classify(record.name)
    lat, lng = record.coordinate.lat, record.coordinate.lng
    return {
        "name": record.name,
        "lat": lat,
        "lng": lng,
        "type": record.category,
        "display_type": display_type,
        "display_label": DISPLAY_LABELS[display_type],
        "directions_url": directions_url(lat, lng),
    }


@router.get(
    "/resources",
    summary="Find nearby health resources",
    description=(
        "Geocode `location` and return clinics, hospitals, doctors, "
        "pharmacies, food banks and drinking-water points within the "
        "configured search radius. Places closer than ~11 m to an earlier "
        "result are dropped as duplicates.\n\n"
        "`type` filters by the display group derived from each place's "
        "name. When `location` is omitted the server's default location "
        "is searched."
    ),
    response_model=ResourcesResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Empty location"},
        404: {"model": ErrorResponse, "description": "Location not found"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
        502: {"model": ErrorResponse, "description": "Upstream provider unavailable"},
    },
)
async def get_resources(
    response: Response,
    location: str | None = Query(
        None, max_length=256, description="Free-text place, address or city"
    ),
    type: TypeFilter = Query("all", description="Display group to return"),
    client_key: str = Depends(get_client_key),
):
    if location is None:
        location = settings.default_location

    result = await discovery.discovery_service.discover(client_key, location)
    for hdr, val in result.rate_limit_headers.items():
        response.headers[hdr] = val

    places = [_place(r) for r in result.resources]
    if type != "all":
        places = [p for p in places if p["display_type"] == type]

    return {
        "lat": result.coordinate.lat,
        "lng": result.coordinate.lng,
        "location": result.display_name,
        "count": len(places),
        "places": places,
    }
