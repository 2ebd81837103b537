"""Name-based display grouping for resource records.

This is a heuristic on the resource *name*, independent of the raw
``amenity`` tag. Rules are checked in order and the first match wins, so
"City Hospital Clinic" is a hospital. Names matching nothing fall back to
clinic.
"""

from __future__ import annotations

HOSPITAL = "hospital"
CLINIC = "clinic"
FOOD_BANK = "food_bank"
DRINKING_WATER = "drinking_water"

DISPLAY_CATEGORIES: tuple[str, ...] = (HOSPITAL, CLINIC, FOOD_BANK, DRINKING_WATER)

DISPLAY_LABELS: dict[str, str] = {
    HOSPITAL: "Hospital",
    CLINIC: "Clinic",
    FOOD_BANK: "Food Bank",
    DRINKING_WATER: "Water Source",
}

_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    (HOSPITAL, ("hospital",)),
    (CLINIC, ("clinic", "health", "medical")),
    (FOOD_BANK, ("food", "bank")),
    (DRINKING_WATER, ("water", "drinking")),
)

DEFAULT_CATEGORY = CLINIC


def classify(name: str | None) -> str:
    lowered = (name or "").lower()
    for category, needles in _RULES:
        if any(needle in lowered for needle in needles):
            return category
    return DEFAULT_CATEGORY


def directions_url(lat: float, lng: float) -> str:
    return f"https://www.google.com/maps/dir/?api=1&destination={lat},{lng}"
