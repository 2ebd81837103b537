"""Coordinate-proximity deduplication of resource records."""

from __future__ import annotations

from collections.abc import Iterable

from healthbridge.models import Coordinate, ResourceRecord

# ~11 m at the equator, same precision as 4-decimal coordinate rounding.
DEDUP_EPSILON = 0.0001

# Differences are compared at this many decimals so that points exactly one
# 4th-decimal step apart (e.g. -118.2400 / -118.2401) count as the same place
# regardless of binary float noise.
_COMPARE_DIGITS = 9


def is_near(a: Coordinate, b: Coordinate, epsilon: float = DEDUP_EPSILON) -> bool:
    return (
        round(abs(a.lat - b.lat), _COMPARE_DIGITS) <= epsilon
        and round(abs(a.lng - b.lng), _COMPARE_DIGITS) <= epsilon
    )


def dedupe(
    records: Iterable[ResourceRecord],
    epsilon: float = DEDUP_EPSILON,
) -> list[ResourceRecord]:
    """Drop records within *epsilon* of an earlier kept record.

    First occurrences win and input order is preserved. Quadratic in the
    number of records, which the fixed-radius query keeps small.
    """
    kept: list[ResourceRecord] = []
    for record in records:
        if not any(is_near(k.coordinate, record.coordinate, epsilon) for k in kept):
            kept.append(record)
    return kept
