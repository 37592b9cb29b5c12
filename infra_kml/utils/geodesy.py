"""Great-circle distance and lat/lng rectangle helpers.

All functions are pure and take WGS 84 decimal degrees.  Non-finite
input yields ``NaN`` (distances) or ``False`` (containment); callers
that must reject such input check ``is_valid_wgs84`` first.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import TYPE_CHECKING

from infra_kml.core.constants import (
    EARTH_RADIUS_KM,
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
)

if TYPE_CHECKING:
    from infra_kml.models.region import RegionBounds


def haversine_distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two points in kilometres.

    Uses the haversine formula on a sphere of radius ``EARTH_RADIUS_KM``.
    Returns exactly ``0.0`` for identical points.
    """
    # Canonical argument order keeps d(a, b) == d(b, a) bit-exact.
    if (lat1, lng1) > (lat2, lng2):
        lat1, lng1, lat2, lng2 = lat2, lng2, lat1, lng1

    rlat1 = math.radians(lat1)
    rlat2 = math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlng = math.radians(lng2 - lng1)

    a = math.sin(dlat / 2) ** 2 + math.cos(rlat1) * math.cos(rlat2) * math.sin(dlng / 2) ** 2
    # Rounding can push a just past 1 for near-antipodal points.  NaN goes
    # first in each call so it propagates.
    a = min(max(a, 0.0), 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def rect_contains(lat: float, lng: float, bounds: RegionBounds) -> bool:
    """Inclusive containment test of a point in a lat/lng rectangle."""
    return bounds.south <= lat <= bounds.north and bounds.west <= lng <= bounds.east


def rects_intersect(a: RegionBounds, b: RegionBounds) -> bool:
    """Whether two rectangles overlap (touching edges count)."""
    return not (a.east < b.west or a.west > b.east or a.north < b.south or a.south > b.north)


def nearest_point_in_rect(lat: float, lng: float, bounds: RegionBounds) -> tuple[float, float]:
    """Clamp a point onto a rectangle, returning ``(lat, lng)``.

    Points inside the rectangle are returned unchanged.
    """
    return (
        min(max(lat, bounds.south), bounds.north),
        min(max(lng, bounds.west), bounds.east),
    )


def compute_bounds(points: Iterable[tuple[float, float]]) -> RegionBounds | None:
    """Aggregate bounding rectangle of ``(lat, lng)`` points.

    Returns ``None`` when ``points`` is empty.
    """
    from infra_kml.models.region import RegionBounds

    lats: list[float] = []
    lngs: list[float] = []
    for lat, lng in points:
        lats.append(lat)
        lngs.append(lng)
    if not lats:
        return None
    return RegionBounds(north=max(lats), south=min(lats), east=max(lngs), west=min(lngs))


def is_valid_wgs84(lat: float, lng: float) -> bool:
    """Whether a point is finite and inside WGS 84 latitude/longitude limits."""
    try:
        lat = float(lat)
        lng = float(lng)
    except (TypeError, ValueError):
        return False
    if not (math.isfinite(lat) and math.isfinite(lng)):
        return False
    return MIN_LATITUDE <= lat <= MAX_LATITUDE and MIN_LONGITUDE <= lng <= MAX_LONGITUDE
