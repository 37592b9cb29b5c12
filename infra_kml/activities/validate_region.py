"""Region (geofence) validation activity.

Classifies a point, or an ordered sequence of points, against a
geographic region and returns a ``ValidationVerdict``.  Being outside
the region is an expected business outcome, so it is returned as a
verdict value and never raised.

Validation order for a single point:
1. Non-finite / out-of-WGS-84 input → invalid (``INVALID_COORDINATES``).
2. Rectangle test.  Outside → invalid (``OUTSIDE_REGION``) with the
   nearest reference point as a suggestion, unless ``allow_near_border``
   accepts it within ``border_tolerance_km``.
3. Precise boundary polygon (``strict_mode`` only, when the region has one).
4. Soft warning when the point is farther than the region's warning
   threshold from its centre (still valid).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping

from infra_kml.models.placemark import Coordinates, PlacemarkRecord
from infra_kml.models.region import (
    INDIA,
    GeofenceOptions,
    ReferencePoint,
    Region,
    RegionBounds,
    ValidationVerdict,
    ViolationType,
    get_region,
)
from infra_kml.utils.geodesy import (
    haversine_distance_km,
    is_valid_wgs84,
    nearest_point_in_rect,
    rect_contains,
    rects_intersect,
)

logger = logging.getLogger("infra_kml.activities.validate_region")

PointLike = Coordinates | PlacemarkRecord | tuple[float, float] | Mapping[str, float]
RegionLike = Region | RegionBounds | str

_DEFAULT_OPTIONS = GeofenceOptions()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_in_region(
    point: PointLike,
    region: RegionLike = INDIA,
    options: GeofenceOptions | None = None,
) -> ValidationVerdict:
    """Validate a single point against ``region``.

    Args:
        point: ``Coordinates``, ``PlacemarkRecord``, ``(lat, lng)`` tuple,
            or a mapping with ``lat`` / ``lng`` keys.
        region: A ``Region``, a registered region name, or a bare
            ``RegionBounds`` (custom rectangle, no reference points).
        options: Validation knobs; defaults to ``GeofenceOptions()``.

    Raises:
        RegionNotFoundError: If ``region`` is an unregistered name.
    """
    resolved = resolve_region(region)
    opts = options or _DEFAULT_OPTIONS

    coords = _coerce_point(point)
    if coords is None:
        logger.debug("Rejecting invalid coordinates %r for region %s", point, resolved.name)
        return ValidationVerdict(
            is_valid=False,
            message="Invalid coordinates provided",
            suggested_action="Please provide valid latitude and longitude values",
            violation_type=ViolationType.INVALID_COORDINATES,
        )

    lat, lng = coords.lat, coords.lng

    if not rect_contains(lat, lng, resolved.bounds):
        if opts.allow_near_border:
            edge_lat, edge_lng = nearest_point_in_rect(lat, lng, resolved.bounds)
            outside_km = haversine_distance_km(lat, lng, edge_lat, edge_lng)
            if outside_km <= opts.border_tolerance_km:
                return ValidationVerdict(
                    is_valid=True,
                    message=(
                        f"Location is {outside_km:.1f} km outside {resolved.name} boundaries, "
                        f"within the {opts.border_tolerance_km:g} km border tolerance."
                    ),
                    suggested_action="Consider using locations inside the region for better accuracy",
                    violation_type=ViolationType.NEAR_BORDER,
                    violating_point=coords,
                )
        return _outside_verdict(coords, resolved, f"Location is outside {resolved.name} boundaries.")

    if opts.strict_mode and resolved.boundary is not None and not _boundary_covers(resolved, coords):
        return _outside_verdict(
            coords, resolved, f"Location is outside {resolved.name} territorial boundaries."
        )

    if opts.show_warnings and resolved.warning_threshold_km is not None:
        from_center = haversine_distance_km(lat, lng, resolved.center.lat, resolved.center.lng)
        if from_center > resolved.warning_threshold_km:
            return ValidationVerdict(
                is_valid=True,
                message=f"Location is near {resolved.name} border. Some features may be limited.",
                suggested_action="Consider using locations closer to major cities for better accuracy",
                violation_type=ViolationType.NEAR_BORDER,
            )

    return ValidationVerdict(
        is_valid=True,
        message=f"Location validated within {resolved.name} boundaries",
    )


def validate_sequence_in_region(
    points: Iterable[PointLike],
    region: RegionLike = INDIA,
    options: GeofenceOptions | None = None,
) -> ValidationVerdict:
    """Validate an ordered point sequence (polygon, polyline, batch).

    Stops at the first invalid point and reports its 1-based ordinal.
    An empty sequence is valid.
    """
    resolved = resolve_region(region)
    for ordinal, point in enumerate(points, start=1):
        verdict = validate_in_region(point, resolved, options)
        if verdict.is_valid:
            continue

        if verdict.violation_type is ViolationType.INVALID_COORDINATES:
            message = f"Point {ordinal} has invalid coordinates: {verdict.message}"
        else:
            message = f"Point {ordinal} is outside {resolved.name} boundaries: {verdict.message}"
        logger.info("Sequence validation failed at point %d for region %s", ordinal, resolved.name)
        return ValidationVerdict(
            is_valid=False,
            message=message,
            suggested_action=verdict.suggested_action,
            violation_type=verdict.violation_type,
            violating_point=verdict.violating_point,
        )

    return ValidationVerdict(
        is_valid=True,
        message=f"All coordinates are within {resolved.name} boundaries",
    )


def validate_bounds_intersection(
    bounds: RegionBounds,
    region: RegionLike = INDIA,
) -> ValidationVerdict:
    """Check that a selected rectangle overlaps the region's rectangle."""
    resolved = resolve_region(region)
    if not rects_intersect(bounds, resolved.bounds):
        return ValidationVerdict(
            is_valid=False,
            message=f"Selected area does not intersect with {resolved.name} boundaries",
            suggested_action=f"Please select an area within {resolved.name}",
            violation_type=ViolationType.OUTSIDE_REGION,
        )
    return ValidationVerdict(is_valid=True)


def find_nearest_reference(
    lat: float,
    lng: float,
    region: RegionLike = INDIA,
) -> tuple[ReferencePoint, float] | None:
    """Nearest reference point of ``region`` and its distance in km.

    Linear scan; the first of several equidistant points wins.
    Returns ``None`` if the region has no reference points.
    """
    resolved = resolve_region(region)
    nearest: ReferencePoint | None = None
    min_distance = math.inf
    for ref in resolved.reference_points:
        distance = haversine_distance_km(lat, lng, ref.lat, ref.lng)
        if distance < min_distance:
            nearest, min_distance = ref, distance
    if nearest is None:
        return None
    return nearest, min_distance


def resolve_region(region: RegionLike) -> Region:
    """Normalise a region argument to a ``Region``.

    Raises:
        RegionNotFoundError: If ``region`` is an unregistered name.
    """
    if isinstance(region, Region):
        return region
    if isinstance(region, RegionBounds):
        return Region.from_bounds(region)
    return get_region(region)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _coerce_point(point: object) -> Coordinates | None:
    """Extract finite WGS 84 ``Coordinates`` from a point-like value, else ``None``."""
    if isinstance(point, PlacemarkRecord):
        point = point.coordinates
    try:
        if isinstance(point, Coordinates):
            lat, lng = point.lat, point.lng
        elif isinstance(point, Mapping):
            lat, lng = point["lat"], point["lng"]
        else:
            lat, lng = point  # type: ignore[misc]
        lat, lng = float(lat), float(lng)
    except (KeyError, TypeError, ValueError):
        return None
    if not is_valid_wgs84(lat, lng):
        return None
    return Coordinates(lat=lat, lng=lng)


def _outside_verdict(coords: Coordinates, region: Region, message: str) -> ValidationVerdict:
    nearest = find_nearest_reference(coords.lat, coords.lng, region)
    if nearest is not None:
        ref, distance = nearest
        suggestion = (
            f"Try near {ref.name} ({distance:.0f}km away) "
            f"at coordinates {ref.lat:.4f}, {ref.lng:.4f}"
        )
    else:
        center = region.center
        distance = haversine_distance_km(coords.lat, coords.lng, center.lat, center.lng)
        suggestion = (
            f"Try near the centre of {region.name} ({distance:.0f}km away) "
            f"at coordinates {center.lat:.4f}, {center.lng:.4f}"
        )
    return ValidationVerdict(
        is_valid=False,
        message=message,
        suggested_action=suggestion,
        violation_type=ViolationType.OUTSIDE_REGION,
        violating_point=coords,
    )


def _boundary_covers(region: Region, coords: Coordinates) -> bool:
    from shapely.geometry import Point

    return bool(region.boundary.covers(Point(coords.lng, coords.lat)))  # type: ignore[union-attr]
