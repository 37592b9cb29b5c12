"""Geographic regions and geofence validation results.

A ``Region`` bundles everything the region validator needs: the
bounding rectangle, a nominal centre, named reference points used to
suggest nearby alternatives, the soft-warning distance, and an optional
precise boundary polygon.  The India region ships built in; custom
regions are loaded through ``infra_kml.models.region_definition``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING

from infra_kml.core.exceptions import ValidationError
from infra_kml.models.placemark import Coordinates
from infra_kml.utils.geodesy import rect_contains, rects_intersect

if TYPE_CHECKING:
    from shapely.geometry.base import BaseGeometry


class RegionNotFoundError(ValidationError):
    """Raised when a region name is not registered."""

    default_stage = "validate_region"
    default_code = "REGION_NOT_FOUND"


@dataclass(frozen=True, slots=True)
class RegionBounds:
    """Axis-aligned lat/lng rectangle in degrees.

    Rectangles crossing the antimeridian are not supported, so
    ``west <= east`` is required.

    Raises:
        ValidationError: If ``south > north`` or ``west > east``.
    """

    north: float
    south: float
    east: float
    west: float

    def __post_init__(self) -> None:
        if self.south > self.north:
            msg = f"Region bounds south ({self.south}) is greater than north ({self.north})"
            raise ValidationError(msg, stage="models", code="REGION_BOUNDS_INVALID")
        if self.west > self.east:
            msg = f"Region bounds west ({self.west}) is greater than east ({self.east})"
            raise ValidationError(msg, stage="models", code="REGION_BOUNDS_INVALID")

    @property
    def center(self) -> Coordinates:
        return Coordinates(lat=(self.north + self.south) / 2, lng=(self.east + self.west) / 2)

    def contains(self, lat: float, lng: float) -> bool:
        return rect_contains(lat, lng, self)

    def intersects(self, other: RegionBounds) -> bool:
        return rects_intersect(self, other)

    def to_dict(self) -> dict[str, float]:
        return {"north": self.north, "south": self.south, "east": self.east, "west": self.west}


@dataclass(frozen=True, slots=True)
class ReferencePoint:
    """A named location used to suggest alternatives (e.g. a major city)."""

    name: str
    lat: float
    lng: float


@dataclass(frozen=True, slots=True)
class Region:
    """A named validation region.

    Attributes:
        name: Display name used in verdict messages (e.g. ``"India"``).
        bounds: Bounding rectangle for the fast containment test.
        center: Nominal centre for the soft "far from centre" warning.
        reference_points: Named locations for nearest-place suggestions.
        warning_threshold_km: Distance from ``center`` beyond which a
            soft warning is issued; ``None`` disables the warning.
        boundary: Optional precise boundary (shapely Polygon/MultiPolygon,
            lng/lat axis order).
    """

    name: str
    bounds: RegionBounds
    center: Coordinates
    reference_points: tuple[ReferencePoint, ...] = ()
    warning_threshold_km: float | None = None
    boundary: BaseGeometry | None = field(default=None, compare=False, hash=False)

    @classmethod
    def from_bounds(cls, bounds: RegionBounds, name: str = "the selected region") -> Region:
        """A bare rectangular region centred on its midpoint."""
        return cls(name=name, bounds=bounds, center=bounds.center)


class ViolationType(str, Enum):
    """Why a verdict is invalid or carries an advisory."""

    OUTSIDE_REGION = "outside_region"
    NEAR_BORDER = "near_border"
    INVALID_COORDINATES = "invalid_coordinates"


@dataclass(frozen=True, slots=True)
class ValidationVerdict:
    """Outcome of a region validation.

    ``is_valid=True`` with a message is a soft advisory, not a failure.
    """

    is_valid: bool
    message: str | None = None
    suggested_action: str | None = None
    violation_type: ViolationType | None = None
    violating_point: Coordinates | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "is_valid": self.is_valid,
            "message": self.message,
            "suggested_action": self.suggested_action,
            "violation_type": self.violation_type.value if self.violation_type else None,
            "violating_point": self.violating_point.to_dict() if self.violating_point else None,
        }


@dataclass(frozen=True, slots=True)
class GeofenceOptions:
    """Knobs for the region validator.

    Attributes:
        strict_mode: Enforce the region's precise boundary when it has one.
        show_warnings: Issue the soft warning for points far from the centre.
        allow_near_border: Accept points within ``border_tolerance_km``
            outside the rectangle, with an advisory.
        border_tolerance_km: Distance tolerance for ``allow_near_border``.
    """

    strict_mode: bool = True
    show_warnings: bool = True
    allow_near_border: bool = False
    border_tolerance_km: float = 10.0

    @classmethod
    def from_config(cls, config: object) -> GeofenceOptions:
        """Build options from an ``InterchangeConfig``."""
        return cls(
            strict_mode=bool(getattr(config, "strict_mode", True)),
            show_warnings=bool(getattr(config, "show_warnings", True)),
            allow_near_border=bool(getattr(config, "allow_near_border", False)),
            border_tolerance_km=float(getattr(config, "border_tolerance_km", 10.0)),
        )


# ---------------------------------------------------------------------------
# Built-in regions
# ---------------------------------------------------------------------------

INDIA_BOUNDS = RegionBounds(north=37.6, south=6.4, east=97.25, west=68.1)

INDIA_CENTER = Coordinates(lat=20.5937, lng=78.9629)

MAJOR_INDIAN_CITIES: tuple[ReferencePoint, ...] = (
    ReferencePoint("New Delhi", 28.6139, 77.2090),
    ReferencePoint("Mumbai", 19.0760, 72.8777),
    ReferencePoint("Bangalore", 12.9716, 77.5946),
    ReferencePoint("Chennai", 13.0827, 80.2707),
    ReferencePoint("Kolkata", 22.5726, 88.3639),
    ReferencePoint("Hyderabad", 17.3850, 78.4867),
    ReferencePoint("Pune", 18.5204, 73.8567),
    ReferencePoint("Ahmedabad", 23.0225, 72.5714),
    ReferencePoint("Jaipur", 26.9124, 75.7873),
    ReferencePoint("Lucknow", 26.8467, 80.9462),
)

INDIA = Region(
    name="India",
    bounds=INDIA_BOUNDS,
    center=INDIA_CENTER,
    reference_points=MAJOR_INDIAN_CITIES,
    warning_threshold_km=1500.0,
)

REGIONS: MappingProxyType[str, Region] = MappingProxyType({"india": INDIA})


def get_region(name: str) -> Region:
    """Look up a built-in region by name (case-insensitive).

    Raises:
        RegionNotFoundError: If no region of that name is registered.
    """
    try:
        return REGIONS[name.strip().lower()]
    except KeyError:
        msg = f"Unknown region {name!r}; registered regions: {sorted(REGIONS)}"
        raise RegionNotFoundError(msg) from None
