"""Data models and schemas.

Defines the data structures shared by the parser, validator and encoders:
- PlacemarkRecord: A POP / Sub-POP point with metadata
- ParseOutcome: Parsed records plus skipped-placemark diagnostics
- Region / RegionBounds: Validation regions and rectangles
- ValidationVerdict: Result of a region validation
- RegionDefinition: Pydantic schema for custom region JSON
"""

from infra_kml.models.placemark import (
    Coordinates,
    ParseIssue,
    ParseOutcome,
    PlacemarkKind,
    PlacemarkRecord,
)
from infra_kml.models.region import (
    INDIA,
    GeofenceOptions,
    ReferencePoint,
    Region,
    RegionBounds,
    RegionNotFoundError,
    ValidationVerdict,
    ViolationType,
    get_region,
)

__all__ = [
    "INDIA",
    "Coordinates",
    "GeofenceOptions",
    "ParseIssue",
    "ParseOutcome",
    "PlacemarkKind",
    "PlacemarkRecord",
    "ReferencePoint",
    "Region",
    "RegionBounds",
    "RegionNotFoundError",
    "ValidationVerdict",
    "ViolationType",
    "get_region",
]
