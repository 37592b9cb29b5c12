"""Data model for infrastructure placemarks.

A ``PlacemarkRecord`` is a single named point location (a POP or
Sub-POP site) with optional description and free-form key/value
metadata.  Records are produced by the ``parse_kml`` activity or built
directly by callers, and consumed read-only by the region validator and
the export encoders.
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING

from infra_kml.core.constants import (
    CREATED_DATE_KEY,
    LAST_UPDATED_KEY,
    POP_STYLE_ID,
    STATUS_KEY,
    SUB_POP_STYLE_ID,
)
from infra_kml.core.exceptions import ValidationError

if TYPE_CHECKING:
    from infra_kml.models.region import RegionBounds


class PlacemarkKind(str, Enum):
    """Infrastructure category of a placemark."""

    POP = "pop"
    SUB_POP = "subPop"

    @property
    def label(self) -> str:
        """Human-readable label (``"POP"`` / ``"Sub POP"``)."""
        return "POP" if self is PlacemarkKind.POP else "Sub POP"

    @property
    def style_id(self) -> str:
        """KML ``<Style>`` id used for this kind."""
        return POP_STYLE_ID if self is PlacemarkKind.POP else SUB_POP_STYLE_ID

    @classmethod
    def coerce(cls, value: PlacemarkKind | str) -> PlacemarkKind:
        """Resolve an enum member, its value, or its name (case-insensitive).

        Raises:
            ValidationError: If ``value`` names no known kind.
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("_", "").replace("-", "")
        for member in cls:
            if key in (member.value.lower(), member.name.lower().replace("_", "")):
                return member
        msg = f"Unknown placemark kind {value!r}; expected one of {[m.value for m in cls]}"
        raise ValidationError(msg, stage="models", code="PLACEMARK_KIND_INVALID")


@dataclass(frozen=True, slots=True)
class Coordinates:
    """A WGS 84 point.

    Attributes:
        lat: Latitude in decimal degrees.
        lng: Longitude in decimal degrees.
        altitude: Optional altitude in metres.
    """

    lat: float
    lng: float
    altitude: float | None = None

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.lat) and math.isfinite(self.lng)

    def as_lng_lat(self) -> tuple[float, float]:
        """Return ``(lng, lat)``, the KML / GeoJSON axis order."""
        return (self.lng, self.lat)

    def to_dict(self) -> dict[str, float]:
        data = {"lat": self.lat, "lng": self.lng}
        if self.altitude is not None:
            data["altitude"] = self.altitude
        return data


@dataclass(frozen=True, slots=True)
class PlacemarkRecord:
    """A single infrastructure placemark.

    Attributes:
        id: Identifier, unique within a collection.
        name: Display label; may be empty.
        coordinates: Point location.
        kind: ``PlacemarkKind.POP`` or ``PlacemarkKind.SUB_POP``.
        description: Free-text description.
        extended_data: Read-only key/value metadata (status, network id, ...).
    """

    id: str
    name: str
    coordinates: Coordinates
    kind: PlacemarkKind = PlacemarkKind.POP
    description: str = ""
    extended_data: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", PlacemarkKind.coerce(self.kind))
        object.__setattr__(self, "extended_data", MappingProxyType(dict(self.extended_data)))

    @property
    def status(self) -> str:
        return self.extended_data.get(STATUS_KEY, "")

    @property
    def created_date(self) -> str:
        return self.extended_data.get(CREATED_DATE_KEY, "")

    @property
    def last_updated(self) -> str:
        return self.extended_data.get(LAST_UPDATED_KEY, "")

    def to_dict(self) -> dict[str, object]:
        """Serialise to a JSON-compatible dict."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "coordinates": self.coordinates.to_dict(),
            "extended_data": dict(self.extended_data),
            "kind": self.kind.value,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> PlacemarkRecord:
        """Deserialise from a dict payload.

        Missing text fields are defaulted (an absent ``name`` becomes
        ``""``) rather than raising an error.

        Raises:
            TypeError: If field values have unexpected types.
            ValueError: If a coordinate cannot be converted to float.
            ValidationError: If ``kind`` is not a known placemark kind.
        """
        coords_raw = data.get("coordinates")
        if not isinstance(coords_raw, Mapping):
            msg = f"coordinates must be a mapping, got {type(coords_raw).__name__}"
            raise TypeError(msg)
        altitude_raw = coords_raw.get("altitude")

        extended_raw = data.get("extended_data", {})
        if not isinstance(extended_raw, Mapping):
            msg = f"extended_data must be a mapping, got {type(extended_raw).__name__}"
            raise TypeError(msg)

        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            description=str(data.get("description", "")),
            coordinates=Coordinates(
                lat=float(coords_raw["lat"]),  # type: ignore[arg-type]
                lng=float(coords_raw["lng"]),  # type: ignore[arg-type]
                altitude=None if altitude_raw is None else float(altitude_raw),  # type: ignore[arg-type]
            ),
            extended_data={str(k): str(v) for k, v in extended_raw.items()},
            kind=PlacemarkKind.coerce(str(data.get("kind", PlacemarkKind.POP.value))),
        )


@dataclass(frozen=True, slots=True)
class ParseIssue:
    """A placemark (or metadata pair) the parser could not use.

    Attributes:
        feature_index: Zero-based ordinal of the Placemark in the document.
        name: Placemark display name at the time of the failure.
        reason: Human-readable description of what was wrong.
    """

    feature_index: int
    name: str
    reason: str


@dataclass(frozen=True, slots=True)
class ParseOutcome:
    """Result of parsing a KML document.

    Attributes:
        placemarks: Successfully parsed records in document order.
        skipped: Placemarks dropped because of malformed coordinates.
        omitted_data: ExtendedData pairs dropped for lacking a name or value.
        bounds: Aggregate bounding rectangle of ``placemarks``
            (``None`` when empty).
    """

    placemarks: tuple[PlacemarkRecord, ...] = ()
    skipped: tuple[ParseIssue, ...] = ()
    omitted_data: tuple[ParseIssue, ...] = ()
    bounds: RegionBounds | None = None

    def __len__(self) -> int:
        return len(self.placemarks)

    def __iter__(self) -> Iterator[PlacemarkRecord]:
        return iter(self.placemarks)

    @property
    def has_issues(self) -> bool:
        return bool(self.skipped or self.omitted_data)
