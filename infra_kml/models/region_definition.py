"""Pydantic schema for custom region definitions.

Regions other than the built-in India region are described in JSON::

    {
      "name": "Sri Lanka",
      "bounds": {"north": 9.9, "south": 5.9, "east": 81.9, "west": 79.5},
      "center": {"lat": 7.87, "lng": 80.77},
      "reference_points": [{"name": "Colombo", "lat": 6.9271, "lng": 79.8612}],
      "warning_threshold_km": 250,
      "boundary": {"type": "Polygon", "coordinates": [[[79.5, 5.9], ...]]}
    }

``boundary`` is optional and may be a GeoJSON geometry, Feature, or
FeatureCollection of Polygon / MultiPolygon shapes.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from infra_kml.core.exceptions import ValidationError
from infra_kml.models.placemark import Coordinates
from infra_kml.models.region import ReferencePoint, Region, RegionBounds

logger = logging.getLogger("infra_kml.models.region_definition")

_POLYGONAL_TYPES = frozenset({"Polygon", "MultiPolygon"})


class RegionDefinitionError(ValidationError):
    """Raised when a region definition cannot be loaded or is invalid."""

    default_stage = "validate_region"
    default_code = "REGION_DEFINITION_INVALID"


class BoundsModel(BaseModel):
    """Bounding rectangle in decimal degrees."""

    north: float = Field(ge=-90.0, le=90.0)
    south: float = Field(ge=-90.0, le=90.0)
    east: float = Field(ge=-180.0, le=180.0)
    west: float = Field(ge=-180.0, le=180.0)


class PointModel(BaseModel):
    """WGS 84 point."""

    lat: float = Field(ge=-90.0, le=90.0)
    lng: float = Field(ge=-180.0, le=180.0)


class ReferencePointModel(PointModel):
    """Named reference location."""

    name: str = Field(min_length=1)


class RegionDefinition(BaseModel):
    """Serialisable description of a validation region.

    Attributes:
        name: Display name used in verdict messages.
        bounds: Bounding rectangle (required, used for fast rejection).
        center: Nominal centre; defaults to the rectangle midpoint.
        reference_points: Named locations for nearest-place suggestions.
        warning_threshold_km: Soft-warning distance from ``center``.
        boundary: Optional GeoJSON boundary for precise containment.
    """

    name: str = Field(min_length=1)
    bounds: BoundsModel
    center: PointModel | None = None
    reference_points: list[ReferencePointModel] = Field(default_factory=list)
    warning_threshold_km: float | None = Field(default=None, gt=0)
    boundary: dict[str, Any] | None = None

    def to_region(self) -> Region:
        """Build the immutable ``Region`` used by the validator.

        Raises:
            RegionDefinitionError: If the bounds are inverted or the
                boundary is not a usable polygonal geometry.
        """
        try:
            bounds = RegionBounds(
                north=self.bounds.north,
                south=self.bounds.south,
                east=self.bounds.east,
                west=self.bounds.west,
            )
        except ValidationError as exc:
            raise RegionDefinitionError(f"Region '{self.name}': {exc.message}") from exc

        center = (
            Coordinates(lat=self.center.lat, lng=self.center.lng)
            if self.center is not None
            else bounds.center
        )
        return Region(
            name=self.name,
            bounds=bounds,
            center=center,
            reference_points=tuple(
                ReferencePoint(name=p.name, lat=p.lat, lng=p.lng) for p in self.reference_points
            ),
            warning_threshold_km=self.warning_threshold_km,
            boundary=_boundary_geometry(self.boundary, self.name) if self.boundary else None,
        )


def parse_region_definition(data: dict[str, Any] | str | bytes) -> Region:
    """Validate a region definition (dict or JSON text) into a ``Region``.

    Raises:
        RegionDefinitionError: If the definition fails schema validation.
    """
    try:
        if isinstance(data, str | bytes):
            definition = RegionDefinition.model_validate_json(data)
        else:
            definition = RegionDefinition.model_validate(data)
    except PydanticValidationError as exc:
        msg = f"Invalid region definition: {exc.error_count()} error(s): {exc.errors()[0]['msg']}"
        raise RegionDefinitionError(msg) from exc
    return definition.to_region()


def load_region(path: Path | str) -> Region:
    """Load a region definition from a JSON file.

    Raises:
        RegionDefinitionError: If the file cannot be read or is invalid.
    """
    path = Path(path)
    try:
        content = path.read_bytes()
    except OSError as exc:
        msg = f"Cannot read region definition {path.name}: {exc}"
        raise RegionDefinitionError(msg) from exc

    region = parse_region_definition(content)
    logger.info(
        "Loaded region %s from %s | reference_points=%d | precise_boundary=%s",
        region.name,
        path.name,
        len(region.reference_points),
        region.boundary is not None,
    )
    return region


def _boundary_geometry(geojson: dict[str, Any], region_name: str) -> Any:
    """Convert a GeoJSON geometry / Feature / FeatureCollection to shapely."""
    from shapely.geometry import shape
    from shapely.ops import unary_union

    kind = geojson.get("type")
    if kind == "FeatureCollection":
        geometries = [f.get("geometry") for f in geojson.get("features", [])]
    elif kind == "Feature":
        geometries = [geojson.get("geometry")]
    else:
        geometries = [geojson]

    shapes = []
    for geometry in geometries:
        if not geometry:
            continue
        try:
            geom = shape(geometry)
        except Exception as exc:
            msg = f"Region '{region_name}' boundary geometry is malformed: {exc}"
            raise RegionDefinitionError(msg) from exc
        if geom.geom_type not in _POLYGONAL_TYPES:
            msg = f"Region '{region_name}' boundary must be polygonal, got {geom.geom_type}"
            raise RegionDefinitionError(msg)
        shapes.append(geom)

    if not shapes:
        msg = f"Region '{region_name}' boundary contains no geometry"
        raise RegionDefinitionError(msg)

    boundary = shapes[0] if len(shapes) == 1 else unary_union(shapes)
    if not boundary.is_valid:
        from shapely.validation import make_valid

        logger.warning("Invalid boundary for region '%s', attempting make_valid()", region_name)
        boundary = make_valid(boundary)
    return boundary
