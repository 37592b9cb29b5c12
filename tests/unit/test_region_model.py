"""Tests for region models and custom region definitions.

Covers:
- RegionBounds invariants and helpers
- Built-in India region and lookup
- Verdict serialisation and validator options
- Region definitions loaded through pydantic (sri_lanka.json)
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path

from infra_kml.core.config import InterchangeConfig
from infra_kml.core.exceptions import ValidationError
from infra_kml.models.placemark import Coordinates
from infra_kml.models.region import (
    INDIA,
    MAJOR_INDIAN_CITIES,
    GeofenceOptions,
    Region,
    RegionBounds,
    RegionNotFoundError,
    ValidationVerdict,
    ViolationType,
    get_region,
)
from infra_kml.models.region_definition import (
    RegionDefinitionError,
    load_region,
    parse_region_definition,
)

SQUARE = {
    "name": "Square",
    "bounds": {"north": 10.0, "south": 0.0, "east": 10.0, "west": 0.0},
}


class TestRegionBounds:
    """RegionBounds rectangle."""

    def test_inverted_latitudes(self) -> None:
        with pytest.raises(ValidationError, match="south"):
            RegionBounds(north=0.0, south=10.0, east=10.0, west=0.0)

    def test_antimeridian_rejected(self) -> None:
        with pytest.raises(ValidationError, match="west"):
            RegionBounds(north=10.0, south=0.0, east=-170.0, west=170.0)

    def test_center(self) -> None:
        assert RegionBounds(north=10.0, south=0.0, east=20.0, west=10.0).center == Coordinates(5.0, 15.0)

    def test_contains_and_intersects(self) -> None:
        box = RegionBounds(north=10.0, south=0.0, east=10.0, west=0.0)
        assert box.contains(5.0, 5.0)
        assert not box.contains(11.0, 5.0)
        assert box.intersects(RegionBounds(north=20.0, south=10.0, east=20.0, west=10.0))

    def test_to_dict(self) -> None:
        assert INDIA.bounds.to_dict() == {"north": 37.6, "south": 6.4, "east": 97.25, "west": 68.1}


class TestIndia:
    """Built-in India region."""

    def test_constants(self) -> None:
        assert INDIA.name == "India"
        assert INDIA.center == Coordinates(lat=20.5937, lng=78.9629)
        assert INDIA.warning_threshold_km == 1500.0
        assert INDIA.boundary is None

    def test_reference_cities(self) -> None:
        names = [c.name for c in MAJOR_INDIAN_CITIES]
        assert names[:3] == ["New Delhi", "Mumbai", "Bangalore"]
        assert len(names) == len(set(names)) == 10
        assert all(INDIA.bounds.contains(c.lat, c.lng) for c in MAJOR_INDIAN_CITIES)

    def test_lookup_case_insensitive(self) -> None:
        assert get_region(" INDIA ") is INDIA

    def test_unknown_region(self) -> None:
        with pytest.raises(RegionNotFoundError, match="atlantis"):
            get_region("atlantis")

    def test_from_bounds(self) -> None:
        region = Region.from_bounds(INDIA.bounds)
        assert region.name == "the selected region"
        assert region.center == INDIA.bounds.center
        assert region.warning_threshold_km is None


class TestVerdictAndOptions:
    """ValidationVerdict and GeofenceOptions."""

    def test_verdict_to_dict(self) -> None:
        verdict = ValidationVerdict(
            is_valid=False,
            message="m",
            suggested_action="s",
            violation_type=ViolationType.OUTSIDE_REGION,
            violating_point=Coordinates(1.0, 2.0),
        )
        assert verdict.to_dict() == {
            "is_valid": False,
            "message": "m",
            "suggested_action": "s",
            "violation_type": "outside_region",
            "violating_point": {"lat": 1.0, "lng": 2.0},
        }

    def test_valid_verdict_to_dict(self) -> None:
        data = ValidationVerdict(is_valid=True).to_dict()
        assert data["violation_type"] is None
        assert data["violating_point"] is None

    def test_options_from_config(self) -> None:
        config = InterchangeConfig(strict_mode=False, allow_near_border=True, border_tolerance_km=3.0)
        options = GeofenceOptions.from_config(config)
        assert options == GeofenceOptions(
            strict_mode=False,
            show_warnings=True,
            allow_near_border=True,
            border_tolerance_km=3.0,
        )


class TestRegionDefinition:
    """Custom regions described in JSON."""

    def test_load_sri_lanka(self, sri_lanka_json: Path) -> None:
        region = load_region(sri_lanka_json)
        assert region.name == "Sri Lanka"
        assert region.bounds == RegionBounds(north=9.9, south=5.9, east=81.9, west=79.5)
        assert region.center == Coordinates(lat=7.8731, lng=80.7718)
        assert [p.name for p in region.reference_points] == ["Colombo", "Kandy", "Jaffna"]
        assert region.warning_threshold_km == 120
        assert region.boundary is not None
        assert region.boundary.geom_type == "Polygon"

    def test_center_defaults_to_midpoint(self) -> None:
        region = parse_region_definition(SQUARE)
        assert region.center == Coordinates(lat=5.0, lng=5.0)
        assert region.boundary is None

    def test_json_text(self) -> None:
        assert parse_region_definition(json.dumps(SQUARE)).name == "Square"

    def test_bare_geometry_and_collection(self) -> None:
        polygon = {"type": "Polygon", "coordinates": [[[0, 0], [10, 0], [10, 10], [0, 0]]]}
        bare = parse_region_definition({**SQUARE, "boundary": polygon})
        assert bare.boundary is not None
        collection = {
            "type": "FeatureCollection",
            "features": [
                {"type": "Feature", "properties": {}, "geometry": polygon},
                {
                    "type": "Feature",
                    "properties": {},
                    "geometry": {"type": "Polygon", "coordinates": [[[0, 0], [0, 10], [10, 10], [0, 0]]]},
                },
            ],
        }
        merged = parse_region_definition({**SQUARE, "boundary": collection})
        assert merged.boundary is not None
        assert merged.boundary.area == pytest.approx(100.0)

    def test_non_polygonal_boundary(self) -> None:
        line = {"type": "LineString", "coordinates": [[0, 0], [1, 1]]}
        with pytest.raises(RegionDefinitionError, match="must be polygonal"):
            parse_region_definition({**SQUARE, "boundary": line})

    def test_schema_violation(self) -> None:
        bad = {**SQUARE, "bounds": {"north": 95.0, "south": 0.0, "east": 10.0, "west": 0.0}}
        with pytest.raises(RegionDefinitionError, match="Invalid region definition"):
            parse_region_definition(bad)

    def test_inverted_bounds(self) -> None:
        bad = {**SQUARE, "bounds": {"north": 0.0, "south": 10.0, "east": 10.0, "west": 0.0}}
        with pytest.raises(RegionDefinitionError, match="Region 'Square'"):
            parse_region_definition(bad)

    def test_missing_file(self, regions_dir: Path) -> None:
        with pytest.raises(RegionDefinitionError, match="Cannot read region definition"):
            load_region(regions_dir / "missing.json")

    def test_error_category(self) -> None:
        with pytest.raises(RegionDefinitionError) as exc_info:
            parse_region_definition({"name": ""})
        assert exc_info.value.category == "validation"
        assert exc_info.value.code == "REGION_DEFINITION_INVALID"
