"""Shared pytest fixtures for the infrastructure KML interchange test suite."""

from pathlib import Path

import pytest

from infra_kml.models.placemark import Coordinates, PlacemarkKind, PlacemarkRecord

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"
EDGE_CASES_DIR = DATA_DIR / "edge_cases"
REGIONS_DIR = DATA_DIR / "regions"


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


@pytest.fixture()
def edge_cases_dir() -> Path:
    """Return the path to the edge-cases test data directory."""
    return EDGE_CASES_DIR


@pytest.fixture()
def regions_dir() -> Path:
    """Return the path to the region definition directory."""
    return REGIONS_DIR


# ---------------------------------------------------------------------------
# Sample KML file fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def pop_sites_kml(data_dir: Path) -> Path:
    """Path to a namespaced KML with 3 POP placemarks (one inside a Folder)."""
    return data_dir / "01_pop_sites.kml"


@pytest.fixture()
def subpop_kml(data_dir: Path) -> Path:
    """Path to a namespace-less KML with 2 Sub-POP placemarks, one unnamed."""
    return data_dir / "02_subpop_no_namespace.kml"


# ---------------------------------------------------------------------------
# Edge-case KML file fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def not_xml_kml(edge_cases_dir: Path) -> Path:
    """Path to a file that is not valid XML."""
    return edge_cases_dir / "11_malformed_not_xml.kml"


@pytest.fixture()
def unclosed_tags_kml(edge_cases_dir: Path) -> Path:
    """Path to a KML with unclosed tags."""
    return edge_cases_dir / "12_malformed_unclosed_tags.kml"


@pytest.fixture()
def empty_kml(edge_cases_dir: Path) -> Path:
    """Path to a valid KML with no placemarks."""
    return edge_cases_dir / "13_empty_no_placemarks.kml"


@pytest.fixture()
def partial_malformed_kml(edge_cases_dir: Path) -> Path:
    """Path to a KML with 2 good placemarks and 5 malformed ones."""
    return edge_cases_dir / "14_partial_malformed.kml"


@pytest.fixture()
def not_kml_root(edge_cases_dir: Path) -> Path:
    """Path to well-formed XML whose root is not <kml>."""
    return edge_cases_dir / "17_not_kml_root.xml"


@pytest.fixture()
def sri_lanka_json(regions_dir: Path) -> Path:
    """Path to a custom region definition with a precise boundary."""
    return regions_dir / "sri_lanka.json"


# ---------------------------------------------------------------------------
# Sample records
# ---------------------------------------------------------------------------


@pytest.fixture()
def delhi_pop() -> PlacemarkRecord:
    """A fully populated POP record."""
    return PlacemarkRecord(
        id="POP-DEL-001",
        name="Delhi Core POP",
        description="Primary aggregation site & NOC uplink",
        coordinates=Coordinates(lat=28.6139, lng=77.209),
        extended_data={
            "status": "Active",
            "createdDate": "2024-01-15",
            "lastUpdated": "2024-06-02",
        },
        kind=PlacemarkKind.POP,
    )


@pytest.fixture()
def pune_subpop() -> PlacemarkRecord:
    """A minimal Sub-POP record with no metadata."""
    return PlacemarkRecord(
        id="subPop_0",
        name="Pune Sub-POP",
        coordinates=Coordinates(lat=18.5204, lng=73.8567),
        kind=PlacemarkKind.SUB_POP,
    )


@pytest.fixture()
def sample_records(delhi_pop: PlacemarkRecord, pune_subpop: PlacemarkRecord) -> list[PlacemarkRecord]:
    """Two records of different kinds, in a fixed order."""
    return [delhi_pop, pune_subpop]
