"""Shared interchange constants, single source of truth.

Centralises namespaces, coordinate limits, column layouts, style ids
and MIME types used by the parser, the region validator and the
encoders.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# KML
# ---------------------------------------------------------------------------

KML_NAMESPACE: str = "http://www.opengis.net/kml/2.2"
"""KML 2.2 namespace written by the markup encoder."""

KMZ_ENTRY_NAME: str = "doc.kml"
"""Name of the single entry inside a KMZ archive."""

POP_STYLE_ID: str = "popStyle"
SUB_POP_STYLE_ID: str = "subPopStyle"

POP_ICON_HREF: str = "http://maps.google.com/mapfiles/kml/paddle/red-circle.png"
SUB_POP_ICON_HREF: str = "http://maps.google.com/mapfiles/kml/paddle/blue-circle.png"

EXPORT_DESCRIPTION: str = "Exported Infrastructure Data"

# ---------------------------------------------------------------------------
# Coordinates (WGS 84)
# ---------------------------------------------------------------------------

MIN_LONGITUDE: float = -180.0
MAX_LONGITUDE: float = 180.0
MIN_LATITUDE: float = -90.0
MAX_LATITUDE: float = 90.0

EARTH_RADIUS_KM: float = 6371.0
"""Mean Earth radius used for great-circle distances."""

# ---------------------------------------------------------------------------
# Tabular exports (CSV / XLSX)
# ---------------------------------------------------------------------------

EXPORT_COLUMNS: tuple[str, ...] = (
    "Name",
    "Type",
    "Latitude",
    "Longitude",
    "Description",
    "Status",
    "Created Date",
    "Last Updated",
)

XLSX_COLUMN_WIDTHS: tuple[int, ...] = (20, 10, 12, 12, 30, 12, 15, 15)
"""Character widths for each column of ``EXPORT_COLUMNS``."""

XLSX_SHEET_TITLE: str = "Infrastructure Data"

# Extended-data keys surfaced as dedicated export columns
STATUS_KEY: str = "status"
CREATED_DATE_KEY: str = "createdDate"
LAST_UPDATED_KEY: str = "lastUpdated"
UNIQUE_ID_KEY: str = "unique_id"

# ---------------------------------------------------------------------------
# MIME types
# ---------------------------------------------------------------------------

CSV_CONTENT_TYPE: str = "text/csv"
XLSX_CONTENT_TYPE: str = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
KML_CONTENT_TYPE: str = "application/vnd.google-earth.kml+xml"
KMZ_CONTENT_TYPE: str = "application/vnd.google-earth.kmz"

# ---------------------------------------------------------------------------
# Windowing
# ---------------------------------------------------------------------------

PAGE_WINDOW_SIZE: int = 5
"""Maximum number of page numbers offered for navigation."""
