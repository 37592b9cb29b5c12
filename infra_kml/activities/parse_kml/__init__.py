"""KML parsing activity as a composable pipeline.

Parses a KML document into ``PlacemarkRecord`` objects of one
``PlacemarkKind`` (POP or Sub-POP).

The parsing pipeline is split into focused stages:
- **_validation**: XML/KML root check, coordinate finiteness and bounds
- **_normalization**: point text → ``Coordinates``, ExtendedData extraction
- **_lxml_parser**: placemark traversal producing a ``ParseOutcome``
- **_fetch**: optional HTTP retrieval of the document (``httpx``)

Error policy:
- Structural failures (empty, not XML, not KML, fetch failure) raise.
- A malformed placemark is skipped and reported in ``ParseOutcome.skipped``;
  one bad record does not block the rest of the import.
- ExtendedData pairs lacking a name or value are dropped and reported in
  ``ParseOutcome.omitted_data``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from infra_kml.activities.parse_kml._constants import (
    KML_NAMESPACE,
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
)
from infra_kml.activities.parse_kml._fetch import (
    DEFAULT_FETCH_TIMEOUT_S,
    KmlFetchError,
    fetch_kml_document,
)
from infra_kml.activities.parse_kml._lxml_parser import parse_with_lxml
from infra_kml.activities.parse_kml._normalization import (
    extract_extended_data_lxml,
    parse_point_text,
)
from infra_kml.activities.parse_kml._validation import (
    InvalidCoordinateError,
    KmlParseError,
    KmlValidationError,
    load_document,
    validate_coordinate,
)
from infra_kml.models.placemark import ParseOutcome, PlacemarkKind

logger = logging.getLogger("infra_kml.activities.parse_kml")

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "KML_NAMESPACE",
    "MAX_LATITUDE",
    "MAX_LONGITUDE",
    "MIN_LATITUDE",
    "MIN_LONGITUDE",
    "InvalidCoordinateError",
    "KmlFetchError",
    "KmlParseError",
    "KmlValidationError",
    "extract_extended_data_lxml",
    "fetch_kml_document",
    "load_document",
    "parse_kml_file",
    "parse_kml_string",
    "parse_kml_url",
    "parse_point_text",
    "parse_with_lxml",
    "validate_coordinate",
]


def parse_kml_string(
    document: str | bytes,
    kind: PlacemarkKind | str,
    *,
    source_name: str = "<string>",
) -> ParseOutcome:
    """Parse KML text into placemark records.

    Args:
        document: KML document as text or UTF-8 bytes.
        kind: Category for every record (``PlacemarkKind`` or ``"pop"`` /
            ``"subPop"``).
        source_name: Label for log messages.

    Returns:
        ``ParseOutcome`` with records in document order, skipped-placemark
        diagnostics, and the aggregate bounds (``None`` if empty).

    Raises:
        KmlParseError: If the document is empty, not XML, or not KML.
        ValidationError: If ``kind`` is unknown.
    """
    kind = PlacemarkKind.coerce(kind)
    root = load_document(document)
    outcome = parse_with_lxml(root, kind, source_name)

    logger.info(
        "Parsed %d %s placemark(s) from %s | skipped=%d | omitted_data=%d",
        len(outcome.placemarks),
        kind.label,
        source_name,
        len(outcome.skipped),
        len(outcome.omitted_data),
    )
    return outcome


def parse_kml_file(kml_path: Path | str, kind: PlacemarkKind | str) -> ParseOutcome:
    """Parse a KML file on disk.

    Raises:
        KmlParseError: If the file cannot be read or is not valid KML.
    """
    kml_path = Path(kml_path)
    try:
        content = kml_path.read_bytes()
    except OSError as exc:
        msg = f"Cannot read KML file: {exc}"
        raise KmlParseError(msg) from exc
    return parse_kml_string(content, kind, source_name=kml_path.name)


def parse_kml_url(
    url: str,
    kind: PlacemarkKind | str,
    *,
    timeout_s: float = DEFAULT_FETCH_TIMEOUT_S,
) -> ParseOutcome:
    """Fetch a KML document over HTTP and parse it.

    Raises:
        KmlFetchError: If the document cannot be retrieved.
        KmlParseError: If the response body is not valid KML.
    """
    content = fetch_kml_document(url, timeout_s=timeout_s)
    return parse_kml_string(content, kind, source_name=url)
