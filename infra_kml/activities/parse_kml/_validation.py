"""Validation helpers for KML parsing.

Responsibilities:
- XML structure and KML root validation (structural, raises)
- Coordinate finiteness and WGS 84 bounds checking (per placemark)
"""

from __future__ import annotations

import logging
import math
import re
from typing import TYPE_CHECKING

from infra_kml.activities.parse_kml._constants import (
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
)
from infra_kml.core.exceptions import ValidationError

if TYPE_CHECKING:
    from lxml.etree import _Element

logger = logging.getLogger("infra_kml.activities.parse_kml")

_DECLARED_ENCODING = re.compile(r"""^(\s*<\?xml\b[^>]*?)\s+encoding\s*=\s*(["'])[^"']*\2""")


# ---------------------------------------------------------------------------
# Exceptions (public API, re-exported from __init__)
# ---------------------------------------------------------------------------


class KmlParseError(ValidationError):
    """Raised when a KML document cannot be parsed."""

    default_stage = "parse_kml"
    default_code = "KML_PARSE_FAILED"


class KmlValidationError(KmlParseError):
    """Raised when a placemark is structurally valid but contains invalid data."""

    default_code = "KML_VALIDATION_FAILED"


class InvalidCoordinateError(KmlValidationError):
    """Raised when coordinates are outside valid WGS 84 bounds."""

    default_code = "KML_COORDINATE_INVALID"


# ---------------------------------------------------------------------------
# XML / KML document validation
# ---------------------------------------------------------------------------


def load_document(document: str | bytes) -> _Element:
    """Parse document text into an element tree rooted at ``<kml>``.

    Text is already decoded, so any encoding named in its XML declaration
    is dropped and the text is parsed as UTF-8.  Entities are not
    resolved and the network is never touched.

    Raises:
        KmlParseError: If the document is empty, not valid XML, or its
            root element is not ``<kml>``.
    """
    from lxml import etree  # type: ignore[attr-defined]

    if isinstance(document, str):
        content = _DECLARED_ENCODING.sub(r"\1", document, count=1).encode("utf-8")
    else:
        content = document
    if not content.strip():
        msg = "KML document is empty"
        raise KmlParseError(msg)

    parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=False)
    try:
        root = etree.fromstring(content, parser=parser)
    except etree.XMLSyntaxError as exc:
        msg = f"Not valid XML: {exc}"
        raise KmlParseError(msg) from exc

    localname = etree.QName(root).localname
    if localname.lower() != "kml":
        msg = f"Not a KML document: root element is <{localname}>"
        raise KmlParseError(msg)

    logger.debug("Loaded KML document | bytes=%d | namespace=%s", len(content), root.nsmap.get(None))
    return root


# ---------------------------------------------------------------------------
# Coordinate validation
# ---------------------------------------------------------------------------


def validate_coordinate(lat: float, lng: float, placemark_name: str) -> None:
    """Validate that a point is finite and within WGS 84 bounds.

    Raises:
        KmlValidationError: If either value is NaN or infinite.
        InvalidCoordinateError: If either value is out of range.
    """
    if not (math.isfinite(lat) and math.isfinite(lng)):
        msg = f"Non-finite coordinate (lat={lat}, lng={lng}) in Placemark '{placemark_name}'"
        raise KmlValidationError(msg)
    if not (MIN_LONGITUDE <= lng <= MAX_LONGITUDE):
        msg = (
            f"Longitude {lng} out of WGS 84 range [{MIN_LONGITUDE}, {MAX_LONGITUDE}] "
            f"in Placemark '{placemark_name}'"
        )
        raise InvalidCoordinateError(msg)
    if not (MIN_LATITUDE <= lat <= MAX_LATITUDE):
        msg = (
            f"Latitude {lat} out of WGS 84 range [{MIN_LATITUDE}, {MAX_LATITUDE}] "
            f"in Placemark '{placemark_name}'"
        )
        raise InvalidCoordinateError(msg)
