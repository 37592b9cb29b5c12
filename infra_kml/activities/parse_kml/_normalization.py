"""Coordinate and metadata normalization helpers for KML parsing.

Responsibilities:
- Read element text the way a DOM ``textContent`` does
- Parse KML point coordinate text into ``Coordinates``
- Extract ExtendedData metadata, reporting pairs that had to be dropped
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from infra_kml.activities.parse_kml._constants import (
    COORDINATE_SEPARATOR,
    MIN_COORDINATE_TOKENS,
    XPATH_DATA,
    XPATH_SIMPLE_DATA,
)
from infra_kml.activities.parse_kml._validation import KmlValidationError
from infra_kml.models.placemark import Coordinates

if TYPE_CHECKING:
    from lxml.etree import _Element

_SPACED_SEPARATOR = re.compile(r"\s*,\s*")


# ---------------------------------------------------------------------------
# Element text
# ---------------------------------------------------------------------------


def child_element(parent: _Element, localname: str) -> _Element | None:
    """First direct child with the given local name, namespace-agnostic."""
    matches = parent.xpath("*[local-name()=$name]", name=localname)
    return matches[0] if matches else None


def element_text(elem: _Element | None) -> str:
    """Concatenated, stripped text of ``elem`` and its descendants ("" if None)."""
    if elem is None:
        return ""
    return "".join(elem.itertext()).strip()


# ---------------------------------------------------------------------------
# KML coordinate text parsing
# ---------------------------------------------------------------------------


def parse_point_text(text: str) -> Coordinates:
    """Parse KML point text ``lng,lat[,altitude]`` into ``Coordinates``.

    Whitespace around commas is ignored, then only the first
    whitespace-separated tuple is read.  An empty third token means
    "no altitude".

    Raises:
        KmlValidationError: If there are fewer than two tokens or any
            token is not a number.
    """
    tuples = _SPACED_SEPARATOR.sub(COORDINATE_SEPARATOR, text.strip()).split()
    if not tuples:
        msg = "Empty coordinates element"
        raise KmlValidationError(msg)

    tokens = [t.strip() for t in tuples[0].split(COORDINATE_SEPARATOR)]
    if len(tokens) < MIN_COORDINATE_TOKENS or not tokens[1]:
        msg = f"Malformed coordinates {tuples[0]!r}: expected at least lng,lat"
        raise KmlValidationError(msg)

    try:
        lng = float(tokens[0])
        lat = float(tokens[1])
        altitude = float(tokens[2]) if len(tokens) > 2 and tokens[2] else None
    except ValueError as exc:
        msg = f"Malformed coordinates {tuples[0]!r}: cannot convert to float"
        raise KmlValidationError(msg) from exc

    return Coordinates(lat=lat, lng=lng, altitude=altitude)


# ---------------------------------------------------------------------------
# lxml metadata extraction
# ---------------------------------------------------------------------------


def extract_extended_data_lxml(placemark_elem: _Element) -> tuple[dict[str, str], list[str]]:
    """Extract ExtendedData metadata from a Placemark element.

    Handles both KML metadata patterns:
    - ``ExtendedData/Data/value`` - untyped key-value pairs.
    - ``ExtendedData/SchemaData/SimpleData`` - typed fields.

    Returns:
        ``(metadata, omitted)`` where ``omitted`` describes each pair
        dropped for a missing name or an empty value.
    """
    metadata: dict[str, str] = {}
    omitted: list[str] = []

    for data_elem in placemark_elem.xpath(XPATH_DATA):
        key = (data_elem.get("name") or "").strip()
        value = element_text(child_element(data_elem, "value"))
        if not key:
            omitted.append("ExtendedData <Data> without a name attribute")
            continue
        if not value:
            omitted.append(f"ExtendedData '{key}' has no value")
            continue
        metadata[key] = value

    for simple_data in placemark_elem.xpath(XPATH_SIMPLE_DATA):
        key = (simple_data.get("name") or "").strip()
        value = element_text(simple_data)
        if not key:
            omitted.append("SchemaData <SimpleData> without a name attribute")
            continue
        if not value:
            omitted.append(f"SchemaData '{key}' has no value")
            continue
        metadata[key] = value

    return metadata, omitted
