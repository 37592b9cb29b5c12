"""lxml-based KML placemark parser.

Walks the element tree in document order and turns every Placemark with
a usable point into a ``PlacemarkRecord``.  One bad placemark never
blocks the rest: it is logged, recorded in ``ParseOutcome.skipped``,
and parsing continues.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from infra_kml.activities.parse_kml._constants import XPATH_COORDINATES, XPATH_PLACEMARKS
from infra_kml.activities.parse_kml._normalization import (
    child_element,
    element_text,
    extract_extended_data_lxml,
    parse_point_text,
)
from infra_kml.activities.parse_kml._validation import KmlValidationError, validate_coordinate
from infra_kml.core.constants import UNIQUE_ID_KEY
from infra_kml.models.placemark import ParseIssue, ParseOutcome, PlacemarkKind, PlacemarkRecord
from infra_kml.utils.geodesy import compute_bounds

if TYPE_CHECKING:
    from lxml.etree import _Element

logger = logging.getLogger("infra_kml.activities.parse_kml")


def parse_with_lxml(root: _Element, kind: PlacemarkKind, source_name: str = "") -> ParseOutcome:
    """Parse every Placemark under ``root`` into a ``ParseOutcome``.

    Args:
        root: Parsed ``<kml>`` root element.
        kind: Category assigned to every record.
        source_name: Label used in log messages only.
    """
    placemarks: list[PlacemarkRecord] = []
    skipped: list[ParseIssue] = []
    omitted_data: list[ParseIssue] = []

    for idx, pm in enumerate(root.xpath(XPATH_PLACEMARKS)):
        fallback_id = f"{kind.value}_{idx}"
        name = element_text(child_element(pm, "name")) or fallback_id
        description = element_text(child_element(pm, "description"))

        coord_elems = pm.xpath(XPATH_COORDINATES)
        try:
            if not coord_elems:
                msg = f"Placemark '{name}' has no <coordinates> element"
                raise KmlValidationError(msg)
            coordinates = parse_point_text(element_text(coord_elems[0]))
            validate_coordinate(coordinates.lat, coordinates.lng, name)
        except KmlValidationError as exc:
            logger.warning("Skipping invalid placemark '%s' in %s: %s", name, source_name, exc)
            skipped.append(ParseIssue(feature_index=idx, name=name, reason=exc.message))
            continue

        extended_data, omitted = extract_extended_data_lxml(pm)
        for reason in omitted:
            logger.debug("Omitting metadata on placemark '%s': %s", name, reason)
            omitted_data.append(ParseIssue(feature_index=idx, name=name, reason=reason))

        placemarks.append(
            PlacemarkRecord(
                id=extended_data.get(UNIQUE_ID_KEY) or fallback_id,
                name=name,
                description=description,
                coordinates=coordinates,
                extended_data=extended_data,
                kind=kind,
            )
        )

    bounds = compute_bounds((p.coordinates.lat, p.coordinates.lng) for p in placemarks)
    return ParseOutcome(
        placemarks=tuple(placemarks),
        skipped=tuple(skipped),
        omitted_data=tuple(omitted_data),
        bounds=bounds,
    )
