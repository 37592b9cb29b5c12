"""Shared constants for KML parsing."""

from __future__ import annotations

from infra_kml.core.constants import (
    KML_NAMESPACE,
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
)

__all__ = [
    "COORDINATE_SEPARATOR",
    "KML_NAMESPACE",
    "MAX_LATITUDE",
    "MAX_LONGITUDE",
    "MIN_COORDINATE_TOKENS",
    "MIN_LATITUDE",
    "MIN_LONGITUDE",
    "XPATH_COORDINATES",
    "XPATH_DATA",
    "XPATH_PLACEMARKS",
    "XPATH_SIMPLE_DATA",
]

# Elements are matched by local name so KML 2.1, 2.2 and
# namespace-less documents all parse.
XPATH_PLACEMARKS = ".//*[local-name()='Placemark']"
XPATH_COORDINATES = ".//*[local-name()='coordinates']"
XPATH_DATA = "*[local-name()='ExtendedData']/*[local-name()='Data']"
XPATH_SIMPLE_DATA = (
    "*[local-name()='ExtendedData']/*[local-name()='SchemaData']/*[local-name()='SimpleData']"
)

# A point tuple is "lng,lat[,altitude]"
COORDINATE_SEPARATOR = ","
MIN_COORDINATE_TOKENS = 2
