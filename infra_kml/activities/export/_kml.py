"""Markup (KML) and compressed-archive (KMZ) encoders.

The KML layout is fixed so exports diff cleanly:

- XML declaration, ``<kml>`` root in the KML 2.2 namespace, ``<Document>``
- document ``<name>`` / ``<description>``
- ``popStyle`` (red paddle) and ``subPopStyle`` (blue paddle) styles
- one ``<Placemark>`` per record, ``<coordinates>`` in ``lng,lat,0`` order

A KMZ is a zip archive whose only entry is ``doc.kml``.
"""

from __future__ import annotations

import io
import re
import zipfile
from collections.abc import Iterable

from infra_kml.core.constants import (
    EXPORT_DESCRIPTION,
    KML_NAMESPACE,
    KMZ_ENTRY_NAME,
    POP_ICON_HREF,
    POP_STYLE_ID,
    SUB_POP_ICON_HREF,
    SUB_POP_STYLE_ID,
)
from infra_kml.models.placemark import PlacemarkRecord

DEFAULT_COMPRESSION_LEVEL = 6

_ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)

# "&" first so entities produced by later replacements are not re-escaped
_XML_ESCAPES: tuple[tuple[str, str], ...] = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
)

# Characters XML 1.0 forbids even as character references
_XML_ILLEGAL_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def escape_xml(text: str) -> str:
    """Escape ``& < > " '`` for use in XML text and attribute values.

    Raises:
        ValueError: If ``text`` holds a character XML 1.0 cannot carry,
            such as a control character pasted from a spreadsheet.
    """
    illegal = _XML_ILLEGAL_CHARS.search(text)
    if illegal is not None:
        msg = f"Character {illegal.group()!r} is not allowed in XML text {text!r}"
        raise ValueError(msg)
    for char, entity in _XML_ESCAPES:
        text = text.replace(char, entity)
    return text


def _style_block(style_id: str, icon_href: str) -> list[str]:
    return [
        f'    <Style id="{style_id}">',
        "      <IconStyle>",
        "        <Icon>",
        f"          <href>{icon_href}</href>",
        "        </Icon>",
        "      </IconStyle>",
        "    </Style>",
    ]


def _placemark_block(record: PlacemarkRecord) -> list[str]:
    lines = [
        "    <Placemark>",
        f"      <name>{escape_xml(record.name)}</name>",
        f"      <description>{escape_xml(record.description)}</description>",
        f"      <styleUrl>#{record.kind.style_id}</styleUrl>",
    ]
    if record.extended_data:
        lines.append("      <ExtendedData>")
        lines.extend(
            f'        <Data name="{escape_xml(key)}"><value>{escape_xml(value)}</value></Data>'
            for key, value in record.extended_data.items()
        )
        lines.append("      </ExtendedData>")
    lng, lat = record.coordinates.as_lng_lat()
    lines.extend(
        [
            "      <Point>",
            f"        <coordinates>{lng!r},{lat!r},0</coordinates>",
            "      </Point>",
            "    </Placemark>",
        ]
    )
    return lines


def build_kml_document(records: Iterable[PlacemarkRecord], document_name: str) -> str:
    """Render records as a complete KML document string."""
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<kml xmlns="{KML_NAMESPACE}">',
        "  <Document>",
        f"    <name>{escape_xml(document_name)}</name>",
        f"    <description>{EXPORT_DESCRIPTION}</description>",
        *_style_block(POP_STYLE_ID, POP_ICON_HREF),
        *_style_block(SUB_POP_STYLE_ID, SUB_POP_ICON_HREF),
    ]
    for record in records:
        lines.extend(_placemark_block(record))
    lines.extend(["  </Document>", "</kml>"])
    return "\n".join(lines) + "\n"


def encode_kml(records: Iterable[PlacemarkRecord], document_name: str) -> bytes:
    """Encode records as UTF-8 KML."""
    return build_kml_document(records, document_name).encode("utf-8")


def encode_kmz(
    records: Iterable[PlacemarkRecord],
    document_name: str,
    *,
    compression_level: int = DEFAULT_COMPRESSION_LEVEL,
) -> bytes:
    """Encode records as a KMZ archive holding a single ``doc.kml`` entry."""
    kml_bytes = encode_kml(records, document_name)
    # Fixed timestamp: identical input yields identical archive bytes.
    entry = zipfile.ZipInfo(KMZ_ENTRY_NAME, date_time=_ZIP_EPOCH)
    entry.compress_type = zipfile.ZIP_DEFLATED
    entry.external_attr = 0o644 << 16
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, mode="w") as archive:
        archive.writestr(entry, kml_bytes, compresslevel=compression_level)
    return buffer.getvalue()
