"""Export activity: encode placemark collections to interchange formats.

Four independent encoders turn a collection of ``PlacemarkRecord`` into
an in-memory byte buffer:

- **csv**: quoted delimited text (``_csv``)
- **xlsx**: single-sheet spreadsheet via ``openpyxl`` (``_xlsx``)
- **kml**: KML 2.2 markup with POP / Sub-POP styles (``_kml``)
- **kmz**: zip archive wrapping the KML as ``doc.kml`` (``_kml``)

Records are written in the order given.  Delivering the buffer (file
download, blob upload) belongs to the caller.  An unknown format raises
``UnsupportedFormatError``; there is no silent fallback.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from openpyxl.utils.exceptions import IllegalCharacterError

from infra_kml.activities.export._csv import encode_csv, export_row
from infra_kml.activities.export._kml import (
    DEFAULT_COMPRESSION_LEVEL,
    build_kml_document,
    encode_kml,
    encode_kmz,
    escape_xml,
)
from infra_kml.activities.export._xlsx import encode_xlsx
from infra_kml.core.constants import (
    CSV_CONTENT_TYPE,
    KML_CONTENT_TYPE,
    KMZ_CONTENT_TYPE,
    XLSX_CONTENT_TYPE,
)
from infra_kml.core.exceptions import PermanentError, ValidationError
from infra_kml.utils.pagination import iter_pages

if TYPE_CHECKING:
    from infra_kml.models.placemark import PlacemarkRecord

logger = logging.getLogger("infra_kml.activities.export")

DEFAULT_DOCUMENT_NAME = "infrastructure_export"

__all__ = [
    "DEFAULT_DOCUMENT_NAME",
    "ExportArtifact",
    "ExportError",
    "ExportFormat",
    "UnsupportedFormatError",
    "build_kml_document",
    "encode",
    "encode_csv",
    "encode_kml",
    "encode_kmz",
    "encode_xlsx",
    "escape_xml",
    "export_data",
    "export_formats",
    "export_in_batches",
    "export_row",
]


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class UnsupportedFormatError(ValidationError):
    """Raised when an export format is not recognised."""

    default_stage = "export"
    default_code = "EXPORT_FORMAT_UNSUPPORTED"

    def __init__(self, fmt: object) -> None:
        self.format = fmt
        valid = ", ".join(f.value for f in ExportFormat)
        super().__init__(f"Unsupported export format: {fmt!r} (expected one of {valid})")


class ExportError(PermanentError):
    """Raised when an encoder fails on otherwise valid input."""

    default_stage = "export"
    default_code = "EXPORT_FAILED"


# ---------------------------------------------------------------------------
# Formats
# ---------------------------------------------------------------------------


class ExportFormat(str, Enum):
    """Supported export formats."""

    CSV = "csv"
    XLSX = "xlsx"
    KML = "kml"
    KMZ = "kmz"

    @property
    def extension(self) -> str:
        return f".{self.value}"

    @property
    def content_type(self) -> str:
        return _CONTENT_TYPES[self]

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def coerce(cls, value: ExportFormat | str) -> ExportFormat:
        """Resolve a format or alias (case-insensitive).

        Raises:
            UnsupportedFormatError: If ``value`` is not a known format.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower().lstrip(".")
            fmt = _ALIASES.get(key)
            if fmt is not None:
                return fmt
        raise UnsupportedFormatError(value)


_CONTENT_TYPES = {
    ExportFormat.CSV: CSV_CONTENT_TYPE,
    ExportFormat.XLSX: XLSX_CONTENT_TYPE,
    ExportFormat.KML: KML_CONTENT_TYPE,
    ExportFormat.KMZ: KMZ_CONTENT_TYPE,
}

_LABELS = {
    ExportFormat.CSV: "CSV",
    ExportFormat.XLSX: "Excel",
    ExportFormat.KML: "KML",
    ExportFormat.KMZ: "KMZ",
}

_ALIASES = {
    **{f.value: f for f in ExportFormat},
    "spreadsheet": ExportFormat.XLSX,
    "excel": ExportFormat.XLSX,
    "markup": ExportFormat.KML,
    "archive": ExportFormat.KMZ,
}


@dataclass(frozen=True, slots=True)
class ExportArtifact:
    """An encoded export ready for storage or download.

    Attributes:
        filename: Suggested filename including extension.
        content_type: MIME type of ``payload``.
        payload: Encoded bytes.
        record_count: Number of records encoded.
    """

    filename: str
    content_type: str
    payload: bytes
    record_count: int

    @property
    def size_bytes(self) -> int:
        return len(self.payload)


def export_formats() -> list[tuple[ExportFormat, str]]:
    """Supported formats with display labels, in menu order."""
    return [(fmt, fmt.label) for fmt in ExportFormat]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def encode(
    records: Sequence[PlacemarkRecord],
    fmt: ExportFormat | str,
    *,
    document_name: str = DEFAULT_DOCUMENT_NAME,
    compression_level: int = DEFAULT_COMPRESSION_LEVEL,
) -> bytes:
    """Encode ``records`` in ``fmt`` and return the byte buffer.

    Args:
        records: Records to export, written in the given order.
        fmt: ``ExportFormat`` or one of ``csv``, ``xlsx``, ``kml``, ``kmz``
            (aliases ``spreadsheet``, ``excel``, ``markup``, ``archive``).
        document_name: KML ``<Document>`` name (KML / KMZ only).
        compression_level: zlib level for KMZ archives.

    Raises:
        UnsupportedFormatError: If ``fmt`` is not a supported format.
        ExportError: If the underlying encoder fails.
    """
    export_format = ExportFormat.coerce(fmt)
    try:
        if export_format is ExportFormat.CSV:
            payload = encode_csv(records)
        elif export_format is ExportFormat.XLSX:
            payload = encode_xlsx(records)
        elif export_format is ExportFormat.KML:
            payload = encode_kml(records, document_name)
        else:
            payload = encode_kmz(records, document_name, compression_level=compression_level)
    except (ValueError, TypeError, IllegalCharacterError) as exc:
        msg = f"Failed to encode {len(records)} record(s) as {export_format.value}: {exc}"
        raise ExportError(msg) from exc

    logger.info(
        "Encoded %d record(s) as %s | bytes=%d",
        len(records),
        export_format.value,
        len(payload),
    )
    return payload


def export_data(
    records: Sequence[PlacemarkRecord],
    fmt: ExportFormat | str,
    filename: str = DEFAULT_DOCUMENT_NAME,
    *,
    compression_level: int = DEFAULT_COMPRESSION_LEVEL,
) -> ExportArtifact:
    """Encode records into an ``ExportArtifact`` named ``{filename}.{ext}``.

    ``filename`` doubles as the KML document name.

    Raises:
        UnsupportedFormatError: If ``fmt`` is not a supported format.
        ExportError: If the underlying encoder fails.
    """
    export_format = ExportFormat.coerce(fmt)
    payload = encode(
        records,
        export_format,
        document_name=filename,
        compression_level=compression_level,
    )
    return ExportArtifact(
        filename=f"{filename}{export_format.extension}",
        content_type=export_format.content_type,
        payload=payload,
        record_count=len(records),
    )


def export_in_batches(
    records: Sequence[PlacemarkRecord],
    fmt: ExportFormat | str,
    *,
    batch_size: int,
    filename: str = DEFAULT_DOCUMENT_NAME,
    compression_level: int = DEFAULT_COMPRESSION_LEVEL,
) -> list[ExportArtifact]:
    """Split ``records`` into page-sized artifacts named ``{filename}_part{n}``.

    Order is preserved across and within parts.  An empty collection
    yields no artifacts.

    Raises:
        PaginationError: If ``batch_size`` is less than 1.
        UnsupportedFormatError: If ``fmt`` is not a supported format.
    """
    export_format = ExportFormat.coerce(fmt)
    artifacts = [
        export_data(
            page.items,
            export_format,
            f"{filename}_part{page.page}",
            compression_level=compression_level,
        )
        for page in iter_pages(records, batch_size)
    ]
    logger.info(
        "Exported %d record(s) as %d %s batch(es) of up to %d",
        len(records),
        len(artifacts),
        export_format.value,
        batch_size,
    )
    return artifacts
