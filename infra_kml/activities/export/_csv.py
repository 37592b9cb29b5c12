"""Delimited-text (CSV) encoder."""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable, Sequence

from infra_kml.core.constants import EXPORT_COLUMNS
from infra_kml.models.placemark import PlacemarkRecord


def export_row(record: PlacemarkRecord) -> list[str]:
    """Cells for one record, in ``EXPORT_COLUMNS`` order, as text."""
    return [
        record.name,
        record.kind.value,
        repr(record.coordinates.lat),
        repr(record.coordinates.lng),
        record.description,
        record.status,
        record.created_date,
        record.last_updated,
    ]


def encode_csv(records: Iterable[PlacemarkRecord], columns: Sequence[str] = EXPORT_COLUMNS) -> bytes:
    """Encode records as UTF-8 CSV.

    Every field is double-quoted and embedded quotes are doubled, so
    ``He said "Hi", ok`` becomes ``"He said ""Hi"", ok"``.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(columns)
    for record in records:
        writer.writerow(export_row(record))
    return buffer.getvalue().encode("utf-8")
