"""Spreadsheet (XLSX) encoder backed by ``openpyxl``."""

from __future__ import annotations

import io
from collections.abc import Iterable

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from infra_kml.core.constants import EXPORT_COLUMNS, XLSX_COLUMN_WIDTHS, XLSX_SHEET_TITLE
from infra_kml.models.placemark import PlacemarkRecord


def encode_xlsx(records: Iterable[PlacemarkRecord]) -> bytes:
    """Encode records as a single-sheet XLSX workbook.

    Same columns as the CSV export; latitude and longitude are numeric
    cells holding the full float value.
    """
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = XLSX_SHEET_TITLE

    sheet.append(list(EXPORT_COLUMNS))
    for cell in sheet[1]:
        cell.font = Font(bold=True)
    sheet.freeze_panes = "A2"

    for record in records:
        sheet.append(
            [
                record.name,
                record.kind.value,
                record.coordinates.lat,
                record.coordinates.lng,
                record.description,
                record.status,
                record.created_date,
                record.last_updated,
            ]
        )
        # Text cells stay text, never formulas.
        for cell in sheet[sheet.max_row]:
            if cell.data_type == "f":
                cell.data_type = "s"

    for idx, width in enumerate(XLSX_COLUMN_WIDTHS, start=1):
        sheet.column_dimensions[get_column_letter(idx)].width = width

    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
