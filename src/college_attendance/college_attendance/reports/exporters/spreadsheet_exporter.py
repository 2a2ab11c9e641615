from __future__ import annotations

import io
import logging
from datetime import datetime
from typing import Optional

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from ...common.datetime_utils import now_local
from ...core.constants import REPORT_TITLE, SPREADSHEET_MIMETYPE, SYSTEM_TITLE, TIMESTAMP_FORMAT
from ...core.exceptions import ExportError
from ..model import ReportModel
from .base import ReportExporter, header_fields, summary_fields, time_marked

logger = logging.getLogger(__name__)

TABLE_HEADERS = ("No.", "Student ID", "Full Name", "Status", "Time Marked")
GENERATED_LABEL = "Generated:"
# Only cell whose value depends on the clock; title row, six header rows, then this one.
GENERATED_AT_CELL = "B8"

_THIN = Side(style="thin")
_BORDER = Border(left=_THIN, right=_THIN, top=_THIN, bottom=_THIN)
_HEADER_FILL = PatternFill(start_color="FFE0E0E0", end_color="FFE0E0E0", fill_type="solid")
_PRESENT_FONT = Font(color="FF008000")
_ABSENT_FONT = Font(color="FFFF0000")
_COLUMN_WIDTHS = {"A": 5, "B": 15, "C": 30, "D": 10, "E": 20}


class SpreadsheetExporter(ReportExporter):
    """Single-sheet .xlsx: header block, attendance table, summary block."""

    extension = "xlsx"
    mimetype = SPREADSHEET_MIMETYPE

    def export(self, report: ReportModel, *, generated_at: Optional[datetime] = None) -> bytes:
        generated_at = generated_at or now_local()
        try:
            wb = self._build(report, generated_at)
            out = io.BytesIO()
            wb.save(out)
            return out.getvalue()
        except Exception as e:
            logger.error("Spreadsheet export failed for session %s", report.session_id, exc_info=True)
            raise ExportError("Failed to generate spreadsheet report") from e

    def _build(self, report: ReportModel, generated_at: datetime) -> Workbook:
        wb = Workbook()
        wb.properties.creator = SYSTEM_TITLE
        wb.properties.created = generated_at
        wb.properties.modified = generated_at
        ws = wb.active
        ws.title = REPORT_TITLE

        ws.append([f"{SYSTEM_TITLE} - {REPORT_TITLE}"])
        ws.merge_cells("A1:E1")
        ws["A1"].font = Font(bold=True, size=16)
        ws["A1"].alignment = Alignment(horizontal="center")

        for label, value in header_fields(report):
            ws.append([label, value])
        ws.append([GENERATED_LABEL, generated_at.strftime(TIMESTAMP_FORMAT)])
        ws.append([])

        ws.append(list(TABLE_HEADERS))
        for cell in ws[ws.max_row]:
            cell.font = Font(bold=True)
            cell.fill = _HEADER_FILL
            cell.border = _BORDER

        for index, student in enumerate(report.students, start=1):
            ws.append(
                [
                    index,
                    student.admission_number,
                    student.full_name,
                    student.status,
                    time_marked(student.marked_at),
                ]
            )
            row = ws[ws.max_row]
            for cell in row:
                cell.border = _BORDER
            row[3].font = _PRESENT_FONT if student.is_present else _ABSENT_FONT

        ws.append([])
        for label, value in summary_fields(report):
            ws.append([label, value])
            ws.cell(row=ws.max_row, column=1).font = Font(bold=True)

        for column, width in _COLUMN_WIDTHS.items():
            ws.column_dimensions[column].width = width

        return wb
