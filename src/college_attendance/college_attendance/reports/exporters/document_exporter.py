from __future__ import annotations

import io
import logging
from datetime import datetime
from functools import partial
from typing import Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ...common.datetime_utils import now_local
from ...core.constants import DOCUMENT_MIMETYPE, REPORT_TITLE, SYSTEM_TITLE, TIMESTAMP_FORMAT
from ...core.exceptions import ExportError
from ..model import ReportModel
from .base import ReportExporter, header_fields, summary_fields, time_marked
from .spreadsheet_exporter import TABLE_HEADERS

logger = logging.getLogger(__name__)

_MARGIN = 20 * mm
_COLUMN_WIDTHS = [14 * mm, 30 * mm, 70 * mm, 25 * mm, 30 * mm]
_PRESENT = colors.HexColor("#008000")
_ABSENT = colors.HexColor("#FF0000")


class _NumberedCanvas(canvas.Canvas):
    """Defers page output until the page count is known, then stamps 'Page N of M'."""

    def __init__(self, *args, generated_label: str = "", **kwargs):
        super().__init__(*args, **kwargs)
        self._generated_label = generated_label
        self._saved_page_states: list[dict] = []

    def showPage(self):
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        total = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self._draw_footer(total)
            super().showPage()
        super().save()

    def _draw_footer(self, total: int) -> None:
        width, _ = self._pagesize
        self.setFont("Helvetica", 8)
        self.drawCentredString(width / 2, 14 * mm, f"Page {self._pageNumber} of {total}")
        self.drawCentredString(width / 2, 9 * mm, self._generated_label)


def _draw_page_header(canv, doc) -> None:
    width, height = doc.pagesize
    canv.saveState()
    canv.setFont("Helvetica-Bold", 9)
    canv.drawString(_MARGIN, height - 12 * mm, SYSTEM_TITLE)
    canv.setFont("Helvetica", 9)
    canv.drawRightString(width - _MARGIN, height - 12 * mm, REPORT_TITLE)
    canv.restoreState()


class DocumentExporter(ReportExporter):
    """Paginated PDF rendering of the same report data."""

    extension = "pdf"
    mimetype = DOCUMENT_MIMETYPE

    def export(self, report: ReportModel, *, generated_at: Optional[datetime] = None) -> bytes:
        generated_at = generated_at or now_local()
        try:
            out = io.BytesIO()
            doc = SimpleDocTemplate(
                out,
                pagesize=A4,
                leftMargin=_MARGIN,
                rightMargin=_MARGIN,
                topMargin=_MARGIN,
                bottomMargin=_MARGIN,
                title=f"{report.unit_name} {REPORT_TITLE}",
                author=SYSTEM_TITLE,
                invariant=1,
            )
            doc.build(
                self._story(report),
                onFirstPage=_draw_page_header,
                onLaterPages=_draw_page_header,
                canvasmaker=partial(
                    _NumberedCanvas,
                    generated_label=f"Generated on {generated_at.strftime(TIMESTAMP_FORMAT)}",
                ),
            )
            return out.getvalue()
        except Exception as e:
            logger.error("Document export failed for session %s", report.session_id, exc_info=True)
            raise ExportError("Failed to generate document report") from e

    def _story(self, report: ReportModel) -> list:
        styles = getSampleStyleSheet()
        story: list = [
            Paragraph(SYSTEM_TITLE, styles["Title"]),
            Paragraph(REPORT_TITLE, styles["Heading2"]),
            Spacer(1, 4 * mm),
        ]
        for label, value in header_fields(report):
            story.append(Paragraph(f"<b>{label}</b> {escape(value)}", styles["Normal"]))
        story.append(Spacer(1, 6 * mm))

        rows = [list(TABLE_HEADERS)]
        for index, student in enumerate(report.students, start=1):
            rows.append(
                [
                    str(index),
                    student.admission_number,
                    student.full_name,
                    student.status,
                    time_marked(student.marked_at),
                ]
            )

        table = Table(rows, colWidths=_COLUMN_WIDTHS, repeatRows=1)
        style = [
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#E0E0E0")),
            ("LINEBELOW", (0, 0), (-1, 0), 0.75, colors.black),
            ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
            ("FONTSIZE", (0, 0), (-1, -1), 9),
        ]
        for row_index, student in enumerate(report.students, start=1):
            color = _PRESENT if student.is_present else _ABSENT
            style.append(("TEXTCOLOR", (3, row_index), (3, row_index), color))
        table.setStyle(TableStyle(style))
        story.append(table)

        story.append(Spacer(1, 6 * mm))
        story.append(Paragraph("<u>Summary</u>", styles["Heading3"]))
        for label, value in summary_fields(report):
            story.append(Paragraph(f"{label}: {value}", styles["Normal"]))

        return story
