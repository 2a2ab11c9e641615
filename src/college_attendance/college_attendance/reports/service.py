from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..academics.repository import AcademicRepository
from ..attendance.service import AttendanceService
from ..core.exceptions import NotFoundError
from ..sessions.repository import SessionRepository
from .assembler import assemble_report, summarize
from .exporters.base import ReportExporter
from .exporters.document_exporter import DocumentExporter
from .exporters.spreadsheet_exporter import SpreadsheetExporter
from .model import ExportedFile, ReportModel, ReportSummary

logger = logging.getLogger(__name__)


class ReportService:
    """Use case: resolve a session's reference data, assemble and export its report."""

    def __init__(
        self,
        sessions: SessionRepository,
        academics: AcademicRepository,
        attendance: AttendanceService,
        *,
        spreadsheet_exporter: Optional[ReportExporter] = None,
        document_exporter: Optional[ReportExporter] = None,
    ):
        self._sessions = sessions
        self._academics = academics
        self._attendance = attendance
        self._spreadsheet = spreadsheet_exporter or SpreadsheetExporter()
        self._document = document_exporter or DocumentExporter()

    def build_report(self, session_id: int) -> ReportModel:
        session = self._sessions.get_by_id(session_id)
        if not session:
            raise NotFoundError(f"Session {session_id} not found")

        unit = self._academics.get_unit(session.unit_id)
        if not unit:
            raise NotFoundError(f"Unit {session.unit_id} not found")
        course = self._academics.get_course(unit.course_id)
        if not course:
            raise NotFoundError(f"Course {unit.course_id} not found")
        level = self._academics.get_level(course.level_id)
        if not level:
            raise NotFoundError(f"Level {course.level_id} not found")

        view = self._attendance.reconciled_view(session_id)
        return assemble_report(view, session, unit, course, level)

    def export_spreadsheet(self, session_id: int, *, generated_at: Optional[datetime] = None) -> ExportedFile:
        return self._export(self._spreadsheet, session_id, generated_at)

    def export_document(self, session_id: int, *, generated_at: Optional[datetime] = None) -> ExportedFile:
        return self._export(self._document, session_id, generated_at)

    def student_summary(self, student_id: int) -> ReportSummary:
        records = self._attendance.records_for_student(student_id)
        present = sum(1 for r in records if r.is_present)
        return summarize(present, len(records))

    def _export(self, exporter: ReportExporter, session_id: int, generated_at: Optional[datetime]) -> ExportedFile:
        report = self.build_report(session_id)
        content = exporter.export(report, generated_at=generated_at)
        filename = exporter.filename_for(report)
        logger.info("Exported %s (%d bytes)", filename, len(content))
        return ExportedFile(filename=filename, content=content, mimetype=exporter.mimetype)
