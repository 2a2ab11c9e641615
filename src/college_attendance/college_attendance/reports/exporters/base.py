from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from ...common.datetime_utils import format_time
from ...core.constants import DATE_FORMAT
from ..model import ReportModel


def export_filename(report: ReportModel, extension: str) -> str:
    """{unitName}_attendance_{YYYY-MM-DD}.{ext}, dated by the session, not by generation."""
    unit_name = report.unit_name.strip().replace("/", "-").replace("\\", "-")
    return f"{unit_name}_attendance_{report.session_date.strftime(DATE_FORMAT)}.{extension}"


def header_fields(report: ReportModel) -> list[tuple[str, str]]:
    return [
        ("Unit:", report.unit_name),
        ("Course:", report.course_name),
        ("Level:", report.level_name),
        ("Date:", report.session_date.strftime(DATE_FORMAT)),
        ("Time:", f"{format_time(report.start_time)} - {format_time(report.end_time)}"),
        ("Location:", report.location),
    ]


def summary_fields(report: ReportModel) -> list[tuple[str, object]]:
    s = report.summary
    return [
        ("Total", s.total),
        ("Present", s.present),
        ("Absent", s.absent),
        ("Attendance Rate", f"{s.rate}%"),
    ]


def time_marked(marked_at: Optional[datetime]) -> str:
    return format_time(marked_at) if marked_at else "-"


class ReportExporter(ABC):
    """Exporter interface (Strategy Pattern for output formats)."""

    extension: str
    mimetype: str

    @abstractmethod
    def export(self, report: ReportModel, *, generated_at: Optional[datetime] = None) -> bytes:
        raise NotImplementedError

    def filename_for(self, report: ReportModel) -> str:
        return export_filename(report, self.extension)
