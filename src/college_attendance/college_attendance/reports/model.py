from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class ReportStudentRow:
    student_id: int
    admission_number: str
    full_name: str
    is_present: bool
    marked_at: Optional[datetime] = None

    @property
    def status(self) -> str:
        return "Present" if self.is_present else "Absent"


@dataclass(frozen=True)
class ReportSummary:
    total: int
    present: int
    absent: int
    rate: int


@dataclass(frozen=True)
class ReportModel:
    """Value object fed to the exporters. Holds no references to live storage objects."""

    session_id: int
    unit_name: str
    unit_code: str
    course_name: str
    level_name: str
    session_date: date
    start_time: datetime
    end_time: datetime
    location: str
    students: tuple[ReportStudentRow, ...]
    summary: ReportSummary


@dataclass(frozen=True)
class ExportedFile:
    filename: str
    content: bytes
    mimetype: str
