from __future__ import annotations

from ..academics.model import Course, Level, Unit
from ..attendance.model import ReconciledAttendanceView
from ..sessions.model import UnitSession
from .model import ReportModel, ReportStudentRow, ReportSummary


def attendance_rate(present: int, total: int) -> int:
    """Whole percent, rounded half up; 0 when there is nobody to count."""
    if total <= 0:
        return 0
    return int(present * 100 / total + 0.5)


def summarize(present: int, total: int) -> ReportSummary:
    return ReportSummary(total=total, present=present, absent=total - present, rate=attendance_rate(present, total))


def assemble_report(
    view: ReconciledAttendanceView,
    session: UnitSession,
    unit: Unit,
    course: Course,
    level: Level,
) -> ReportModel:
    """Project a reconciled view plus its reference entities into a report.

    Pure: every entity must be resolved by the caller. An empty view is a valid report.
    """

    students = tuple(
        ReportStudentRow(
            student_id=e.student.student_id,
            admission_number=e.student.admission_number,
            full_name=e.student.full_name,
            is_present=e.is_present,
            marked_at=e.marked_at,
        )
        for e in view
    )
    present = sum(1 for s in students if s.is_present)

    return ReportModel(
        session_id=session.session_id,
        unit_name=unit.name,
        unit_code=unit.code,
        course_name=course.name,
        level_name=level.name,
        session_date=session.session_date,
        start_time=session.start_time,
        end_time=session.end_time,
        location=session.display_location,
        students=students,
        summary=summarize(present, len(students)),
    )
