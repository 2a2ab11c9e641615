from datetime import datetime

from conftest import ALICE, BOB, CAROL

from src.college_attendance.college_attendance.academics.model import Course, Level, Unit
from src.college_attendance.college_attendance.attendance.model import AttendanceRecord
from src.college_attendance.college_attendance.attendance.reconciler import reconcile
from src.college_attendance.college_attendance.reports.assembler import assemble_report, attendance_rate
from src.college_attendance.college_attendance.sessions.model import UnitSession

SESSION = UnitSession(
    session_id=1,
    unit_id=1,
    start_time=datetime(2026, 3, 2, 10, 0),
    end_time=datetime(2026, 3, 2, 11, 0),
)
UNIT = Unit(unit_id=1, name="Database Systems", code="DB101", course_id=1)
COURSE = Course(course_id=1, name="Software Engineering", code="SE", level_id=1)
LEVEL = Level(level_id=1, name="Level 1")


def test_one_of_three_present():
    marked_at = datetime(2026, 3, 2, 10, 5)
    records = [
        AttendanceRecord(1, 1, ALICE.student_id, True, False, True, marked_at),
        AttendanceRecord(2, 1, BOB.student_id, False, False, True, marked_at),
    ]
    view = reconcile([ALICE, BOB, CAROL], records, session_id=1)

    report = assemble_report(view, SESSION, UNIT, COURSE, LEVEL)

    assert (report.summary.total, report.summary.present, report.summary.absent, report.summary.rate) == (3, 1, 2, 33)
    assert [row.status for row in report.students] == ["Present", "Absent", "Absent"]
    assert report.students[0].marked_at == marked_at
    assert report.students[2].marked_at is None
    assert report.location == "TBD"
    assert report.session_date.isoformat() == "2026-03-02"


def test_empty_roster_is_a_valid_report():
    view = reconcile([], [], session_id=1)

    report = assemble_report(view, SESSION, UNIT, COURSE, LEVEL)

    assert report.students == ()
    assert (report.summary.total, report.summary.present, report.summary.absent, report.summary.rate) == (0, 0, 0, 0)


def test_attendance_rate_rounds_half_up():
    assert attendance_rate(1, 8) == 13
    assert attendance_rate(2, 3) == 67
    assert attendance_rate(5, 5) == 100
    assert attendance_rate(0, 0) == 0
