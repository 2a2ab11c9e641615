from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import Iterable, Optional

import pytest
from werkzeug.security import generate_password_hash

from src.college_attendance.college_attendance.academics.model import Course, Level, Student, Unit
from src.college_attendance.college_attendance.attendance.model import AttendanceRecord
from src.college_attendance.college_attendance.container import assemble_container
from src.college_attendance.college_attendance.core.enums import Role
from src.college_attendance.college_attendance.sessions.model import UnitSession
from src.college_attendance.college_attendance.users.model import User


class InMemoryAcademics:
    def __init__(self):
        self.levels: dict[int, Level] = {}
        self.courses: dict[int, Course] = {}
        self.units: dict[int, Unit] = {}
        self.students: dict[int, Student] = {}

    def get_level(self, level_id: int) -> Optional[Level]:
        return self.levels.get(level_id)

    def get_course(self, course_id: int) -> Optional[Course]:
        return self.courses.get(course_id)

    def get_unit(self, unit_id: int) -> Optional[Unit]:
        return self.units.get(unit_id)

    def get_student(self, student_id: int) -> Optional[Student]:
        return self.students.get(student_id)

    def list_units_by_courses(self, course_ids: Iterable[int]):
        wanted = set(course_ids)
        return [u for u in self.units.values() if u.course_id in wanted]

    def list_units_by_teacher(self, teacher_id: int):
        return [u for u in self.units.values() if u.teacher_id == teacher_id]


class InMemoryEnrollments:
    def __init__(self):
        self.by_course: dict[int, list[Student]] = {}

    def list_students_for_course(self, course_id: int):
        return list(self.by_course.get(course_id, []))

    def list_course_ids_for_student(self, student_id: int):
        return [cid for cid, students in self.by_course.items() if any(s.student_id == student_id for s in students)]


class InMemorySessions:
    def __init__(self):
        self.sessions: dict[int, UnitSession] = {}

    def get_by_id(self, session_id: int) -> Optional[UnitSession]:
        return self.sessions.get(session_id)

    def list_by_units(self, unit_ids: Iterable[int]):
        wanted = set(unit_ids)
        items = [s for s in self.sessions.values() if s.unit_id in wanted]
        return sorted(items, key=lambda s: s.start_time)

    def set_active(self, session_id: int, *, is_active: bool) -> Optional[UnitSession]:
        session = self.sessions.get(session_id)
        if not session:
            return None
        updated = dataclasses.replace(session, is_active=is_active)
        self.sessions[session_id] = updated
        return updated


class InMemoryAttendance:
    def __init__(self):
        self.records: dict[tuple[int, int], AttendanceRecord] = {}
        self._id = 0

    def list_for_session(self, session_id: int):
        return [r for r in self.records.values() if r.session_id == session_id]

    def list_for_student(self, student_id: int):
        return [r for r in self.records.values() if r.student_id == student_id]

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        for r in self.records.values():
            if r.attendance_id == attendance_id:
                return r
        return None

    def get_for_session_and_student(self, session_id: int, student_id: int) -> Optional[AttendanceRecord]:
        return self.records.get((session_id, student_id))

    def upsert(
        self,
        *,
        session_id: int,
        student_id: int,
        is_present: bool,
        marked_by_self: bool,
        marked_by_teacher: bool,
        marked_at: datetime,
        updated_by=None,
    ) -> AttendanceRecord:
        existing = self.records.get((session_id, student_id))
        if existing:
            attendance_id = existing.attendance_id
        else:
            self._id += 1
            attendance_id = self._id
        rec = AttendanceRecord(
            attendance_id=attendance_id,
            session_id=session_id,
            student_id=student_id,
            is_present=is_present,
            marked_by_self=marked_by_self,
            marked_by_teacher=marked_by_teacher,
            marked_at=marked_at,
            updated_by=updated_by,
        )
        self.records[(session_id, student_id)] = rec
        return rec


class InMemoryUsers:
    def __init__(self):
        self.users: dict[int, User] = {}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        for u in self.users.values():
            if u.username == username:
                return u
        return None


ALICE = Student(student_id=1, full_name="Alice Wanjiru", admission_number="SE/001/26", email="alice@college.test")
BOB = Student(student_id=2, full_name="Bob Otieno", admission_number="SE/002/26", email="bob@college.test")
CAROL = Student(student_id=3, full_name="Carol Achieng", admission_number="SE/003/26", email="carol@college.test")
OUTSIDER = Student(student_id=9, full_name="Dan Kamau", admission_number="IT/009/26", email="dan@college.test")


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 2, 10, 30)


@pytest.fixture
def academics() -> InMemoryAcademics:
    repo = InMemoryAcademics()
    repo.levels[1] = Level(level_id=1, name="Level 1")
    repo.courses[1] = Course(course_id=1, name="Software Engineering", code="SE", level_id=1)
    repo.courses[2] = Course(course_id=2, name="Information Technology", code="IT", level_id=1)
    repo.units[1] = Unit(unit_id=1, name="Database Systems", code="DB101", course_id=1, teacher_id=100)
    repo.units[2] = Unit(unit_id=2, name="Networks", code="NET101", course_id=2, teacher_id=100)
    for s in (ALICE, BOB, CAROL, OUTSIDER):
        repo.students[s.student_id] = s
    return repo


@pytest.fixture
def enrollments() -> InMemoryEnrollments:
    repo = InMemoryEnrollments()
    repo.by_course[1] = [ALICE, BOB, CAROL]
    repo.by_course[2] = [OUTSIDER]
    return repo


@pytest.fixture
def sessions_repo() -> InMemorySessions:
    repo = InMemorySessions()
    # Session 1 is running at fixed_now, session 2 is later that day, session 3 is over.
    repo.sessions[1] = UnitSession(
        session_id=1,
        unit_id=1,
        start_time=datetime(2026, 3, 2, 10, 0),
        end_time=datetime(2026, 3, 2, 11, 0),
        location="Lab 1",
    )
    repo.sessions[2] = UnitSession(
        session_id=2,
        unit_id=1,
        start_time=datetime(2026, 3, 2, 14, 0),
        end_time=datetime(2026, 3, 2, 15, 0),
    )
    repo.sessions[3] = UnitSession(
        session_id=3,
        unit_id=2,
        start_time=datetime(2026, 3, 2, 8, 0),
        end_time=datetime(2026, 3, 2, 9, 0),
    )
    return repo


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def users_repo() -> InMemoryUsers:
    repo = InMemoryUsers()
    repo.users[100] = User(
        user_id=100,
        username="teacher",
        password_hash=generate_password_hash("teacher123"),
        full_name="Teacher Demo",
        email="teacher@college.test",
        role=Role.TEACHER,
        staff_id="T-100",
    )
    repo.users[1] = User(
        user_id=1,
        username="alice",
        password_hash=generate_password_hash("alice123"),
        full_name=ALICE.full_name,
        email=ALICE.email,
        role=Role.STUDENT,
        admission_number=ALICE.admission_number,
    )
    return repo


@pytest.fixture
def container(users_repo, academics, enrollments, sessions_repo, attendance_repo):
    return assemble_container(
        users_repo=users_repo,
        academics_repo=academics,
        enrollments_repo=enrollments,
        sessions_repo=sessions_repo,
        attendance_repo=attendance_repo,
    )
