from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .academics.mysql_academic_repository import MySQLAcademicRepository
from .academics.repository import AcademicRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .enrollments.mysql_enrollment_repository import MySQLEnrollmentRepository
from .enrollments.repository import EnrollmentRepository
from .enrollments.service import RosterService
from .reports.service import ReportService
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.repository import SessionRepository
from .sessions.service import SessionService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    academics_repo: AcademicRepository
    enrollments_repo: EnrollmentRepository
    sessions_repo: SessionRepository
    attendance_repo: AttendanceRepository

    auth_service: AuthService
    roster_service: RosterService
    session_service: SessionService
    attendance_service: AttendanceService
    report_service: ReportService


def assemble_container(
    *,
    users_repo: UserRepository,
    academics_repo: AcademicRepository,
    enrollments_repo: EnrollmentRepository,
    sessions_repo: SessionRepository,
    attendance_repo: AttendanceRepository,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services on top of the given repositories (MySQL or in-memory)."""

    auth_service = AuthService(users_repo)
    roster_service = RosterService(academics_repo, enrollments_repo)
    session_service = SessionService(sessions_repo, academics_repo, enrollments_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        sessions_repo,
        academics_repo,
        roster_service,
    )
    report_service = ReportService(sessions_repo, academics_repo, attendance_service)

    return Container(
        conn=conn,
        users_repo=users_repo,
        academics_repo=academics_repo,
        enrollments_repo=enrollments_repo,
        sessions_repo=sessions_repo,
        attendance_repo=attendance_repo,
        auth_service=auth_service,
        roster_service=roster_service,
        session_service=session_service,
        attendance_service=attendance_service,
        report_service=report_service,
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble_container(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        academics_repo=MySQLAcademicRepository(conn),
        enrollments_repo=MySQLEnrollmentRepository(conn),
        sessions_repo=MySQLSessionRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
    )
