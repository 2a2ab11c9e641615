from __future__ import annotations

from typing import Sequence

from ..academics.model import Student
from ..academics.mysql_academic_repository import to_student
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .repository import EnrollmentRepository


class MySQLEnrollmentRepository(EnrollmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_students_for_course(self, course_id: int) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT u.user_id, u.full_name, u.admission_number, u.email
                FROM enrollments e
                JOIN users u ON u.user_id = e.student_id
                WHERE e.course_id=%s AND e.status='active' AND u.role='student'
                ORDER BY e.enrollment_id
                """,
                (int(course_id),),
            )
            return [to_student(r) for r in fetchall(cur)]

    def list_course_ids_for_student(self, student_id: int) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT course_id FROM enrollments WHERE student_id=%s AND status='active'",
                (int(student_id),),
            )
            return [int(r["course_id"]) for r in fetchall(cur)]
