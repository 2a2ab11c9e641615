from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, placeholders
from .model import Course, Level, Student, Unit
from .repository import AcademicRepository


def _to_unit(r: dict) -> Unit:
    return Unit(
        unit_id=int(r["unit_id"]),
        name=r["name"],
        code=r["code"],
        course_id=int(r["course_id"]),
        teacher_id=int(r["teacher_id"]) if r.get("teacher_id") is not None else None,
    )


def to_student(r: dict) -> Student:
    return Student(
        student_id=int(r["user_id"]),
        full_name=r["full_name"],
        admission_number=r.get("admission_number") or "",
        email=r.get("email") or "",
    )


class MySQLAcademicRepository(AcademicRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_level(self, level_id: int) -> Optional[Level]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT level_id, name FROM levels WHERE level_id=%s", (int(level_id),))
            r = fetchone(cur)
            if not r:
                return None
            return Level(level_id=int(r["level_id"]), name=r["name"])

    def get_course(self, course_id: int) -> Optional[Course]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT course_id, name, code, level_id FROM courses WHERE course_id=%s",
                (int(course_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Course(
                course_id=int(r["course_id"]),
                name=r["name"],
                code=r["code"],
                level_id=int(r["level_id"]),
            )

    def get_unit(self, unit_id: int) -> Optional[Unit]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT unit_id, name, code, course_id, teacher_id FROM units WHERE unit_id=%s",
                (int(unit_id),),
            )
            r = fetchone(cur)
            return _to_unit(r) if r else None

    def get_student(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, full_name, admission_number, email
                FROM users
                WHERE user_id=%s AND role='student'
                """,
                (int(student_id),),
            )
            r = fetchone(cur)
            return to_student(r) if r else None

    def list_units_by_courses(self, course_ids: Iterable[int]) -> Sequence[Unit]:
        ids = [int(c) for c in course_ids]
        if not ids:
            return []

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT unit_id, name, code, course_id, teacher_id
                FROM units
                WHERE course_id IN ({placeholders(len(ids))})
                ORDER BY unit_id
                """,
                tuple(ids),
            )
            return [_to_unit(r) for r in fetchall(cur)]

    def list_units_by_teacher(self, teacher_id: int) -> Sequence[Unit]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT unit_id, name, code, course_id, teacher_id
                FROM units
                WHERE teacher_id=%s
                ORDER BY unit_id
                """,
                (int(teacher_id),),
            )
            return [_to_unit(r) for r in fetchall(cur)]
