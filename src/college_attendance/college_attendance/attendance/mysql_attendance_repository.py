from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, session_id, student_id, is_present, marked_by_self, marked_by_teacher, marked_at, updated_by"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        session_id=int(r["session_id"]),
        student_id=int(r["student_id"]),
        is_present=as_bool(r["is_present"]),
        marked_by_self=as_bool(r["marked_by_self"]),
        marked_by_teacher=as_bool(r["marked_by_teacher"]),
        marked_at=r["marked_at"],
        updated_by=int(r["updated_by"]) if r.get("updated_by") is not None else None,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_session(self, session_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance WHERE session_id=%s", (int(session_id),))
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_student(self, student_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE student_id=%s ORDER BY marked_at DESC",
                (int(student_id),),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance WHERE attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_session_and_student(self, session_id: int, student_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE session_id=%s AND student_id=%s",
                (int(session_id), int(student_id)),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def upsert(
        self,
        *,
        session_id: int,
        student_id: int,
        is_present: bool,
        marked_by_self: bool,
        marked_by_teacher: bool,
        marked_at: datetime,
        updated_by: Optional[int] = None,
    ) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            # Relies on uq_attendance_session_student.
            cur.execute(
                """
                INSERT INTO attendance
                    (session_id, student_id, is_present, marked_by_self, marked_by_teacher, marked_at, updated_by)
                VALUES (%s, %s, %s, %s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE
                    is_present=VALUES(is_present),
                    marked_by_self=VALUES(marked_by_self),
                    marked_by_teacher=VALUES(marked_by_teacher),
                    marked_at=VALUES(marked_at),
                    updated_by=VALUES(updated_by)
                """,
                (
                    int(session_id),
                    int(student_id),
                    int(is_present),
                    int(marked_by_self),
                    int(marked_by_teacher),
                    marked_at,
                    updated_by,
                ),
            )
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE session_id=%s AND student_id=%s",
                (int(session_id), int(student_id)),
            )
            rows = fetchall(cur)
            if len(rows) != 1:
                raise ConflictError(
                    f"Expected one attendance record for session {session_id}, student {student_id}, found {len(rows)}"
                )
            return _to_record(rows[0])
