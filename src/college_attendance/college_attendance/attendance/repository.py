from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_for_session(self, session_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_student(self, student_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_session_and_student(self, session_id: int, student_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

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
        """Create or update the single record for (session_id, student_id).

        Concurrent writers for the same pair resolve to last-writer-wins in the store.
        """

        raise NotImplementedError
