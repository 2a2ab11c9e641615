from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, Optional, Union

from ..academics.model import Student
from ..core.constants import NO_RECORD_ID


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's outcome for one session.

    At most one record exists per (session_id, student_id).
    """

    attendance_id: int
    session_id: int
    student_id: int
    is_present: bool
    marked_by_self: bool
    marked_by_teacher: bool
    marked_at: datetime
    updated_by: Optional[int] = None


@dataclass(frozen=True)
class RecordedEntry:
    """Roster entry backed by a stored record."""

    student: Student
    record: AttendanceRecord

    @property
    def record_id(self) -> str:
        return str(self.record.attendance_id)

    @property
    def is_present(self) -> bool:
        return self.record.is_present

    @property
    def marked_by_self(self) -> bool:
        return self.record.marked_by_self

    @property
    def marked_by_teacher(self) -> bool:
        return self.record.marked_by_teacher

    @property
    def marked_at(self) -> Optional[datetime]:
        return self.record.marked_at


@dataclass(frozen=True)
class DefaultEntry:
    """Roster entry for a student with no record yet: absent, unmarked."""

    student: Student
    record_id: str = NO_RECORD_ID
    is_present: bool = False
    marked_by_self: bool = False
    marked_by_teacher: bool = False
    marked_at: Optional[datetime] = None


AttendanceEntry = Union[RecordedEntry, DefaultEntry]


@dataclass(frozen=True)
class ReconciledAttendanceView:
    """Per-session attendance, one entry per enrolled student, in roster order."""

    session_id: int
    entries: tuple[AttendanceEntry, ...]

    def __iter__(self) -> Iterator[AttendanceEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def present_count(self) -> int:
        return sum(1 for e in self.entries if e.is_present)

    def entry_for(self, student_id: int) -> Optional[AttendanceEntry]:
        for e in self.entries:
            if e.student.student_id == student_id:
                return e
        return None
