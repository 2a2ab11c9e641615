from __future__ import annotations

import logging
from typing import Iterable, Sequence

from ..academics.model import Student
from .model import AttendanceEntry, AttendanceRecord, DefaultEntry, ReconciledAttendanceView, RecordedEntry

logger = logging.getLogger(__name__)


def reconcile(
    roster: Sequence[Student],
    existing_records: Iterable[AttendanceRecord],
    session_id: int,
) -> ReconciledAttendanceView:
    """Merge the roster with the session's sparse records.

    - Records of other sessions and of students not on the roster are ignored.
    - If the roster repeats a student id, only the first occurrence is kept.
    - If the records repeat a student id, the last one wins.
    """

    by_student: dict[int, AttendanceRecord] = {
        r.student_id: r for r in existing_records if r.session_id == session_id
    }

    seen: set[int] = set()
    entries: list[AttendanceEntry] = []
    for student in roster:
        if student.student_id in seen:
            logger.warning("Duplicate student %s in roster for session %s", student.student_id, session_id)
            continue
        seen.add(student.student_id)

        record = by_student.get(student.student_id)
        if record is None:
            entries.append(DefaultEntry(student=student))
        else:
            entries.append(RecordedEntry(student=student, record=record))

    return ReconciledAttendanceView(session_id=session_id, entries=tuple(entries))
