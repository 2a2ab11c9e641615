from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional

from ..academics.repository import AcademicRepository
from ..common.datetime_utils import now_local
from ..common.validators import require_bool, require_marked_by
from ..core.enums import MarkedBy
from ..core.exceptions import AuthorizationError, DomainError, NotFoundError, ValidationError
from ..enrollments.service import RosterService
from ..sessions.classifier import describe
from ..sessions.model import UnitSession
from ..sessions.repository import SessionRepository
from .model import AttendanceRecord, ReconciledAttendanceView
from .reconciler import reconcile
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BulkMarkFailure:
    student_id: int
    kind: str
    message: str


@dataclass
class BulkMarkResult:
    """Per-student outcome of a bulk mark. Applied writes are never rolled back."""

    succeeded: list[AttendanceRecord] = field(default_factory=list)
    failed: list[BulkMarkFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        sessions: SessionRepository,
        academics: AcademicRepository,
        roster: RosterService,
    ):
        self._attendance = attendance
        self._sessions = sessions
        self._academics = academics
        self._roster = roster

    def _get_session(self, session_id: int) -> UnitSession:
        session = self._sessions.get_by_id(session_id)
        if not session:
            raise NotFoundError(f"Session {session_id} not found")
        return session

    def reconciled_view(self, session_id: int) -> ReconciledAttendanceView:
        """Rebuilt from the store on every call."""
        session = self._get_session(session_id)
        roster = self._roster.roster_for_unit(session.unit_id)
        records = self._attendance.list_for_session(session_id)

        return reconcile(roster, records, session_id)

    def mark_attendance(
        self,
        session_id: int,
        student_id: int,
        is_present,
        marked_by,
        *,
        now: Optional[datetime] = None,
        updated_by: Optional[int] = None,
    ) -> AttendanceRecord:
        is_present = require_bool(is_present, "isPresent")
        marked_by = require_marked_by(marked_by)

        roster_ids = self._roster_ids(self._get_session(session_id))
        return self._apply(
            session_id, student_id, is_present, marked_by, roster_ids=roster_ids, now=now, updated_by=updated_by
        )

    def bulk_mark_all(
        self,
        session_id: int,
        student_ids: Iterable[int],
        is_present,
        marked_by,
        *,
        now: Optional[datetime] = None,
        updated_by: Optional[int] = None,
    ) -> BulkMarkResult:
        """Mark every id; failures are collected per id instead of raised.

        Batch-level problems (bad flag, bad provenance, missing session) still raise.
        """

        is_present = require_bool(is_present, "isPresent")
        marked_by = require_marked_by(marked_by)
        roster_ids = self._roster_ids(self._get_session(session_id))

        now = now or now_local()
        result = BulkMarkResult()
        for student_id in student_ids:
            try:
                record = self._apply(
                    session_id,
                    student_id,
                    is_present,
                    marked_by,
                    roster_ids=roster_ids,
                    now=now,
                    updated_by=updated_by,
                )
            except DomainError as e:
                logger.warning("Bulk mark failed for session %s, student %s: %s", session_id, student_id, e)
                result.failed.append(BulkMarkFailure(student_id=student_id, kind=e.kind, message=str(e)))
            else:
                result.succeeded.append(record)

        logger.info(
            "Bulk marked session %s: %d succeeded, %d failed",
            session_id,
            len(result.succeeded),
            len(result.failed),
        )
        return result

    def self_mark(self, session_id: int, student_id: int, *, now: Optional[datetime] = None) -> AttendanceRecord:
        """Student marks themself present while the session is open."""

        now = now or now_local()
        status = describe(self._get_session(session_id), now)
        if not status.is_open_for_marking:
            raise ValidationError("Cannot mark attendance for inactive session")

        roster_ids = self._roster_ids(status.session)
        if student_id not in roster_ids:
            raise AuthorizationError("You are not enrolled in this unit")

        return self._apply(
            session_id, student_id, True, MarkedBy.SELF, roster_ids=roster_ids, now=now, updated_by=student_id
        )

    def correct_record(
        self,
        attendance_id: int,
        is_present,
        *,
        updated_by: int,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        """Staff correction of an existing record, addressed by its id.

        Written through the same (session, student) upsert as any other mark.
        """

        is_present = require_bool(is_present, "isPresent")
        existing = self._attendance.get_by_id(attendance_id)
        if not existing:
            raise NotFoundError(f"Attendance record {attendance_id} not found")

        roster_ids = self._roster_ids(self._get_session(existing.session_id))
        return self._apply(
            existing.session_id,
            existing.student_id,
            is_present,
            MarkedBy.TEACHER,
            roster_ids=roster_ids,
            now=now,
            updated_by=updated_by,
        )

    def records_for_student(self, student_id: int) -> list[AttendanceRecord]:
        if not self._academics.get_student(student_id):
            raise NotFoundError(f"Student {student_id} not found")
        return list(self._attendance.list_for_student(student_id))

    def _roster_ids(self, session: UnitSession) -> frozenset[int]:
        return frozenset(s.student_id for s in self._roster.roster_for_unit(session.unit_id))

    def _apply(
        self,
        session_id: int,
        student_id: int,
        is_present: bool,
        marked_by: MarkedBy,
        *,
        roster_ids: frozenset[int],
        now: Optional[datetime],
        updated_by: Optional[int],
    ) -> AttendanceRecord:
        if isinstance(student_id, bool) or not isinstance(student_id, int):
            raise ValidationError(f"Invalid student id: {student_id!r}")
        if not self._academics.get_student(student_id):
            raise NotFoundError(f"Student {student_id} not found")
        if student_id not in roster_ids:
            raise ValidationError(f"Student {student_id} is not enrolled in this session's unit")

        # Each write carries exactly one provenance flag; the other is cleared.
        record = self._attendance.upsert(
            session_id=session_id,
            student_id=student_id,
            is_present=is_present,
            marked_by_self=marked_by == MarkedBy.SELF,
            marked_by_teacher=marked_by == MarkedBy.TEACHER,
            marked_at=now or now_local(),
            updated_by=updated_by,
        )

        logger.info(
            "Marked session %s student %s present=%s by %s",
            session_id,
            student_id,
            is_present,
            marked_by.value,
        )
        return record
