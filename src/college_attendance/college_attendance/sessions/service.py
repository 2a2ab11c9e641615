from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..academics.repository import AcademicRepository
from ..common.datetime_utils import now_local
from ..common.validators import require_bool
from ..core.constants import STAFF_ROLES
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError
from ..enrollments.repository import EnrollmentRepository
from .classifier import SessionStatus, describe
from .model import UnitSession
from .repository import SessionRepository

logger = logging.getLogger(__name__)


class SessionService:
    def __init__(
        self,
        sessions: SessionRepository,
        academics: AcademicRepository,
        enrollments: EnrollmentRepository,
    ):
        self._sessions = sessions
        self._academics = academics
        self._enrollments = enrollments

    def get_session(self, session_id: int) -> UnitSession:
        session = self._sessions.get_by_id(session_id)
        if not session:
            raise NotFoundError(f"Session {session_id} not found")
        return session

    def get_status(self, session_id: int, *, now: Optional[datetime] = None) -> SessionStatus:
        return describe(self.get_session(session_id), now or now_local())

    def list_for_unit(self, unit_id: int, *, now: Optional[datetime] = None) -> list[SessionStatus]:
        if not self._academics.get_unit(unit_id):
            raise NotFoundError(f"Unit {unit_id} not found")

        now = now or now_local()
        return [describe(s, now) for s in self._sessions.list_by_units([unit_id])]

    def set_active(self, *, current_role: Role, session_id: int, is_active) -> UnitSession:
        if current_role not in STAFF_ROLES:
            raise AuthorizationError("You do not have permission")

        is_active = require_bool(is_active, "isActive")
        updated = self._sessions.set_active(session_id, is_active=is_active)
        if not updated:
            raise NotFoundError(f"Session {session_id} not found")

        logger.info("Session %s active flag set to %s", session_id, is_active)
        return updated

    def active_sessions_for_student(self, student_id: int, *, now: Optional[datetime] = None) -> list[SessionStatus]:
        """Sessions the student can mark right now, across all enrolled courses."""

        if not self._academics.get_student(student_id):
            raise NotFoundError(f"Student {student_id} not found")

        course_ids = self._enrollments.list_course_ids_for_student(student_id)
        if not course_ids:
            return []

        units = self._academics.list_units_by_courses(course_ids)
        now = now or now_local()
        statuses = [describe(s, now) for s in self._sessions.list_by_units(u.unit_id for u in units)]
        return [st for st in statuses if st.is_open_for_marking]

    def active_sessions_for_teacher(self, teacher_id: int, *, now: Optional[datetime] = None) -> list[SessionStatus]:
        """Open sessions of every unit the teacher is assigned to."""

        units = self._academics.list_units_by_teacher(teacher_id)
        if not units:
            return []

        now = now or now_local()
        statuses = [describe(s, now) for s in self._sessions.list_by_units(u.unit_id for u in units)]
        return [st for st in statuses if st.is_open_for_marking]
