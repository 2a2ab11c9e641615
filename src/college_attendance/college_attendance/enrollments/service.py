from __future__ import annotations

from ..academics.model import Student
from ..academics.repository import AcademicRepository
from ..core.exceptions import NotFoundError
from .repository import EnrollmentRepository


class RosterService:
    """Use case: resolve the students eligible for attendance in a course."""

    def __init__(self, academics: AcademicRepository, enrollments: EnrollmentRepository):
        self._academics = academics
        self._enrollments = enrollments

    def resolve_roster(self, course_id: int) -> list[Student]:
        if not self._academics.get_course(course_id):
            raise NotFoundError(f"Course {course_id} not found")
        return list(self._enrollments.list_students_for_course(course_id))

    def roster_for_unit(self, unit_id: int) -> list[Student]:
        unit = self._academics.get_unit(unit_id)
        if not unit:
            raise NotFoundError(f"Unit {unit_id} not found")
        return self.resolve_roster(unit.course_id)
