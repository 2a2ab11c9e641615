from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import Course, Level, Student, Unit


class AcademicRepository(Protocol):
    """Read access to academic reference data (levels, courses, units, students)."""

    def get_level(self, level_id: int) -> Optional[Level]:
        raise NotImplementedError

    def get_course(self, course_id: int) -> Optional[Course]:
        raise NotImplementedError

    def get_unit(self, unit_id: int) -> Optional[Unit]:
        raise NotImplementedError

    def get_student(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def list_units_by_courses(self, course_ids: Iterable[int]) -> Sequence[Unit]:
        raise NotImplementedError

    def list_units_by_teacher(self, teacher_id: int) -> Sequence[Unit]:
        raise NotImplementedError
