from __future__ import annotations

from typing import Protocol, Sequence

from ..academics.model import Student


class EnrollmentRepository(Protocol):
    def list_students_for_course(self, course_id: int) -> Sequence[Student]:
        """Students with an active enrollment in the course, in store order."""

        raise NotImplementedError

    def list_course_ids_for_student(self, student_id: int) -> Sequence[int]:
        raise NotImplementedError
