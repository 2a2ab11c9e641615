from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Level:
    """Domain entity: academic level (e.g. Diploma)."""

    level_id: int
    name: str


@dataclass(frozen=True)
class Course:
    """Domain entity: course, belongs to exactly one level."""

    course_id: int
    name: str
    code: str
    level_id: int


@dataclass(frozen=True)
class Unit:
    """Domain entity: unit (subject), belongs to exactly one course."""

    unit_id: int
    name: str
    code: str
    course_id: int
    teacher_id: Optional[int] = None


@dataclass(frozen=True)
class Student:
    """Student identity as seen by attendance.

    admission_number is the external student identifier printed on reports.
    """

    student_id: int
    full_name: str
    admission_number: str
    email: str
