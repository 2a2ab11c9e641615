from __future__ import annotations

from flask import Flask, jsonify

from ..common.auth import roles_required
from ..common.responses import error_response, unexpected_error_response
from ..core.constants import STAFF_ROLES
from ..core.exceptions import DomainError
from ..container import Container


def student_json(student) -> dict:
    return {
        "id": student.student_id,
        "fullName": student.full_name,
        "studentId": student.admission_number,
        "email": student.email,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/courses/<int:course_id>/roster", methods=["GET"], endpoint="course_roster")
    @roles_required(*STAFF_ROLES)
    def course_roster(course_id: int):
        try:
            roster = container.roster_service.resolve_roster(course_id)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error_response("Failed to fetch roster")
        return jsonify([student_json(s) for s in roster])
