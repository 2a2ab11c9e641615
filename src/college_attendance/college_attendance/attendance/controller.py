from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import current_role, current_user_id, login_required, require_self_or_staff, roles_required
from ..common.responses import error_response, unexpected_error_response
from ..common.validators import require_id
from ..core.constants import STAFF_ROLES
from ..core.enums import MarkedBy, Role
from ..core.exceptions import DomainError, ValidationError
from ..container import Container
from ..enrollments.controller import student_json
from .model import AttendanceEntry, AttendanceRecord, ReconciledAttendanceView


def _iso(value):
    return value.isoformat() if value else None


def record_json(r: AttendanceRecord) -> dict:
    return {
        "id": str(r.attendance_id),
        "sessionId": r.session_id,
        "studentId": r.student_id,
        "isPresent": r.is_present,
        "markedBySelf": r.marked_by_self,
        "markedByTeacher": r.marked_by_teacher,
        "markedAt": _iso(r.marked_at),
    }


def entry_json(e: AttendanceEntry) -> dict:
    return {
        "id": e.record_id,
        "student": student_json(e.student),
        "isPresent": e.is_present,
        "markedBySelf": e.marked_by_self,
        "markedByTeacher": e.marked_by_teacher,
        "markedAt": _iso(e.marked_at),
    }


def view_json(view: ReconciledAttendanceView) -> dict:
    return {
        "sessionId": view.session_id,
        "total": len(view),
        "present": view.present_count,
        "students": [entry_json(e) for e in view],
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/sessions/<int:session_id>/attendance", methods=["GET"], endpoint="session_attendance")
    @roles_required(*STAFF_ROLES)
    def session_attendance(session_id: int):
        try:
            view = container.attendance_service.reconciled_view(session_id)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error_response("Failed to fetch attendance")
        return jsonify(view_json(view))

    @app.route("/api/attendance", methods=["POST"], endpoint="mark_attendance")
    @login_required
    def mark_attendance():
        data = request.get_json(silent=True) or {}
        try:
            session_id = require_id(data.get("sessionId"), "sessionId")
            if current_role() == Role.STUDENT:
                # Students can only mark themselves present.
                record = container.attendance_service.self_mark(session_id, current_user_id())
            else:
                record = container.attendance_service.mark_attendance(
                    session_id,
                    require_id(data.get("studentId"), "studentId"),
                    data.get("isPresent"),
                    data.get("markedBy", MarkedBy.TEACHER.value),
                    updated_by=current_user_id(),
                )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error_response("Failed to mark attendance")
        return jsonify({"success": True, "record": record_json(record)})

    @app.route("/api/attendance/<int:attendance_id>", methods=["PATCH"], endpoint="correct_attendance")
    @roles_required(*STAFF_ROLES)
    def correct_attendance(attendance_id: int):
        data = request.get_json(silent=True) or {}
        try:
            record = container.attendance_service.correct_record(
                attendance_id,
                data.get("isPresent"),
                updated_by=current_user_id(),
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error_response("Failed to update attendance")
        return jsonify({"success": True, "record": record_json(record)})

    @app.route("/api/attendance/bulk", methods=["POST"], endpoint="bulk_mark_attendance")
    @roles_required(*STAFF_ROLES)
    def bulk_mark_attendance():
        data = request.get_json(silent=True) or {}
        try:
            session_id = require_id(data.get("sessionId"), "sessionId")
            student_ids = data.get("studentIds")
            if not isinstance(student_ids, list):
                raise ValidationError("studentIds must be a list")
            result = container.attendance_service.bulk_mark_all(
                session_id,
                student_ids,
                data.get("isPresent"),
                data.get("markedBy", MarkedBy.TEACHER.value),
                updated_by=current_user_id(),
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error_response("Failed to mark attendance")

        return jsonify(
            {
                "success": result.ok,
                "succeeded": [record_json(r) for r in result.succeeded],
                "failed": [
                    {"studentId": f.student_id, "kind": f.kind, "message": f.message} for f in result.failed
                ],
            }
        )

    @app.route("/api/students/<int:student_id>/attendance", methods=["GET"], endpoint="student_attendance")
    @login_required
    def student_attendance(student_id: int):
        try:
            require_self_or_staff(student_id)
            records = container.attendance_service.records_for_student(student_id)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error_response("Failed to fetch attendance history")
        return jsonify([record_json(r) for r in records])
