from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import current_role, login_required, require_self_or_staff, roles_required
from ..common.datetime_utils import format_duration
from ..common.responses import error_response, unexpected_error_response
from ..core.constants import STAFF_ROLES
from ..core.exceptions import DomainError
from ..container import Container
from .classifier import SessionStatus
from .model import UnitSession


def session_json(s: UnitSession) -> dict:
    return {
        "id": s.session_id,
        "unitId": s.unit_id,
        "startTime": s.start_time.isoformat(),
        "endTime": s.end_time.isoformat(),
        "location": s.display_location,
        "isActive": s.is_active,
    }


def status_json(st: SessionStatus) -> dict:
    data = session_json(st.session)
    data.update(
        {
            "state": st.state.value,
            "timeUntilStart": int(st.time_until_start.total_seconds()),
            "timeRemaining": int(st.time_remaining.total_seconds()),
            "timeUntilStartText": format_duration(st.time_until_start),
            "timeRemainingText": format_duration(st.time_remaining),
        }
    )
    return data


def register(app: Flask, container: Container) -> None:
    @app.route("/api/units/<int:unit_id>/sessions", methods=["GET"], endpoint="unit_sessions")
    @login_required
    def unit_sessions(unit_id: int):
        try:
            statuses = container.session_service.list_for_unit(unit_id)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error_response("Failed to fetch sessions")
        return jsonify([status_json(st) for st in statuses])

    @app.route("/api/sessions/<int:session_id>", methods=["GET"], endpoint="session_detail")
    @login_required
    def session_detail(session_id: int):
        try:
            st = container.session_service.get_status(session_id)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error_response("Failed to fetch session")
        return jsonify(status_json(st))

    @app.route("/api/sessions/<int:session_id>/status", methods=["PATCH"], endpoint="session_set_status")
    @roles_required(*STAFF_ROLES)
    def session_set_status(session_id: int):
        data = request.get_json(silent=True) or {}
        try:
            updated = container.session_service.set_active(
                current_role=current_role(),
                session_id=session_id,
                is_active=data.get("isActive"),
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error_response("Failed to update session status")
        return jsonify({"success": True, "session": session_json(updated)})

    @app.route("/api/students/<int:student_id>/active-sessions", methods=["GET"], endpoint="student_active_sessions")
    @login_required
    def student_active_sessions(student_id: int):
        try:
            require_self_or_staff(student_id)
            statuses = container.session_service.active_sessions_for_student(student_id)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error_response("Failed to fetch active sessions")
        return jsonify([status_json(st) for st in statuses])

    @app.route("/api/teacher/<int:teacher_id>/active-sessions", methods=["GET"], endpoint="teacher_active_sessions")
    @roles_required(*STAFF_ROLES)
    def teacher_active_sessions(teacher_id: int):
        try:
            statuses = container.session_service.active_sessions_for_teacher(teacher_id)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error_response("Failed to fetch active sessions")
        return jsonify([status_json(st) for st in statuses])
