from __future__ import annotations

import io

from flask import Flask, jsonify, send_file

from ..common.auth import login_required, require_self_or_staff, roles_required
from ..common.responses import error_response, unexpected_error_response
from ..core.constants import STAFF_ROLES
from ..core.exceptions import DomainError
from ..container import Container
from .model import ExportedFile, ReportModel, ReportSummary


def summary_json(summary: ReportSummary) -> dict:
    return {
        "total": summary.total,
        "present": summary.present,
        "absent": summary.absent,
        "rate": summary.rate,
    }


def report_json(report: ReportModel) -> dict:
    return {
        "sessionId": report.session_id,
        "unit": {"name": report.unit_name, "code": report.unit_code},
        "course": report.course_name,
        "level": report.level_name,
        "date": report.session_date.isoformat(),
        "startTime": report.start_time.isoformat(),
        "endTime": report.end_time.isoformat(),
        "location": report.location,
        "students": [
            {
                "id": row.student_id,
                "studentId": row.admission_number,
                "fullName": row.full_name,
                "status": row.status,
                "markedAt": row.marked_at.isoformat() if row.marked_at else None,
            }
            for row in report.students
        ],
        "summary": summary_json(report.summary),
    }


def _send(exported: ExportedFile):
    return send_file(
        io.BytesIO(exported.content),
        mimetype=exported.mimetype,
        as_attachment=True,
        download_name=exported.filename,
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/sessions/<int:session_id>/report", methods=["GET"], endpoint="session_report")
    @roles_required(*STAFF_ROLES)
    def session_report(session_id: int):
        try:
            report = container.report_service.build_report(session_id)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error_response("Failed to build report")
        return jsonify(report_json(report))

    @app.route("/api/sessions/<int:session_id>/report.xlsx", methods=["GET"], endpoint="session_report_xlsx")
    @roles_required(*STAFF_ROLES)
    def session_report_xlsx(session_id: int):
        try:
            exported = container.report_service.export_spreadsheet(session_id)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error_response("Failed to generate Excel report")
        return _send(exported)

    @app.route("/api/sessions/<int:session_id>/report.pdf", methods=["GET"], endpoint="session_report_pdf")
    @roles_required(*STAFF_ROLES)
    def session_report_pdf(session_id: int):
        try:
            exported = container.report_service.export_document(session_id)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error_response("Failed to generate PDF report")
        return _send(exported)

    @app.route("/api/students/<int:student_id>/attendance-summary", methods=["GET"], endpoint="student_attendance_summary")
    @login_required
    def student_attendance_summary(student_id: int):
        try:
            require_self_or_staff(student_id)
            summary = container.report_service.student_summary(student_id)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error_response("Failed to fetch attendance summary")
        return jsonify(summary_json(summary))
