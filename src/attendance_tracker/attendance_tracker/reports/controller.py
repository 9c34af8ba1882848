from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import faculty_required, student_required
from ..common.validators import require_positive_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _group_arg():
        raw = request.args.get("group_id")
        return require_positive_int(raw, "group_id") if raw else None

    @app.route("/api/faculty/dashboard", methods=["GET"], endpoint="faculty_dashboard")
    @faculty_required
    def faculty_dashboard(principal):
        return jsonify(
            container.dashboard_service.faculty_dashboard(faculty_id=principal.faculty_id, now=container.clock())
        )

    @app.route("/api/student/dashboard", methods=["GET"], endpoint="student_dashboard")
    @student_required
    def student_dashboard(principal):
        return jsonify(
            container.dashboard_service.student_dashboard(student_id=principal.student_id, now=container.clock())
        )

    @app.route("/api/reports/course/<int:course_id>", methods=["GET"], endpoint="course_report")
    @faculty_required
    def course_report(principal, course_id: int):
        report = container.report_service.course_report(
            faculty_id=principal.faculty_id, course_id=course_id, group_id=_group_arg()
        )
        return jsonify(report.to_dict())

    @app.route("/api/reports/course/<int:course_id>.csv", methods=["GET"], endpoint="course_report_csv")
    @faculty_required
    def course_report_csv(principal, course_id: int):
        filename, text = container.report_service.course_report_csv(
            faculty_id=principal.faculty_id, course_id=course_id, group_id=_group_arg()
        )
        return app.response_class(
            text.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/reports/student/<int:student_id>", methods=["GET"], endpoint="student_report")
    @faculty_required
    def student_report(principal, student_id: int):
        return jsonify(container.report_service.student_report(faculty_id=principal.faculty_id, student_id=student_id))

    @app.route("/api/reports/session/<int:session_id>", methods=["GET"], endpoint="session_report")
    @faculty_required
    def session_report(principal, session_id: int):
        return jsonify(container.report_service.session_report(faculty_id=principal.faculty_id, session_id=session_id))

    @app.route("/api/student/attendance", methods=["GET"], endpoint="my_attendance")
    @student_required
    def my_attendance(principal):
        return jsonify(container.report_service.student_overview(student_id=principal.student_id))

    @app.route("/api/student/attendance/<int:course_id>", methods=["GET"], endpoint="my_course_attendance")
    @student_required
    def my_course_attendance(principal, course_id: int):
        return jsonify(
            container.report_service.student_course_attendance(student_id=principal.student_id, course_id=course_id)
        )
