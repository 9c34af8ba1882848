from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import faculty_required, json_body, login_required, student_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/faculty/sessions", methods=["GET"], endpoint="faculty_sessions")
    @faculty_required
    def faculty_sessions(principal):
        sessions = container.session_service.list_for_faculty(faculty_id=principal.faculty_id)
        return jsonify([s.to_dict() for s in sessions])

    @app.route("/api/faculty/sessions", methods=["POST"], endpoint="create_session")
    @faculty_required
    def create_session(principal):
        data = json_body()
        created = container.session_service.create_session(
            faculty_id=principal.faculty_id,
            course_id=data.get("course_id"),
            group_id=data.get("group_id"),
            session_date=data.get("date"),
            start_time=data.get("start_time", ""),
            end_time=data.get("end_time", ""),
            topic=data.get("topic"),
        )
        return jsonify(created.to_dict()), 201

    @app.route("/api/faculty/sessions/<int:session_id>", methods=["GET"], endpoint="faculty_session")
    @faculty_required
    def faculty_session(principal, session_id: int):
        found = container.session_service.get_for_faculty(faculty_id=principal.faculty_id, session_id=session_id)
        return jsonify(found.to_dict())

    @app.route("/api/faculty/sessions/<int:session_id>", methods=["PUT"], endpoint="update_session")
    @faculty_required
    def update_session(principal, session_id: int):
        data = json_body()
        updated = container.session_service.update_session(
            faculty_id=principal.faculty_id,
            session_id=session_id,
            session_date=data.get("date"),
            start_time=data.get("start_time"),
            end_time=data.get("end_time"),
            topic=data.get("topic"),
        )
        return jsonify(updated.to_dict())

    @app.route("/api/faculty/sessions/<int:session_id>", methods=["DELETE"], endpoint="delete_session")
    @faculty_required
    def delete_session(principal, session_id: int):
        removed = container.session_service.delete_session_cascade(
            faculty_id=principal.faculty_id, session_id=session_id
        )
        return jsonify({"deleted": session_id, "attendance_removed": removed})

    @app.route("/api/student/sessions", methods=["GET"], endpoint="student_sessions")
    @student_required
    def student_sessions(principal):
        rows = container.session_service.list_for_student(student_id=principal.student_id)
        return jsonify([{**s.to_dict(), "attendance": view.to_dict()} for s, view in rows])

    @app.route("/api/sessions/<int:session_id>", methods=["GET"], endpoint="session_details")
    @login_required
    def session_details(principal, session_id: int):
        return jsonify(container.report_service.session_details(principal=principal, session_id=session_id))
