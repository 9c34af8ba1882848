from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import faculty_required, json_body, student_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/faculty/sessions/<int:session_id>/attendance", methods=["GET"], endpoint="session_attendance")
    @faculty_required
    def session_attendance(principal, session_id: int):
        rows = container.session_service.session_attendance(faculty_id=principal.faculty_id, session_id=session_id)
        students = {s.student_id: s for s in container.students_repo.list_by_ids(sid for sid, _ in rows)}
        out = []
        for student_id, view in rows:
            student = students.get(student_id)
            out.append(
                {
                    "student_id": student_id,
                    "name": student.name if student else None,
                    "roll_number": student.roll_number if student else None,
                    **view.to_dict(),
                }
            )
        return jsonify(out)

    @app.route("/api/faculty/sessions/<int:session_id>/attendance", methods=["POST"], endpoint="mark_bulk")
    @faculty_required
    def mark_bulk(principal, session_id: int):
        data = json_body()
        result = container.attendance_service.mark_attendance_bulk(
            faculty_id=principal.faculty_id,
            session_id=session_id,
            entries=data.get("attendance_data"),
            now=container.clock(),
        )
        return jsonify(result.to_dict())

    @app.route("/api/faculty/attendance/mark", methods=["POST"], endpoint="mark_single")
    @faculty_required
    def mark_single(principal):
        data = json_body()
        record = container.attendance_service.mark_attendance_single(
            faculty_id=principal.faculty_id,
            session_id=data.get("session_id"),
            student_id=data.get("student_id"),
            status=data.get("status"),
            now=container.clock(),
        )
        return jsonify(record.to_dict())

    @app.route("/api/faculty/attendance/<int:attendance_id>", methods=["GET"], endpoint="attendance_record")
    @faculty_required
    def attendance_record(principal, attendance_id: int):
        record = container.attendance_service.get_record(faculty_id=principal.faculty_id, attendance_id=attendance_id)
        return jsonify(record.to_dict())

    @app.route("/api/faculty/attendance/<int:attendance_id>", methods=["PUT"], endpoint="update_attendance")
    @faculty_required
    def update_attendance(principal, attendance_id: int):
        data = json_body()
        record = container.attendance_service.update_record(
            faculty_id=principal.faculty_id,
            attendance_id=attendance_id,
            status=data.get("status"),
            now=container.clock(),
        )
        return jsonify(record.to_dict())

    @app.route("/api/student/self-mark", methods=["POST"], endpoint="self_mark")
    @student_required
    def self_mark(principal):
        data = json_body()
        record = container.attendance_service.self_mark_attendance(
            student_id=principal.student_id,
            session_id=data.get("session_id"),
            location=data.get("location"),
            now=container.clock(),
        )
        return jsonify(record.to_dict()), 201
