from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import faculty_required, student_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/faculty/courses", methods=["GET"], endpoint="faculty_courses")
    @faculty_required
    def faculty_courses(principal):
        return jsonify(container.academic_service.courses_for_faculty(faculty_id=principal.faculty_id))

    @app.route("/api/faculty/courses/<int:course_id>", methods=["GET"], endpoint="faculty_course")
    @faculty_required
    def faculty_course(principal, course_id: int):
        return jsonify(
            container.academic_service.course_for_faculty(faculty_id=principal.faculty_id, course_id=course_id)
        )

    @app.route("/api/faculty/students", methods=["GET"], endpoint="faculty_students")
    @faculty_required
    def faculty_students(principal):
        return jsonify(container.academic_service.students_for_faculty(faculty_id=principal.faculty_id))

    @app.route("/api/student/courses", methods=["GET"], endpoint="student_courses")
    @student_required
    def student_courses(principal):
        return jsonify(container.academic_service.courses_for_student(student_id=principal.student_id))
