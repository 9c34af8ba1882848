from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.http import error_response, json_body, login_required
from ..core.enums import Role
from ..core.principal import FacultyPrincipal, principal_to_session
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _login(role: Role):
        data = json_body()
        principal = container.account_service.authenticate(role, data.get("email", ""), data.get("password", ""))
        session.clear()
        session.update(principal_to_session(principal))
        return jsonify(principal_to_session(principal))

    @app.route("/api/auth/faculty/signup", methods=["POST"], endpoint="faculty_signup")
    def faculty_signup():
        data = json_body()
        faculty_id = container.account_service.register_faculty(
            name=data.get("name", ""),
            email=data.get("email", ""),
            employee_id=data.get("employee_id", ""),
            department=data.get("department", ""),
            password=data.get("password", ""),
        )
        return jsonify({"id": faculty_id, "role": Role.FACULTY.value}), 201

    @app.route("/api/auth/student/signup", methods=["POST"], endpoint="student_signup")
    def student_signup():
        data = json_body()
        student_id = container.account_service.register_student(
            name=data.get("name", ""),
            email=data.get("email", ""),
            roll_number=data.get("roll_number", ""),
            password=data.get("password", ""),
        )
        return jsonify({"id": student_id, "role": Role.STUDENT.value}), 201

    @app.route("/api/auth/faculty/login", methods=["POST"], endpoint="faculty_login")
    def faculty_login():
        return _login(Role.FACULTY)

    @app.route("/api/auth/student/login", methods=["POST"], endpoint="student_login")
    def student_login():
        return _login(Role.STUDENT)

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"message": "Logged out"})

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me(principal):
        if isinstance(principal, FacultyPrincipal):
            account = container.faculty_repo.get_by_id(principal.faculty_id)
            if not account:
                return error_response("Account not found", 404)
            return jsonify(
                {
                    "role": Role.FACULTY.value,
                    "id": account.faculty_id,
                    "name": account.name,
                    "email": account.email,
                    "employee_id": account.employee_id,
                    "department": account.department,
                }
            )

        account = container.students_repo.get_by_id(principal.student_id)
        if not account:
            return error_response("Account not found", 404)
        return jsonify(
            {
                "role": Role.STUDENT.value,
                "id": account.student_id,
                "name": account.name,
                "email": account.email,
                "roll_number": account.roll_number,
            }
        )
