from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..auth.guard import current_context, login_required, login_user, logout_user, require_roles
from ..common.http import json_body, require_fields, uploaded_text
from ..common.validators import optional_int, require_enum
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    # ===== AUTH =====

    @app.route("/api/auth/login", methods=["POST"], endpoint="api_login")
    def api_login():
        data = json_body()
        s_user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        login_user(user_id=s_user.user_id, role=s_user.role, name=s_user.full_name)
        session.permanent = bool(data.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=7)

        return jsonify(
            {
                "success": True,
                "user": {"id": s_user.user_id, "full_name": s_user.full_name, "role": s_user.role.value},
            }
        )

    @app.route("/api/auth/logout", methods=["POST"], endpoint="api_logout")
    def api_logout():
        logout_user()
        return jsonify({"success": True})

    @app.route("/api/auth/profile", methods=["GET"], endpoint="api_profile")
    @login_required
    def api_profile():
        return jsonify(container.auth_service.get_profile(current_context().user_id))

    # ===== USERS =====

    @app.route("/api/users", methods=["GET"], endpoint="api_users_list")
    @require_roles(Role.ADMIN)
    def api_users_list():
        role_s = request.args.get("role")
        role = require_enum(role_s, Role, "role") if role_s else None
        users = container.user_service.list_users(role=role)
        return jsonify({"users": [u.to_dict() for u in users]})

    @app.route("/api/users", methods=["POST"], endpoint="api_users_create")
    @require_roles(Role.ADMIN)
    def api_users_create():
        data = json_body()
        require_fields(
            data,
            ("email", "password", "full_name", "role"),
            "Email, password, full_name, and role are required",
        )
        user_id = container.user_service.create_account(
            email=data.get("email"),
            full_name=data.get("full_name"),
            password=data.get("password"),
            role=require_enum(data.get("role"), Role, "role"),
        )
        return jsonify({"success": True, "id": user_id}), 201

    # ===== STUDENTS / TEACHERS =====

    @app.route("/api/students", methods=["GET"], endpoint="api_students_list")
    @require_roles(Role.ADMIN, Role.ADVISOR, Role.TEACHER)
    def api_students_list():
        students = container.student_service.list_students(
            semester=optional_int(request.args.get("semester"), "semester"),
            dept_id=optional_int(request.args.get("department_id"), "department_id"),
            section=request.args.get("section") or None,
        )
        return jsonify({"students": [s.to_dict() for s in students]})

    @app.route("/api/students", methods=["POST"], endpoint="api_students_create")
    @require_roles(Role.ADMIN)
    def api_students_create():
        data = json_body()
        student_id = container.student_service.register(
            email=data.get("email"),
            full_name=data.get("full_name"),
            roll_number=data.get("roll_number"),
            password=data.get("password"),
            dept_id=optional_int(data.get("department_id"), "department_id"),
            semester=optional_int(data.get("semester"), "semester"),
            section=data.get("section"),
            batch=data.get("batch"),
        )
        return jsonify({"success": True, "id": student_id}), 201

    @app.route("/api/students/import", methods=["POST"], endpoint="api_students_import")
    @require_roles(Role.ADMIN)
    def api_students_import():
        result = container.student_service.import_csv(uploaded_text())
        body = {"success": True, "created": result.count}
        if result.errors:
            body["errors"] = result.errors
        return jsonify(body)

    @app.route("/api/teachers", methods=["GET"], endpoint="api_teachers_list")
    @require_roles(Role.ADMIN, Role.ADVISOR)
    def api_teachers_list():
        return jsonify({"teachers": [t.to_dict() for t in container.student_service.list_teachers()]})
