from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guard import current_context, require_roles
from ..common.http import json_body
from ..common.validators import optional_int
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    service = container.advisor_service

    @app.route("/api/admin/advisors", methods=["GET"], endpoint="api_advisors_list")
    @require_roles(Role.ADMIN)
    def api_advisors_list():
        return jsonify({"advisors": [a.to_dict() for a in service.list_advisors()]})

    @app.route("/api/admin/advisors", methods=["POST"], endpoint="api_advisors_assign")
    @require_roles(Role.ADMIN)
    def api_advisors_assign():
        data = json_body()
        advisor = service.assign(
            user_id=data.get("user_id"),
            dept_id=optional_int(data.get("department_id"), "department_id"),
            semester=optional_int(data.get("semester"), "semester"),
            section=data.get("section"),
            academic_year=data.get("academic_year"),
        )
        return jsonify({"advisor": advisor.to_dict()})

    @app.route("/api/admin/advisors", methods=["DELETE"], endpoint="api_advisors_remove")
    @require_roles(Role.ADMIN)
    def api_advisors_remove():
        advisor_id = optional_int(request.args.get("id"), "id")
        if advisor_id is None:
            raise ValidationError("Missing ID")
        service.remove(advisor_id)
        return jsonify({"success": True})

    @app.route("/api/advisor/students", methods=["GET"], endpoint="api_advisor_students")
    @require_roles(Role.ADMIN, Role.ADVISOR, Role.TEACHER)
    def api_advisor_students():
        students = service.roster_for(current_context())
        return jsonify({"students": [s.to_dict() for s in students]})
