from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guard import login_required, require_roles
from ..common.http import json_body
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    service = container.department_service

    @app.route("/api/departments", methods=["GET"], endpoint="api_departments_list")
    @login_required
    def api_departments_list():
        return jsonify({"departments": [d.to_dict() for d in service.list_all()]})

    @app.route("/api/departments", methods=["POST"], endpoint="api_departments_create")
    @require_roles(Role.ADMIN)
    def api_departments_create():
        data = json_body()
        dept = service.create(code=data.get("code"), name=data.get("name"), description=data.get("description"))
        return jsonify({"department": dept.to_dict()}), 201

    @app.route("/api/departments/<int:dept_id>", methods=["PATCH", "PUT"], endpoint="api_departments_update")
    @require_roles(Role.ADMIN)
    def api_departments_update(dept_id: int):
        data = json_body()
        dept = service.update(
            dept_id=dept_id,
            code=data.get("code"),
            name=data.get("name"),
            description=data.get("description"),
        )
        return jsonify({"department": dept.to_dict()})

    @app.route("/api/departments/<int:dept_id>", methods=["DELETE"], endpoint="api_departments_delete")
    @require_roles(Role.ADMIN)
    def api_departments_delete(dept_id: int):
        service.delete(dept_id)
        return jsonify({"success": True})
