from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guard import login_required, require_roles
from ..common.http import json_body, require_fields, uploaded_text
from ..common.validators import optional_int
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    subjects = container.subject_service
    allocations = container.allocation_service

    # ===== SUBJECTS =====

    @app.route("/api/subjects", methods=["GET"], endpoint="api_subjects_list")
    @login_required
    def api_subjects_list():
        items = subjects.list_subjects(
            dept_id=optional_int(request.args.get("department_id"), "department_id"),
            semester=optional_int(request.args.get("semester"), "semester"),
        )
        return jsonify({"subjects": [s.to_dict() for s in items]})

    @app.route("/api/subjects", methods=["POST"], endpoint="api_subjects_create")
    @require_roles(Role.ADMIN)
    def api_subjects_create():
        data = json_body()
        require_fields(data, ("code", "name"), "Subject code and name are required")
        subject = subjects.create(
            code=data.get("code"),
            name=data.get("name"),
            dept_id=optional_int(data.get("department_id"), "department_id"),
            semester=optional_int(data.get("semester"), "semester"),
            credits=optional_int(data.get("credits"), "credits"),
        )
        return jsonify({"subject": subject.to_dict()}), 201

    @app.route("/api/subjects/<int:subject_id>", methods=["GET"], endpoint="api_subjects_get")
    @login_required
    def api_subjects_get(subject_id: int):
        return jsonify({"subject": subjects.get(subject_id).to_dict()})

    @app.route("/api/subjects/<int:subject_id>", methods=["PATCH"], endpoint="api_subjects_update")
    @require_roles(Role.ADMIN)
    def api_subjects_update(subject_id: int):
        data = json_body()
        changes = {}
        if "code" in data:
            changes["code"] = data["code"]
        if "name" in data:
            changes["name"] = data["name"]
        if "department_id" in data:
            changes["dept_id"] = optional_int(data["department_id"], "department_id")
        if "semester" in data:
            changes["semester"] = optional_int(data["semester"], "semester")
        if "credits" in data:
            changes["credits"] = optional_int(data["credits"], "credits")
        return jsonify({"subject": subjects.update(subject_id, changes).to_dict()})

    @app.route("/api/subjects/import", methods=["POST"], endpoint="api_subjects_import")
    @require_roles(Role.ADMIN)
    def api_subjects_import():
        result = subjects.import_csv(uploaded_text())
        body = {"success": True, "imported": result.count}
        if result.errors:
            body["errors"] = result.errors
        return jsonify(body)

    @app.route("/api/subjects/<int:subject_id>", methods=["DELETE"], endpoint="api_subjects_delete")
    @require_roles(Role.ADMIN)
    def api_subjects_delete(subject_id: int):
        subjects.delete(subject_id)
        return jsonify({"success": True})

    # ===== ALLOCATIONS =====

    @app.route("/api/allocations", methods=["GET"], endpoint="api_allocations_list")
    @require_roles(Role.ADMIN, Role.ADVISOR, Role.TEACHER)
    def api_allocations_list():
        items = allocations.list_allocations(
            academic_year=request.args.get("academic_year") or None,
            teacher_id=optional_int(request.args.get("teacher_id"), "teacher_id"),
        )
        return jsonify({"allocations": [a.to_dict() for a in items]})

    @app.route("/api/allocations", methods=["POST"], endpoint="api_allocations_create")
    @require_roles(Role.ADMIN)
    def api_allocations_create():
        data = json_body()
        require_fields(
            data,
            ("teacher_id", "subject_id", "section", "academic_year"),
            "Teacher, Subject, Section, and Academic Year are required",
        )
        allocation_id = allocations.create(
            teacher_id=data.get("teacher_id"),
            subject_id=data.get("subject_id"),
            section=data.get("section"),
            academic_year=data.get("academic_year"),
            batch=data.get("batch"),
        )
        return jsonify({"success": True, "id": allocation_id}), 201

    @app.route("/api/allocations/<int:allocation_id>", methods=["DELETE"], endpoint="api_allocations_delete")
    @require_roles(Role.ADMIN)
    def api_allocations_delete(allocation_id: int):
        allocations.delete(allocation_id)
        return jsonify({"success": True})
