from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guard import login_required, require_roles
from ..common.http import json_body, require_fields
from ..common.validators import optional_int, parse_time_param, require_int
from ..container import Container
from ..core.enums import Role
from .model import SlotDraft


def register(app: Flask, container: Container) -> None:
    service = container.timetable_service

    @app.route("/api/timetable", methods=["GET"], endpoint="api_timetable_list")
    @login_required
    def api_timetable_list():
        slots = service.list_slots(
            dept_id=optional_int(request.args.get("department_id"), "department_id"),
            semester=optional_int(request.args.get("semester"), "semester"),
            section=request.args.get("section") or None,
            teacher_id=optional_int(request.args.get("teacher_id"), "teacher_id"),
        )
        return jsonify({"slots": [s.to_dict() for s in slots]})

    @app.route("/api/timetable", methods=["POST"], endpoint="api_timetable_create")
    @require_roles(Role.ADMIN)
    def api_timetable_create():
        data = json_body()
        require_fields(
            data,
            ("subject_id", "day_of_week", "start_time", "end_time"),
            "Subject, Day, Start Time, and End Time are required",
        )
        draft = SlotDraft(
            subject_id=require_int(data.get("subject_id"), "subject_id"),
            day_of_week=require_int(data.get("day_of_week"), "day_of_week"),
            start_time=parse_time_param(data.get("start_time"), "start_time"),
            end_time=parse_time_param(data.get("end_time"), "end_time"),
            teacher_id=optional_int(data.get("teacher_id"), "teacher_id"),
            dept_id=optional_int(data.get("department_id"), "department_id"),
            room=(data.get("room") or "").strip() or None,
            section=(data.get("section") or "").strip() or None,
            semester=optional_int(data.get("semester"), "semester"),
        )
        slot_id = service.create(draft)
        return jsonify({"success": True, "id": slot_id}), 201

    @app.route("/api/timetable/<int:slot_id>", methods=["DELETE"], endpoint="api_timetable_delete")
    @require_roles(Role.ADMIN)
    def api_timetable_delete(slot_id: int):
        service.delete(slot_id)
        return jsonify({"success": True})
