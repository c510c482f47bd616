from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guard import require_roles
from ..common.http import json_body, require_fields
from ..common.validators import require_int
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    def _parse_retain_ids(value) -> list[int]:
        if value is None:
            return []
        if not isinstance(value, list):
            raise ValidationError("retain_ids must be a list of student ids")
        return [require_int(v, "retain_ids") for v in value]

    @app.route("/api/students/promote", methods=["POST"], endpoint="api_students_promote")
    @require_roles(Role.ADMIN)
    def api_students_promote():
        data = json_body()
        require_fields(data, ("from_semester", "to_semester"), "from_semester and to_semester are required")

        result = container.promotion_service.promote(
            from_semester=require_int(data.get("from_semester"), "from_semester"),
            to_semester=require_int(data.get("to_semester"), "to_semester"),
            retain_ids=_parse_retain_ids(data.get("retain_ids")),
        )
        return jsonify(result.to_dict())
