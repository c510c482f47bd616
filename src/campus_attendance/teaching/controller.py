from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guard import current_context, require_roles
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    @app.route("/api/teacher/classes", methods=["GET"], endpoint="api_teacher_classes")
    @require_roles(Role.TEACHER)
    def api_teacher_classes():
        classes = container.teacher_class_service.classes_for(current_context().user_id)
        return jsonify(classes.to_dict())
