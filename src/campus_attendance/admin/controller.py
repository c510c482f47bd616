from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guard import require_roles
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/stats", methods=["GET"], endpoint="api_admin_stats")
    @require_roles(Role.ADMIN)
    def api_admin_stats():
        return jsonify({"stats": container.admin_stats_service.overview().to_dict()})
