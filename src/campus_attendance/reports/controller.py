from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request

from ..auth.guard import require_roles
from ..common.validators import optional_int
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import NotFoundError
from .model import AttendanceCell, CompiledReport


def _percent(cell: AttendanceCell) -> str:
    return f"{cell.percentage}%" if cell.percentage is not None else "-"


def _compiled_csv(report: CompiledReport) -> bytes:
    out = io.StringIO()
    writer = csv.writer(out)
    writer.writerow(["Roll Number", "Name", "Section", "Batch", *[s.code for s in report.subjects], "Overall %"])
    for row in report.rows:
        writer.writerow(
            [
                row.roll_number,
                row.name,
                row.section or "",
                row.batch or "",
                *[_percent(row.cells[s.subject_id]) for s in report.subjects],
                _percent(row.overall),
            ]
        )
    return out.getvalue().encode("utf-8-sig")


def register(app: Flask, container: Container) -> None:
    def _compiled_from_args() -> CompiledReport:
        return container.compiled_report_service.build(
            semester=optional_int(request.args.get("semester"), "semester"),
            dept_id=optional_int(request.args.get("department_id"), "department_id"),
            section=request.args.get("section") or None,
        )

    @app.route("/api/reports/defaulters", methods=["GET"], endpoint="api_reports_defaulters")
    @require_roles(Role.ADMIN, Role.ADVISOR)
    def api_reports_defaulters():
        report = container.defaulter_report_service.build(
            threshold=optional_int(request.args.get("threshold"), "threshold"),
            semester=optional_int(request.args.get("semester"), "semester"),
            dept_id=optional_int(request.args.get("department_id"), "department_id"),
            section=request.args.get("section") or None,
        )
        return jsonify(report.to_dict())

    @app.route("/api/reports/compiled", methods=["GET"], endpoint="api_reports_compiled")
    @require_roles(Role.ADMIN, Role.ADVISOR)
    def api_reports_compiled():
        return jsonify(_compiled_from_args().to_dict())

    @app.route("/api/reports/compiled/export", methods=["GET"], endpoint="api_reports_compiled_export")
    @require_roles(Role.ADMIN, Role.ADVISOR)
    def api_reports_compiled_export():
        report = _compiled_from_args()
        if report.is_empty:
            raise NotFoundError("No data found")

        filename = f"compiled_attendance_sem{report.semester}_{report.generated_on.isoformat()}.csv"
        return app.response_class(
            _compiled_csv(report),
            mimetype="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.route("/api/advisor/risks", methods=["GET"], endpoint="api_advisor_risks")
    @require_roles(Role.ADMIN, Role.ADVISOR)
    def api_advisor_risks():
        report = container.defaulter_report_service.at_risk(
            threshold=optional_int(request.args.get("threshold"), "threshold"),
        )
        return jsonify(report.to_dict())
