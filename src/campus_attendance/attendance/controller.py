from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request

from ..auth.guard import current_context, login_required, require_roles
from ..common.http import json_body, require_fields
from ..common.validators import optional_int, parse_date_param, parse_time_param, require_enum, require_int
from ..container import Container
from ..core.enums import AttendanceStatus, Role, SessionStatus
from ..core.exceptions import ValidationError
from .model import RecordMark

EXPORT_COLUMNS = ["Roll Number", "Name", "Email", "Status", "Marked At"]


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def _write_session_csv(*, rows, filename: str):
        out = io.StringIO()
        writer = csv.writer(out)
        writer.writerow(EXPORT_COLUMNS)
        for row in rows:
            writer.writerow(
                [
                    row.roll_number,
                    row.full_name,
                    row.email,
                    row.status.value,
                    row.marked_at.strftime("%Y-%m-%d %H:%M:%S") if row.marked_at else "",
                ]
            )

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    # ===== STUDENT VIEWS =====

    @app.route("/api/students/<int:student_id>/attendance", methods=["GET"], endpoint="api_student_attendance")
    @login_required
    def api_student_attendance(student_id: int):
        service.ensure_can_view_student(current_context(), student_id)

        rows, stats = service.student_statistics(
            student_id=student_id,
            subject_id=optional_int(request.args.get("subject_id"), "subject_id"),
            start_date=parse_date_param(request.args.get("start_date"), "start_date"),
            end_date=parse_date_param(request.args.get("end_date"), "end_date"),
        )
        return jsonify({"records": [r.to_dict() for r in rows], "statistics": stats.to_dict()})

    @app.route("/api/student/attendance/history", methods=["GET"], endpoint="api_student_attendance_history")
    @login_required
    def api_student_attendance_history():
        require_fields(request.args, ("subject_id", "student_id"), "subject_id and student_id are required")
        subject_id = require_int(request.args.get("subject_id"), "subject_id")
        student_id = require_int(request.args.get("student_id"), "student_id")

        service.ensure_can_view_student(current_context(), student_id)
        history = service.history(subject_id=subject_id, student_id=student_id)
        return jsonify({"history": [h.to_dict() for h in history]})

    @app.route("/api/student/attendance", methods=["GET"], endpoint="api_my_attendance")
    @require_roles(Role.STUDENT)
    def api_my_attendance():
        return jsonify(service.my_summary(user_id=current_context().user_id))

    # ===== SESSIONS =====

    @app.route("/api/attendance/sessions", methods=["GET"], endpoint="api_sessions_list")
    @login_required
    def api_sessions_list():
        status_s = request.args.get("status")
        sessions = service.list_sessions(
            teacher_id=optional_int(request.args.get("teacher_id"), "teacher_id"),
            subject_id=optional_int(request.args.get("subject_id"), "subject_id"),
            session_date=parse_date_param(request.args.get("date"), "date"),
            status=require_enum(status_s, SessionStatus, "status") if status_s else None,
        )
        return jsonify({"sessions": [s.to_dict() for s in sessions]})

    @app.route("/api/attendance/sessions", methods=["POST"], endpoint="api_sessions_create")
    @require_roles(Role.ADMIN, Role.TEACHER)
    def api_sessions_create():
        data = json_body()
        require_fields(data, ("subject_id", "session_date"), "subject_id and session_date are required")

        status_s = data.get("status")
        session = service.create_session(
            subject_id=require_int(data.get("subject_id"), "subject_id"),
            session_date=parse_date_param(data.get("session_date"), "session_date"),
            teacher_id=optional_int(data.get("teacher_id"), "teacher_id"),
            start_time=parse_time_param(data.get("start_time"), "start_time"),
            end_time=parse_time_param(data.get("end_time"), "end_time"),
            room=data.get("room"),
            status=require_enum(status_s, SessionStatus, "status") if status_s else SessionStatus.SCHEDULED,
        )
        return jsonify({"session": session.to_dict()}), 201

    @app.route("/api/attendance/sessions/<int:session_id>", methods=["GET"], endpoint="api_session_detail")
    @login_required
    def api_session_detail(session_id: int):
        return jsonify({"session": service.get_session(session_id).to_dict()})

    @app.route("/api/attendance/sessions/<int:session_id>", methods=["PATCH"], endpoint="api_session_update")
    @require_roles(Role.ADMIN, Role.TEACHER)
    def api_session_update(session_id: int):
        data = json_body()
        status = require_enum(data.get("status"), SessionStatus, "status")
        session = service.update_session_status(session_id=session_id, status=status)
        return jsonify({"session": session.to_dict()})

    # ===== RECORDS =====

    @app.route("/api/attendance/records", methods=["GET"], endpoint="api_records_list")
    @require_roles(Role.ADMIN, Role.TEACHER, Role.ADVISOR)
    def api_records_list():
        records = service.list_records(
            session_id=optional_int(request.args.get("session_id"), "session_id"),
            student_id=optional_int(request.args.get("student_id"), "student_id"),
        )
        return jsonify({"records": [r.to_dict() for r in records]})

    @app.route("/api/attendance/records", methods=["POST"], endpoint="api_records_mark")
    @require_roles(Role.ADMIN, Role.TEACHER)
    def api_records_mark():
        data = json_body()
        require_fields(
            data,
            ("session_id", "student_id", "status"),
            "session_id, student_id, and status are required",
        )
        record = service.mark(
            session_id=require_int(data.get("session_id"), "session_id"),
            student_id=require_int(data.get("student_id"), "student_id"),
            status=require_enum(data.get("status"), AttendanceStatus, "status"),
            notes=data.get("notes"),
        )
        return jsonify({"record": record.to_dict()}), 201

    @app.route("/api/attendance/records", methods=["PUT"], endpoint="api_records_bulk")
    @require_roles(Role.ADMIN, Role.TEACHER)
    def api_records_bulk():
        data = json_body()
        items = data.get("records")
        if not data.get("session_id") or not isinstance(items, list):
            raise ValidationError("session_id and records array are required")

        marks = []
        for item in items:
            if not isinstance(item, dict):
                raise ValidationError("Each record must be an object")
            marks.append(
                RecordMark(
                    student_id=require_int(item.get("student_id"), "student_id"),
                    status=require_enum(item.get("status"), AttendanceStatus, "status"),
                    notes=item.get("notes"),
                )
            )

        saved = service.mark_many(session_id=require_int(data.get("session_id"), "session_id"), marks=marks)
        return jsonify({"records": [r.to_dict() for r in saved]})

    # ===== TEACHER TOOLS =====

    @app.route(
        "/api/teacher/sessions/<int:session_id>/attendance/edit",
        methods=["PATCH"],
        endpoint="api_teacher_edit_record",
    )
    @require_roles(Role.ADMIN, Role.TEACHER)
    def api_teacher_edit_record(session_id: int):
        data = json_body()
        require_fields(data, ("record_id", "status"), "record_id and status are required")
        record = service.edit_record_status(
            session_id=session_id,
            record_id=require_int(data.get("record_id"), "record_id"),
            status=require_enum(data.get("status"), AttendanceStatus, "status"),
        )
        return jsonify({"success": True, "record": record.to_dict()})

    @app.route("/api/teacher/sessions/<int:session_id>/export", methods=["GET"], endpoint="api_teacher_export")
    @require_roles(Role.ADMIN, Role.TEACHER)
    def api_teacher_export(session_id: int):
        session, rows = service.export_session(session_id=session_id)
        filename = f"attendance_{session.subject_code or session.subject_id}_{session.session_date.isoformat()}.csv"
        return _write_session_csv(rows=rows, filename=filename)
