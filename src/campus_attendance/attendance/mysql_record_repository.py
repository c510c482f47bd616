from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, SessionStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_placeholders, normalize_mysql_time
from .model import (
    AttendanceRecord,
    AttendanceSession,
    RecordMark,
    SessionExportRow,
    StudentRecordRow,
    SubjectStatusRow,
)
from .repository import RecordRepository

_RECORD_COLUMNS = "r.record_id, r.session_id, r.student_id, r.status, r.marked_at, r.notes"


def row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        session_id=int(r["session_id"]),
        student_id=int(r["student_id"]),
        status=AttendanceStatus(r["status"]),
        marked_at=r.get("marked_at"),
        notes=r.get("notes"),
    )


class MySQLRecordRepository(RecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_records(
        self,
        *,
        session_id: Optional[int] = None,
        student_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses: list[str] = []
        params: list[object] = []
        if session_id is not None:
            clauses.append("r.session_id=%s")
            params.append(int(session_id))
        if student_id is not None:
            clauses.append("r.student_id=%s")
            params.append(int(student_id))
        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_RECORD_COLUMNS} FROM attendance_records r{where} ORDER BY r.marked_at DESC",
                tuple(params),
            )
            return [row_to_record(r) for r in fetchall(cur)]

    def list_for_student(
        self,
        *,
        student_id: int,
        subject_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[StudentRecordRow]:
        clauses = ["r.student_id=%s"]
        params: list[object] = [int(student_id)]

        if subject_id is not None:
            clauses.append("s.subject_id=%s")
            params.append(int(subject_id))
        if start_date is not None:
            clauses.append("s.session_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("s.session_date <= %s")
            params.append(end_date)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS},
                       s.subject_id, s.teacher_id, s.session_date, s.start_time, s.end_time, s.room,
                       s.status AS session_status,
                       sub.code AS subject_code, sub.name AS subject_name, sub.semester AS subject_semester
                FROM attendance_records r
                JOIN attendance_sessions s ON s.session_id = r.session_id
                LEFT JOIN subjects sub ON sub.subject_id = s.subject_id
                WHERE {where}
                ORDER BY s.session_date DESC
                """,
                tuple(params),
            )
            out: list[StudentRecordRow] = []
            for r in fetchall(cur):
                session = AttendanceSession(
                    session_id=int(r["session_id"]),
                    subject_id=int(r["subject_id"]),
                    teacher_id=r.get("teacher_id"),
                    session_date=r["session_date"],
                    start_time=normalize_mysql_time(r.get("start_time")),
                    end_time=normalize_mysql_time(r.get("end_time")),
                    room=r.get("room"),
                    status=SessionStatus(r["session_status"]),
                    subject_code=r.get("subject_code"),
                    subject_name=r.get("subject_name"),
                )
                out.append(
                    StudentRecordRow(
                        record=row_to_record(r),
                        session=session,
                        subject_semester=r.get("subject_semester"),
                    )
                )
            return out

    def list_for_student_in_sessions(self, *, student_id: int, session_ids: Sequence[int]) -> Sequence[AttendanceRecord]:
        if not session_ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records r
                WHERE r.student_id=%s AND r.session_id IN ({in_placeholders(session_ids)})
                """,
                (int(student_id), *[int(s) for s in session_ids]),
            )
            return [row_to_record(r) for r in fetchall(cur)]

    def list_statuses_for_students(self, *, student_ids: Sequence[int]) -> Sequence[AttendanceRecord]:
        if not student_ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records r
                WHERE r.student_id IN ({in_placeholders(student_ids)})
                """,
                tuple(int(s) for s in student_ids),
            )
            return [row_to_record(r) for r in fetchall(cur)]

    def list_subject_statuses(
        self,
        *,
        student_ids: Sequence[int],
        subject_ids: Sequence[int],
    ) -> Sequence[SubjectStatusRow]:
        if not student_ids or not subject_ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT r.student_id, s.subject_id, r.status
                FROM attendance_records r
                JOIN attendance_sessions s ON s.session_id = r.session_id
                WHERE r.student_id IN ({in_placeholders(student_ids)})
                  AND s.subject_id IN ({in_placeholders(subject_ids)})
                """,
                (*[int(s) for s in student_ids], *[int(s) for s in subject_ids]),
            )
            return [
                SubjectStatusRow(
                    student_id=int(r["student_id"]),
                    subject_id=int(r["subject_id"]),
                    status=AttendanceStatus(r["status"]),
                )
                for r in fetchall(cur)
            ]

    def upsert_many(self, *, session_id: int, marks: Sequence[RecordMark], marked_at: datetime) -> Sequence[AttendanceRecord]:
        if not marks:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO attendance_records(session_id, student_id, status, marked_at, notes)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE status=VALUES(status), marked_at=VALUES(marked_at), notes=VALUES(notes)
                """,
                [(int(session_id), int(m.student_id), m.status.value, marked_at, m.notes) for m in marks],
            )

            student_ids = [int(m.student_id) for m in marks]
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records r
                WHERE r.session_id=%s AND r.student_id IN ({in_placeholders(student_ids)})
                """,
                (int(session_id), *student_ids),
            )
            return [row_to_record(r) for r in fetchall(cur)]

    def update_status(
        self,
        *,
        record_id: int,
        session_id: int,
        status: AttendanceStatus,
        marked_at: datetime,
    ) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET status=%s, marked_at=%s
                WHERE record_id=%s AND session_id=%s
                """,
                (status.value, marked_at, int(record_id), int(session_id)),
            )
            cur.execute(
                f"SELECT {_RECORD_COLUMNS} FROM attendance_records r WHERE r.record_id=%s AND r.session_id=%s",
                (int(record_id), int(session_id)),
            )
            r = fetchone(cur)
            return row_to_record(r) if r else None

    def export_rows(self, *, session_id: int) -> Sequence[SessionExportRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT st.roll_number, u.full_name, u.email, r.status, r.marked_at
                FROM attendance_records r
                JOIN students st ON st.student_id = r.student_id
                LEFT JOIN users u ON u.user_id = st.user_id
                WHERE r.session_id=%s
                ORDER BY st.roll_number
                """,
                (int(session_id),),
            )
            return [
                SessionExportRow(
                    roll_number=r.get("roll_number") or "",
                    full_name=r.get("full_name") or "",
                    email=r.get("email") or "",
                    status=AttendanceStatus(r["status"]),
                    marked_at=r.get("marked_at"),
                )
                for r in fetchall(cur)
            ]
