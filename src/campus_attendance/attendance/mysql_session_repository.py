from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..core.enums import SessionStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import AttendanceSession
from .repository import SessionRepository

_SELECT = """
    SELECT s.session_id, s.subject_id, s.teacher_id, s.session_date, s.start_time, s.end_time,
           s.room, s.status, sub.code AS subject_code, sub.name AS subject_name
    FROM attendance_sessions s
    LEFT JOIN subjects sub ON sub.subject_id = s.subject_id
"""


def row_to_session(r: dict) -> AttendanceSession:
    return AttendanceSession(
        session_id=int(r["session_id"]),
        subject_id=int(r["subject_id"]),
        teacher_id=r.get("teacher_id"),
        session_date=r["session_date"],
        start_time=normalize_mysql_time(r.get("start_time")),
        end_time=normalize_mysql_time(r.get("end_time")),
        room=r.get("room"),
        status=SessionStatus(r["status"]),
        subject_code=r.get("subject_code"),
        subject_name=r.get("subject_name"),
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, session_id: int) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE s.session_id=%s", (int(session_id),))
            r = fetchone(cur)
            return row_to_session(r) if r else None

    def list_sessions(
        self,
        *,
        teacher_id: Optional[int] = None,
        subject_id: Optional[int] = None,
        session_date: Optional[date] = None,
        status: Optional[SessionStatus] = None,
    ) -> Sequence[AttendanceSession]:
        clauses: list[str] = []
        params: list[object] = []

        if teacher_id is not None:
            clauses.append("s.teacher_id=%s")
            params.append(int(teacher_id))
        if subject_id is not None:
            clauses.append("s.subject_id=%s")
            params.append(int(subject_id))
        if session_date is not None:
            clauses.append("s.session_date=%s")
            params.append(session_date)
        if status is not None:
            clauses.append("s.status=%s")
            params.append(status.value)

        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + where + " ORDER BY s.session_date DESC, s.start_time DESC",
                tuple(params),
            )
            return [row_to_session(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        subject_id: int,
        session_date: date,
        teacher_id: Optional[int] = None,
        start_time: Optional[time] = None,
        end_time: Optional[time] = None,
        room: Optional[str] = None,
        status: SessionStatus = SessionStatus.SCHEDULED,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_sessions(subject_id, teacher_id, session_date, start_time, end_time, room, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(subject_id), teacher_id, session_date, start_time, end_time, room, status.value),
            )
            return int(cur.lastrowid)

    def update_status(self, *, session_id: int, status: SessionStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_sessions SET status=%s WHERE session_id=%s",
                (status.value, int(session_id)),
            )
            return cur.rowcount > 0
