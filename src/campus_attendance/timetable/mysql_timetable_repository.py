from __future__ import annotations

from datetime import time
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_time
from .model import SlotDraft, TimetableSlot
from .repository import TimetableRepository

_SELECT = """
    SELECT ts.slot_id, ts.subject_id, ts.teacher_id, ts.dept_id, ts.day_of_week, ts.start_time, ts.end_time,
           ts.room, ts.section, ts.semester,
           sub.code AS subject_code, sub.name AS subject_name, u.full_name AS teacher_name
    FROM timetable_slots ts
    LEFT JOIN subjects sub ON sub.subject_id = ts.subject_id
    LEFT JOIN teachers t ON t.teacher_id = ts.teacher_id
    LEFT JOIN users u ON u.user_id = t.user_id
"""


def row_to_slot(r: dict) -> TimetableSlot:
    return TimetableSlot(
        slot_id=int(r["slot_id"]),
        subject_id=int(r["subject_id"]),
        teacher_id=r.get("teacher_id"),
        dept_id=r.get("dept_id"),
        day_of_week=int(r["day_of_week"]),
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        room=r.get("room"),
        section=r.get("section"),
        semester=r.get("semester"),
        subject_code=r.get("subject_code"),
        subject_name=r.get("subject_name"),
        teacher_name=r.get("teacher_name"),
    )


class MySQLTimetableRepository(TimetableRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_slots(
        self,
        *,
        dept_id: Optional[int] = None,
        semester: Optional[int] = None,
        section: Optional[str] = None,
        teacher_id: Optional[int] = None,
    ) -> Sequence[TimetableSlot]:
        clauses: list[str] = []
        params: list[object] = []
        if dept_id is not None:
            clauses.append("ts.dept_id=%s")
            params.append(int(dept_id))
        if semester is not None:
            clauses.append("ts.semester=%s")
            params.append(int(semester))
        if section:
            clauses.append("ts.section=%s")
            params.append(section)
        if teacher_id is not None:
            clauses.append("ts.teacher_id=%s")
            params.append(int(teacher_id))
        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + where + " ORDER BY ts.day_of_week, ts.start_time", tuple(params))
            return [row_to_slot(r) for r in fetchall(cur)]

    def list_for_day_overlapping(self, *, day_of_week: int, start_time: time, end_time: time) -> Sequence[TimetableSlot]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE ts.day_of_week=%s AND ts.start_time <= %s AND ts.end_time >= %s",
                (int(day_of_week), end_time, start_time),
            )
            return [row_to_slot(r) for r in fetchall(cur)]

    def create(self, draft: SlotDraft) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO timetable_slots(subject_id, teacher_id, dept_id, day_of_week, start_time, end_time,
                                            room, section, semester)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(draft.subject_id),
                    draft.teacher_id,
                    draft.dept_id,
                    int(draft.day_of_week),
                    draft.start_time,
                    draft.end_time,
                    draft.room,
                    draft.section,
                    draft.semester,
                ),
            )
            return int(cur.lastrowid)

    def delete(self, *, slot_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM timetable_slots WHERE slot_id=%s", (int(slot_id),))
            return cur.rowcount > 0
