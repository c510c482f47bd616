from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Teacher
from .repository import TeacherRepository

_SELECT = """
    SELECT t.teacher_id, t.user_id, t.employee_id, t.dept_id, u.full_name
    FROM teachers t
    LEFT JOIN users u ON u.user_id = t.user_id
"""


def row_to_teacher(r: dict) -> Teacher:
    return Teacher(
        teacher_id=int(r["teacher_id"]),
        user_id=int(r["user_id"]),
        employee_id=r.get("employee_id"),
        dept_id=r.get("dept_id"),
        full_name=r.get("full_name"),
    )


class MySQLTeacherRepository(TeacherRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_user_id(self, user_id: int) -> Optional[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE t.user_id=%s", (int(user_id),))
            r = fetchone(cur)
            return row_to_teacher(r) if r else None

    def list_teachers(self) -> Sequence[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY u.full_name")
            return [row_to_teacher(r) for r in fetchall(cur)]
