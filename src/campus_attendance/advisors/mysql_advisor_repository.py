from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ClassAdvisor
from .repository import AdvisorRepository

_SELECT = """
    SELECT a.advisor_id, a.user_id, a.dept_id, a.semester, a.section, a.academic_year,
           u.full_name, u.email
    FROM class_advisors a
    LEFT JOIN users u ON u.user_id = a.user_id
"""


def row_to_advisor(r: dict) -> ClassAdvisor:
    return ClassAdvisor(
        advisor_id=int(r["advisor_id"]),
        user_id=int(r["user_id"]),
        dept_id=r.get("dept_id"),
        semester=r.get("semester"),
        section=r.get("section"),
        academic_year=r.get("academic_year"),
        full_name=r.get("full_name"),
        email=r.get("email"),
    )


class MySQLAdvisorRepository(AdvisorRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[ClassAdvisor]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY a.created_at DESC")
            return [row_to_advisor(r) for r in fetchall(cur)]

    def get_by_user_id(self, user_id: int) -> Optional[ClassAdvisor]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE a.user_id=%s", (int(user_id),))
            r = fetchone(cur)
            return row_to_advisor(r) if r else None

    def upsert(
        self,
        *,
        user_id: int,
        dept_id: Optional[int],
        semester: Optional[int],
        section: Optional[str],
        academic_year: Optional[str],
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO class_advisors(user_id, dept_id, semester, section, academic_year)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE dept_id=VALUES(dept_id), semester=VALUES(semester),
                                        section=VALUES(section), academic_year=VALUES(academic_year)
                """,
                (int(user_id), dept_id, semester, section, academic_year),
            )

    def delete(self, *, advisor_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM class_advisors WHERE advisor_id=%s", (int(advisor_id),))
            return cur.rowcount > 0
