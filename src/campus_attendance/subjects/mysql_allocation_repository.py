from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, duplicate_as_conflict, fetchall, fetchone
from .allocation_model import Allocation
from .allocation_repository import AllocationRepository


class MySQLAllocationRepository(AllocationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_allocations(
        self,
        *,
        academic_year: Optional[str] = None,
        teacher_id: Optional[int] = None,
    ) -> Sequence[Allocation]:
        clauses: list[str] = []
        params: list[object] = []
        if academic_year:
            clauses.append("a.academic_year=%s")
            params.append(academic_year)
        if teacher_id is not None:
            clauses.append("a.teacher_id=%s")
            params.append(int(teacher_id))
        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT a.allocation_id, a.teacher_id, a.subject_id, a.section, a.batch, a.academic_year,
                       u.full_name AS teacher_name, sub.code AS subject_code, sub.name AS subject_name
                FROM teacher_subject_allocations a
                LEFT JOIN teachers t ON t.teacher_id = a.teacher_id
                LEFT JOIN users u ON u.user_id = t.user_id
                LEFT JOIN subjects sub ON sub.subject_id = a.subject_id
                {where}
                ORDER BY a.created_at DESC
                """,
                tuple(params),
            )
            return [
                Allocation(
                    allocation_id=int(r["allocation_id"]),
                    teacher_id=int(r["teacher_id"]),
                    subject_id=int(r["subject_id"]),
                    section=r["section"],
                    batch=r.get("batch") or "",
                    academic_year=r["academic_year"],
                    teacher_name=r.get("teacher_name"),
                    subject_code=r.get("subject_code"),
                    subject_name=r.get("subject_name"),
                )
                for r in fetchall(cur)
            ]

    def exists(self, *, teacher_id: int, subject_id: int, section: str, batch: str, academic_year: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT allocation_id FROM teacher_subject_allocations
                WHERE teacher_id=%s AND subject_id=%s AND section=%s AND batch=%s AND academic_year=%s
                """,
                (int(teacher_id), int(subject_id), section, batch, academic_year),
            )
            return fetchone(cur) is not None

    def create(self, *, teacher_id: int, subject_id: int, section: str, batch: str, academic_year: str) -> int:
        with duplicate_as_conflict("This allocation already exists"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO teacher_subject_allocations(teacher_id, subject_id, section, batch, academic_year)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (int(teacher_id), int(subject_id), section, batch, academic_year),
                )
                return int(cur.lastrowid)

    def delete(self, *, allocation_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM teacher_subject_allocations WHERE allocation_id=%s", (int(allocation_id),))
            return cur.rowcount > 0
