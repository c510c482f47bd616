from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, duplicate_as_conflict, fetchall, fetchone
from .model import Subject, SubjectDraft
from .repository import SubjectRepository

_SELECT = "SELECT subject_id, code, name, dept_id, semester, credits FROM subjects"


def row_to_subject(r: dict) -> Subject:
    return Subject(
        subject_id=int(r["subject_id"]),
        code=r["code"],
        name=r["name"],
        dept_id=r.get("dept_id"),
        semester=r.get("semester"),
        credits=r.get("credits"),
    )


class MySQLSubjectRepository(SubjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_subjects(self, *, dept_id: Optional[int] = None, semester: Optional[int] = None) -> Sequence[Subject]:
        clauses: list[str] = []
        params: list[object] = []
        if dept_id is not None:
            clauses.append("dept_id=%s")
            params.append(int(dept_id))
        if semester is not None:
            clauses.append("semester=%s")
            params.append(int(semester))
        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + where + " ORDER BY code", tuple(params))
            return [row_to_subject(r) for r in fetchall(cur)]

    def get_by_id(self, subject_id: int) -> Optional[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE subject_id=%s", (int(subject_id),))
            r = fetchone(cur)
            return row_to_subject(r) if r else None

    def create(
        self,
        *,
        code: str,
        name: str,
        dept_id: Optional[int] = None,
        semester: Optional[int] = None,
        credits: Optional[int] = None,
    ) -> int:
        with duplicate_as_conflict("Subject with this code already exists"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO subjects(code, name, dept_id, semester, credits) VALUES(%s,%s,%s,%s,%s)",
                    (code, name, dept_id, semester, credits),
                )
                return int(cur.lastrowid)

    def delete(self, *, subject_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM subjects WHERE subject_id=%s", (int(subject_id),))
            return cur.rowcount > 0

    def update(self, subject: Subject) -> bool:
        with duplicate_as_conflict("Subject with this code already exists"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE subjects SET code=%s, name=%s, dept_id=%s, semester=%s, credits=%s
                    WHERE subject_id=%s
                    """,
                    (subject.code, subject.name, subject.dept_id, subject.semester, subject.credits, subject.subject_id),
                )
                return cur.rowcount > 0

    def upsert_many(self, drafts: Sequence[SubjectDraft]) -> int:
        if not drafts:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO subjects(code, name, dept_id, semester, credits)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE name=VALUES(name), dept_id=VALUES(dept_id),
                                        semester=VALUES(semester), credits=VALUES(credits)
                """,
                [(d.code, d.name, d.dept_id, d.semester, d.credits) for d in drafts],
            )
            return len(drafts)
