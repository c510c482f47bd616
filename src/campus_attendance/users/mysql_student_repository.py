from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, duplicate_as_conflict, fetchall, fetchone, in_placeholders
from .model import Student
from .repository import StudentRepository

_SELECT = """
    SELECT st.student_id, st.user_id, st.roll_number, st.dept_id, st.semester, st.section, st.batch,
           u.full_name, u.email, d.name AS dept_name, d.code AS dept_code
    FROM students st
    LEFT JOIN users u ON u.user_id = st.user_id
    LEFT JOIN departments d ON d.dept_id = st.dept_id
"""


def row_to_student(r: dict) -> Student:
    return Student(
        student_id=int(r["student_id"]),
        user_id=int(r["user_id"]),
        roll_number=r["roll_number"],
        dept_id=r.get("dept_id"),
        semester=r.get("semester"),
        section=r.get("section"),
        batch=r.get("batch"),
        full_name=r.get("full_name"),
        email=r.get("email"),
        dept_name=r.get("dept_name"),
        dept_code=r.get("dept_code"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE st.student_id=%s", (int(student_id),))
            r = fetchone(cur)
            return row_to_student(r) if r else None

    def get_by_user_id(self, user_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE st.user_id=%s", (int(user_id),))
            r = fetchone(cur)
            return row_to_student(r) if r else None

    def list_students(
        self,
        *,
        semester: Optional[int] = None,
        dept_id: Optional[int] = None,
        section: Optional[str] = None,
    ) -> Sequence[Student]:
        clauses: list[str] = []
        params: list[object] = []
        if semester is not None:
            clauses.append("st.semester=%s")
            params.append(int(semester))
        if dept_id is not None:
            clauses.append("st.dept_id=%s")
            params.append(int(dept_id))
        if section:
            clauses.append("st.section=%s")
            params.append(section)
        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + where + " ORDER BY st.roll_number", tuple(params))
            return [row_to_student(r) for r in fetchall(cur)]

    def create_student(
        self,
        *,
        email: str,
        full_name: str,
        password_hash: str,
        roll_number: str,
        dept_id: Optional[int],
        semester: Optional[int],
        section: Optional[str],
        batch: Optional[str],
    ) -> int:
        with duplicate_as_conflict("A student with this email or roll number already exists"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO users(email, full_name, password_hash, role, is_active)
                    VALUES(%s,%s,%s,%s,1)
                    """,
                    (email, full_name, password_hash, Role.STUDENT.value),
                )
                user_id = int(cur.lastrowid)
                cur.execute(
                    """
                    INSERT INTO students(user_id, roll_number, dept_id, semester, section, batch)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (user_id, roll_number, dept_id, semester, section, batch),
                )
                return int(cur.lastrowid)

    def set_semester(self, *, student_ids: Sequence[int], semester: int) -> int:
        if not student_ids:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE students SET semester=%s WHERE student_id IN ({in_placeholders(student_ids)})",
                (int(semester), *[int(s) for s in student_ids]),
            )
            return cur.rowcount
