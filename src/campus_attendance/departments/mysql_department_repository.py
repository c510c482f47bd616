from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, duplicate_as_conflict, fetchall, fetchone
from .model import Department
from .repository import DepartmentRepository

_DUPLICATE = "Department with this code already exists"


def row_to_department(r: dict) -> Department:
    return Department(dept_id=int(r["dept_id"]), code=r["code"], name=r["name"], description=r.get("description"))


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT dept_id, code, name, description FROM departments ORDER BY code")
            return [row_to_department(r) for r in fetchall(cur)]

    def get_by_id(self, dept_id: int) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT dept_id, code, name, description FROM departments WHERE dept_id=%s", (int(dept_id),))
            r = fetchone(cur)
            return row_to_department(r) if r else None

    def create(self, *, code: str, name: str, description: Optional[str] = None) -> int:
        with duplicate_as_conflict(_DUPLICATE):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO departments(code, name, description) VALUES(%s,%s,%s)",
                    (code, name, description),
                )
                return int(cur.lastrowid)

    def update(self, *, dept_id: int, code: str, name: str, description: Optional[str] = None) -> bool:
        with duplicate_as_conflict(_DUPLICATE):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "UPDATE departments SET code=%s, name=%s, description=%s WHERE dept_id=%s",
                    (code, name, description, int(dept_id)),
                )
                return cur.rowcount > 0

    def delete(self, *, dept_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM departments WHERE dept_id=%s", (int(dept_id),))
            return cur.rowcount > 0
