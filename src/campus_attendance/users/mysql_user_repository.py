from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, duplicate_as_conflict, fetchall, fetchone
from .model import User
from .repository import UserRepository

_SELECT = "SELECT user_id, email, full_name, password_hash, role, is_active FROM users"


def row_to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        email=row["email"],
        full_name=row["full_name"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return row_to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE email=%s", (email,))
            row = fetchone(cur)
            return row_to_user(row) if row else None

    def create_user(self, *, email: str, full_name: str, password_hash: str, role: Role) -> int:
        with duplicate_as_conflict("A user with this email already exists"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO users(email, full_name, password_hash, role, is_active)
                    VALUES(%s,%s,%s,%s,1)
                    """,
                    (email, full_name, password_hash, role.value),
                )
                return int(cur.lastrowid)

    def list_users(self, *, role: Optional[Role] = None) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            if role is None:
                cur.execute(_SELECT + " ORDER BY user_id DESC")
            else:
                cur.execute(_SELECT + " WHERE role=%s ORDER BY user_id DESC", (role.value,))
            return [row_to_user(r) for r in fetchall(cur)]

    def set_role(self, *, user_id: int, role: Role) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET role=%s WHERE user_id=%s", (role.value, int(user_id)))
            return cur.rowcount > 0
