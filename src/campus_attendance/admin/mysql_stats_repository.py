from __future__ import annotations

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import SystemStats
from .repository import StatsRepository

_COUNTED = {
    "users": "users",
    "departments": "departments",
    "subjects": "subjects",
    "allocations": "teacher_subject_allocations",
}


class MySQLStatsRepository(StatsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def count_rows(self) -> SystemStats:
        counts: dict[str, int] = {}
        with db_cursor(self._conn_factory) as (_, cur):
            for key, table in _COUNTED.items():
                cur.execute(f"SELECT COUNT(*) AS n FROM {table}")
                r = fetchone(cur)
                counts[key] = int(r["n"]) if r else 0
        return SystemStats(**counts)
