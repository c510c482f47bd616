from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Dict, Tuple

import mysql.connector


class StoreAccess(str, Enum):
    """Which database account a repository talks through.

    CONSTRAINED is the application account used by feature repositories.
    PRIVILEGED is the service account used for profile lookups and account
    provisioning.
    """

    CONSTRAINED = "constrained"
    PRIVILEGED = "privileged"


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config["host"]),
            port=int(db_config.get("port", 3306)),
            user=str(db_config["user"]),
            password=str(db_config["password"]),
            database=str(db_config["database"]),
        )


class DatabaseConnection:
    """Connection factory, one instance per (account, database).

    Note: We create short-lived connections per operation (safe for simple Flask apps).
    """

    _instances: ClassVar[Dict[Tuple[StoreAccess, str, int, str, str], "DatabaseConnection"]] = {}

    def __init__(self, config: DBConfig, access: StoreAccess = StoreAccess.CONSTRAINED):
        self._config = config
        self.access = access

    @classmethod
    def get_instance(cls, config: DBConfig, access: StoreAccess = StoreAccess.CONSTRAINED) -> "DatabaseConnection":
        key = (access, config.host, config.port, config.user, config.database)
        if key not in cls._instances:
            cls._instances[key] = DatabaseConnection(config, access)
        return cls._instances[key]

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )
