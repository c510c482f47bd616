import os


def db_config_from_env(prefix: str = "DB_", *, default_password: str = "") -> dict:
    """mysql-connector settings read from ``<prefix>HOST``, ``<prefix>PORT`` ..."""
    return {
        "host": os.getenv(f"{prefix}HOST", "localhost"),
        "port": int(os.getenv(f"{prefix}PORT", "3306")),
        "user": os.getenv(f"{prefix}USER", "root"),
        "password": os.getenv(f"{prefix}PASSWORD", default_password),
        "database": os.getenv(f"{prefix}NAME", "campus_attendance"),
    }


def admin_db_config_from_env(fallback: dict) -> dict:
    """Privileged account; any ADMIN_DB_* variable left unset falls back to ``fallback``."""
    return {
        "host": os.getenv("ADMIN_DB_HOST", fallback["host"]),
        "port": int(os.getenv("ADMIN_DB_PORT", str(fallback["port"]))),
        "user": os.getenv("ADMIN_DB_USER", fallback["user"]),
        "password": os.getenv("ADMIN_DB_PASSWORD", fallback["password"]),
        "database": os.getenv("ADMIN_DB_NAME", fallback["database"]),
    }


DEFAULTER_THRESHOLD = int(os.getenv("DEFAULTER_THRESHOLD", "75"))
