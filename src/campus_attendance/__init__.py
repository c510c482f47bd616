"""Campus attendance service: sessions, records, statistics and semester promotion."""

from .main import create_app

__all__ = ["create_app"]
