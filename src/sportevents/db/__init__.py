"""Database module for sport events."""

from sportevents.db.connection import DEFAULT_DB_PATH, Database
from sportevents.db.repositories import NotFoundError, SportEventRepository

__all__ = [
    "DEFAULT_DB_PATH",
    "Database",
    "NotFoundError",
    "SportEventRepository",
]
