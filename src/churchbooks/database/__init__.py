"""Database layer for churchbooks application."""

from churchbooks.database.base import Database
from churchbooks.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
