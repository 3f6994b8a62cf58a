"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from churchbooks.database.sqlalchemy_db import SQLAlchemyDatabase


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks CHURCHBOOKS_DB_PATH
            environment variable, then defaults to ~/.churchbooks/churchbooks.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        # Check environment variable
        database_path = os.environ.get("CHURCHBOOKS_DB_PATH")

    if database_path is None:
        # Default to ~/.churchbooks/churchbooks.db
        home = Path.home()
        db_dir = home / ".churchbooks"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "churchbooks.db")

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url)
