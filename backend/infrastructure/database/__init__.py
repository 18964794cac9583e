"""
Database infrastructure package.

Re-exports commonly used database components for convenient imports.
"""

from .connection import (
    Base,
    Database,
    get_database_type,
    get_db,
    is_sqlite_session,
    reset_write_lock,
    retry_on_db_lock,
    serialized_write,
)
from .models import Entry

__all__ = [
    # Connection
    "Base",
    "Database",
    "get_database_type",
    "get_db",
    "is_sqlite_session",
    "reset_write_lock",
    "retry_on_db_lock",
    "serialized_write",
    # Models
    "Entry",
]
