"""Database connection and session management."""

from .connection import Base, db_manager, initialize_database, close_database
from .session import session_manager, get_db_session, database_session

__all__ = [
    "Base",
    "db_manager",
    "initialize_database",
    "close_database",
    "session_manager",
    "get_db_session",
    "database_session",
]
