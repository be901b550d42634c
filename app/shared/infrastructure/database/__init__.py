"""
Database infrastructure: declarative base, engine lifecycle and session factory.
"""

from .connection import Base, DatabaseConnectionManager, db_manager, init_database, close_database
from .session import DatabaseSessionManager, session_manager, initialize_sessions, get_db_session

__all__ = [
    "Base",
    "DatabaseConnectionManager",
    "db_manager",
    "init_database",
    "close_database",
    "DatabaseSessionManager",
    "session_manager",
    "initialize_sessions",
    "get_db_session",
]
