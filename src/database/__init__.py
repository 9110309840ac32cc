"""Database connection and session management."""

from .connection import DatabaseManager, get_db, db_manager

__all__ = ["DatabaseManager", "get_db", "db_manager"]
