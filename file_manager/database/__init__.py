"""
Database package for the file manager.

The Database class combines the connection/query base with the file write
operations.

Usage:
    from file_manager.database import get_db

    db = get_db()
    file_ids = db.run_query('SELECT file_id FROM file').flatten()
"""

from file_manager.database.base import DatabaseBase, QueryResult
from file_manager.database.files import FilesMixin


class Database(DatabaseBase, FilesMixin):
    """
    Unified database interface.

    Inherits from:
        - DatabaseBase: Connection management, schema creation, query execution
        - FilesMixin: File writes (create, edit, soft delete, restore)
    """
    pass


# Singleton instance for application-wide database access
_db_instance = None


def init_db(app) -> Database:
    """
    Initialize database with Flask app.

    Args:
        app: Flask application instance

    Returns:
        Database instance
    """
    global _db_instance
    db_path = app.config.get('DATABASE_PATH', 'data/file_manager.db')
    _db_instance = Database(db_path)
    return _db_instance


def get_db(db_path: str = None) -> Database:
    """
    Get the singleton Database instance.

    Args:
        db_path: Optional path to database file. If not provided, uses
                 DATABASE_PATH environment variable or defaults to
                 'data/file_manager.db'.

    Returns:
        Database instance
    """
    global _db_instance
    import os

    if _db_instance is None:
        path = db_path or os.getenv('DATABASE_PATH', 'data/file_manager.db')
        _db_instance = Database(path)

    return _db_instance


def reset_db():
    """Reset the singleton instance (for testing)."""
    global _db_instance
    _db_instance = None


__all__ = ['Database', 'QueryResult', 'get_db', 'init_db', 'reset_db']
