"""
Base database operations and connection management.
"""
import sqlite3
from pathlib import Path
from contextlib import contextmanager
from typing import Any, Iterable, Iterator, List, Optional, Sequence

from file_manager.utils.phonetic import sounds_like


class QueryResult:
    """Rows returned by a query, with helpers for the common shapes."""

    def __init__(self, rows: List[sqlite3.Row]):
        self._rows = rows

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[sqlite3.Row]:
        return iter(self._rows)

    def __bool__(self) -> bool:
        return bool(self._rows)

    def first(self) -> Optional[sqlite3.Row]:
        """First row, or None for an empty result."""
        return self._rows[0] if self._rows else None

    def flatten(self, column: Any = 0) -> List[Any]:
        """Values of a single column (first column by default)."""
        return [row[column] for row in self._rows]


class DatabaseBase:
    """Base class with connection and schema management."""

    def __init__(self, db_path: str | Path):
        """Initialize database connection."""
        self.db_path = Path(db_path)
        self._ensure_db_directory()
        self._init_db()

    def _ensure_db_directory(self):
        """Ensure database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def get_connection(self):
        """Context manager for database connections."""
        conn = sqlite3.connect(str(self.db_path), timeout=10.0)
        conn.row_factory = sqlite3.Row  # Enable dict-like access to rows
        # Enable WAL mode for better concurrent access
        conn.execute('PRAGMA journal_mode=WAL')
        # Enable foreign key constraints for CASCADE deletes
        conn.execute('PRAGMA foreign_keys=ON')
        conn.create_function('sounds_like', 2, sounds_like, deterministic=True)
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def run_query(self, sql: str, params: Sequence[Any] | Iterable[Any] = ()) -> QueryResult:
        """Run a parameterized query and return every row."""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(sql, tuple(params))
            return QueryResult(cursor.fetchall())

    def _init_db(self):
        """Initialize database schema."""
        with self.get_connection() as conn:
            cursor = conn.cursor()

            # Files table
            cursor.execute('''
                CREATE TABLE IF NOT EXISTS file (
                    file_id INTEGER PRIMARY KEY AUTOINCREMENT,
                    url TEXT NOT NULL,
                    name TEXT NOT NULL,
                    extension TEXT,
                    file_size INTEGER NOT NULL DEFAULT 0,
                    created_at INTEGER NOT NULL,
                    created_by INTEGER,
                    updated_at INTEGER,
                    updated_by INTEGER,
                    deleted_at INTEGER,
                    deleted_by INTEGER,
                    type_id INTEGER,
                    checksum TEXT,
                    preview_url TEXT,
                    dimension_x INTEGER,
                    dimension_y INTEGER,
                    alt_text TEXT,
                    duration REAL
                )
            ''')

            # Tags, one row per tag per file
            cursor.execute('''
                CREATE TABLE IF NOT EXISTS file_tag (
                    file_id INTEGER NOT NULL,
                    tag_name TEXT NOT NULL,
                    PRIMARY KEY (file_id, tag_name),
                    FOREIGN KEY (file_id) REFERENCES file(file_id) ON DELETE CASCADE
                )
            ''')

            cursor.execute('CREATE INDEX IF NOT EXISTS idx_file_type ON file(type_id)')
            cursor.execute('CREATE INDEX IF NOT EXISTS idx_file_created_by ON file(created_by)')
            cursor.execute('CREATE INDEX IF NOT EXISTS idx_file_tag_name ON file_tag(tag_name)')
