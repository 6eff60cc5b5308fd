"""File write operations mixin for database."""
import time
from typing import Optional, List, Iterable


def _now() -> int:
    return int(time.time())


class FilesMixin:
    """Mixin providing file record writes (create, edit, soft delete, restore)."""

    def create_file(self, url: str, name: str, created_by: Optional[int] = None,
                    extension: Optional[str] = None, file_size: int = 0,
                    type_id: Optional[int] = None, checksum: Optional[str] = None,
                    preview_url: Optional[str] = None,
                    dimension_x: Optional[int] = None, dimension_y: Optional[int] = None,
                    alt_text: Optional[str] = None, duration: Optional[float] = None,
                    tags: Optional[Iterable[str]] = None,
                    created_at: Optional[int] = None) -> int:
        """Create a new file record and its tags."""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute('''
                INSERT INTO file (
                    url, name, extension, file_size, created_at, created_by,
                    type_id, checksum, preview_url, dimension_x, dimension_y,
                    alt_text, duration
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            ''', (url, name, extension, file_size,
                  created_at if created_at is not None else _now(), created_by,
                  type_id, checksum, preview_url, dimension_x, dimension_y,
                  alt_text, duration))
            file_id = cursor.lastrowid
            self._insert_tags(cursor, file_id, tags or [])
            return file_id

    def update_file_details(self, file_id: int, alt_text: Optional[str],
                            tags: Iterable[str], updated_by: Optional[int],
                            updated_at: Optional[int] = None) -> bool:
        """Update alt text, replace all tags and stamp the update."""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute('''
                UPDATE file SET alt_text = ?, updated_at = ?, updated_by = ?
                WHERE file_id = ?
            ''', (alt_text, updated_at if updated_at is not None else _now(),
                  updated_by, file_id))
            if cursor.rowcount == 0:
                return False
            cursor.execute('DELETE FROM file_tag WHERE file_id = ?', (file_id,))
            self._insert_tags(cursor, file_id, tags)
            return True

    def soft_delete_file(self, file_id: int, deleted_by: Optional[int],
                         deleted_at: Optional[int] = None) -> bool:
        """Mark a live file as deleted."""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute('''
                UPDATE file SET deleted_at = ?, deleted_by = ?
                WHERE file_id = ? AND deleted_at IS NULL
            ''', (deleted_at if deleted_at is not None else _now(), deleted_by, file_id))
            return cursor.rowcount > 0

    def restore_file(self, file_id: int) -> bool:
        """Clear the deletion stamp of a soft-deleted file."""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute('''
                UPDATE file SET deleted_at = NULL, deleted_by = NULL
                WHERE file_id = ? AND deleted_at IS NOT NULL
            ''', (file_id,))
            return cursor.rowcount > 0

    def list_file_ids_by_checksum(self, checksum: str) -> List[int]:
        """File ids sharing a checksum (used to skip duplicate registrations)."""
        return self.run_query(
            'SELECT file_id FROM file WHERE checksum = ? ORDER BY file_id',
            (checksum,)
        ).flatten()

    def _insert_tags(self, cursor, file_id: int, tags: Iterable[str]):
        seen = set()
        for tag in tags:
            if tag in seen:
                continue
            seen.add(tag)
            cursor.execute(
                'INSERT INTO file_tag (file_id, tag_name) VALUES (?, ?)',
                (file_id, tag)
            )
