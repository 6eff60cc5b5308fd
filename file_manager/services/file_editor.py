"""
Edit/delete service: persists changes made to loaded File records.
"""
import logging
import time
from datetime import datetime, timezone
from typing import Optional

from file_manager.models import File

logger = logging.getLogger(__name__)


class FileEditor:
    """Saves edits, soft-deletes and restores files."""

    def __init__(self, db):
        self._db = db

    def save(self, file: Optional[File], user_id: Optional[int]) -> Optional[File]:
        """
        Persist the file's alt text and tags.

        Returns:
            The file with its update stamp set, or None if nothing was saved
        """
        if file is None or file.id is None:
            return None

        now = int(time.time())
        if not self._db.update_file_details(file.id, file.alt_text, file.tags,
                                            updated_by=user_id, updated_at=now):
            logger.warning(f"File {file.id} could not be updated")
            return None

        file.authorship.update(datetime.fromtimestamp(now, tz=timezone.utc), user_id)
        logger.info(f"File {file.id} updated by user {user_id}")
        return file

    def delete(self, file: Optional[File], user_id: Optional[int]) -> Optional[File]:
        """
        Soft-delete a file.

        Returns:
            The file with its deletion stamp set, or None if it was not live
        """
        if file is None or file.id is None:
            return None

        now = int(time.time())
        if not self._db.soft_delete_file(file.id, deleted_by=user_id, deleted_at=now):
            logger.warning(f"File {file.id} could not be deleted")
            return None

        file.authorship.delete(datetime.fromtimestamp(now, tz=timezone.utc), user_id)
        logger.info(f"File {file.id} deleted by user {user_id}")
        return file

    def restore(self, file: Optional[File]) -> Optional[File]:
        """
        Undo a soft deletion.

        Returns:
            The restored file, or None if it was not deleted
        """
        if file is None or file.id is None:
            return None

        if not self._db.restore_file(file.id):
            logger.warning(f"File {file.id} could not be restored")
            return None

        file.authorship.restore()
        logger.info(f"File {file.id} restored")
        return file


def get_file_editor(db=None) -> FileEditor:
    """Factory function to create a FileEditor."""
    from file_manager.database import get_db

    return FileEditor(db or get_db())
