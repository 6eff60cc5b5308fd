"""
File loader: resolves ids and search criteria to hydrated File records.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional, Union

from file_manager.models import Authorship, File, Visibility
from file_manager.services.storage import FileStorage

logger = logging.getLogger(__name__)

FILE_COLUMNS = '''
    file.file_id AS file_id,
    file.url AS url,
    file.name AS name,
    file.extension AS extension,
    file.file_size AS file_size,
    file.created_at AS created_at,
    file.created_by AS created_by,
    file.updated_at AS updated_at,
    file.updated_by AS updated_by,
    file.deleted_at AS deleted_at,
    file.deleted_by AS deleted_by,
    file.type_id AS type_id,
    file.checksum AS checksum,
    file.preview_url AS preview_url,
    file.dimension_x AS dimension_x,
    file.dimension_y AS dimension_y,
    file.alt_text AS alt_text,
    file.duration AS duration
'''

REQUIRED_COLUMNS = ('file_id', 'url', 'name', 'created_at')


class FileDecodeError(Exception):
    """A file row is missing columns or holds malformed values."""
    pass


def _to_datetime(value: Any, column: str) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FileDecodeError(f"Column '{column}' is not a timestamp: {value!r}")
    return datetime.fromtimestamp(value, tz=timezone.utc)


def file_from_row(row: Mapping[str, Any], tags: Optional[List[str]] = None) -> File:
    """
    Map a `file` row onto a File.

    Args:
        row: Row with the columns selected by FILE_COLUMNS
        tags: Tag names for the file

    Returns:
        File with authorship populated

    Raises:
        FileDecodeError: If a required column is missing or malformed
    """
    keys = set(row.keys())
    missing = [column for column in REQUIRED_COLUMNS if column not in keys]
    if missing:
        raise FileDecodeError(f"File row missing columns: {', '.join(missing)}")

    file_id = row['file_id']
    if isinstance(file_id, bool) or not isinstance(file_id, int):
        raise FileDecodeError(f"Column 'file_id' is not an integer: {file_id!r}")
    if not row['url'] or row['name'] is None:
        raise FileDecodeError(f"File {file_id} has no url or name")

    def get(column):
        return row[column] if column in keys else None

    authorship = Authorship()
    authorship.create(_to_datetime(row['created_at'], 'created_at'), get('created_by'))
    if get('updated_at') is not None:
        authorship.update(_to_datetime(row['updated_at'], 'updated_at'), get('updated_by'))
    if get('deleted_at') is not None:
        authorship.delete(_to_datetime(row['deleted_at'], 'deleted_at'), get('deleted_by'))

    return File(
        id=file_id,
        url=row['url'],
        name=row['name'],
        extension=get('extension'),
        file_size=get('file_size') or 0,
        preview_url=get('preview_url'),
        dimension_x=get('dimension_x'),
        dimension_y=get('dimension_y'),
        duration=get('duration'),
        checksum=get('checksum'),
        alt_text=get('alt_text'),
        tags=list(tags or []),
        type_id=get('type_id'),
        authorship=authorship,
    )


class FileLoader:
    """
    Loads File records from the database.

    Lookups return None (single id) or an empty list when nothing visible
    matches; they never raise for missing records.

    Soft-deleted records are hidden by default. Pass ``visibility`` to a
    lookup to choose per call, or use ``include_deleted()`` to change the
    default for every later lookup on this instance. The toggle stays set
    until the caller resets it, so share a loader only with that in mind.
    """

    def __init__(self, db, storage: Optional[FileStorage] = None):
        self._db = db
        self._storage = storage
        self._visibility = Visibility.LIVE_ONLY

    def include_deleted(self, include: bool) -> 'FileLoader':
        """
        Toggle whether later lookups return soft-deleted files.

        Returns:
            The loader, for chaining
        """
        self._visibility = Visibility.INCLUDE_DELETED if include else Visibility.LIVE_ONLY
        return self

    @property
    def visibility(self) -> Visibility:
        return self._visibility

    def get_by_id(self, file_id: Union[int, str, Iterable[int]],
                  visibility: Optional[Visibility] = None) -> Union[Optional[File], List[File]]:
        """
        Load one file, or several.

        Args:
            file_id: A single id, or an iterable of ids
            visibility: Overrides the loader default for this call

        Returns:
            File or None for a single id; list of the files that resolved
            for an iterable, in the order given
        """
        visibility = visibility or self._visibility

        if isinstance(file_id, (int, str)):
            return self._load(file_id, visibility)

        files = []
        for single_id in file_id:
            file = self._load(single_id, visibility)
            if file:
                files.append(file)
        return files

    def get_by_type(self, type_id: int, visibility: Optional[Visibility] = None) -> List[File]:
        """All visible files of a file type."""
        result = self._db.run_query('''
            SELECT file_id FROM file WHERE type_id = ? ORDER BY file_id
        ''', (type_id,))
        return self.get_by_id(result.flatten(), visibility) if result else []

    def get_by_search_term(self, term: str, visibility: Optional[Visibility] = None) -> List[File]:
        """
        Files whose name or any tag sounds like any word of the search term.

        Args:
            term: Whitespace-separated search words, OR-ed together

        Returns:
            Matching files, each once
        """
        terms = (term or '').split()
        if not terms:
            return []

        where_name = ' OR '.join(['sounds_like(file.name, ?)'] * len(terms))
        where_tag = ' OR '.join(['sounds_like(file_tag.tag_name, ?)'] * len(terms))

        result = self._db.run_query(f'''
            SELECT DISTINCT file.file_id
            FROM file
            LEFT JOIN file_tag ON file_tag.file_id = file.file_id
            WHERE ({where_name})
               OR ({where_tag})
            ORDER BY file.file_id
        ''', terms + terms)

        logger.debug(f"Search '{term}' matched {len(result)} file ids")
        return self.get_by_id(result.flatten(), visibility) if result else []

    def get_all(self, visibility: Optional[Visibility] = None) -> List[File]:
        """All visible files."""
        result = self._db.run_query('SELECT file_id FROM file ORDER BY file_id')
        return self.get_by_id(result.flatten(), visibility) if result else []

    def get_by_user(self, user: Any, visibility: Optional[Visibility] = None) -> List[File]:
        """
        All visible files created by a user.

        Args:
            user: User id, or an object with an ``id`` attribute
        """
        user_id = getattr(user, 'id', user)
        result = self._db.run_query('''
            SELECT file_id FROM file WHERE created_by = ? ORDER BY file_id
        ''', (user_id,))
        return self.get_by_id(result.flatten(), visibility) if result else []

    def _load(self, file_id: Any, visibility: Visibility) -> Optional[File]:
        """Load a single file with its tags, honouring soft deletion."""
        try:
            file_id = int(file_id)
        except (TypeError, ValueError):
            logger.debug(f"Ignoring non-numeric file id {file_id!r}")
            return None

        result = self._db.run_query(f'''
            SELECT {FILE_COLUMNS}
            FROM file
            WHERE file.file_id = ?
        ''', (file_id,))

        row = result.first()
        if row is None:
            return None

        if row['deleted_at'] is not None and visibility is not Visibility.INCLUDE_DELETED:
            logger.debug(f"File {file_id} is deleted, hiding it")
            return None

        file = file_from_row(row, self._load_tags(file_id))
        if self._storage is not None:
            file.file = self._storage.get(file.url)
        return file

    def _load_tags(self, file_id: int) -> List[str]:
        result = self._db.run_query('''
            SELECT file_tag.tag_name
            FROM file_tag
            WHERE file_tag.file_id = ?
            ORDER BY file_tag.rowid
        ''', (file_id,))
        return result.flatten()


def get_file_loader(app=None, db=None) -> FileLoader:
    """
    Factory function to create a FileLoader.

    Build one per request: the include-deleted toggle lives on the instance.
    """
    from file_manager.database import get_db
    from file_manager.services.storage import get_file_storage

    return FileLoader(db or get_db(), get_file_storage(app))
