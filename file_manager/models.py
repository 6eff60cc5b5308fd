"""
Data models for the file manager.
"""
from dataclasses import dataclass, field, asdict
from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any, List
import logging

from file_manager.services.storage import StorageError

logger = logging.getLogger(__name__)


class Visibility(Enum):
    """Which records a loader lookup may return."""
    LIVE_ONLY = 'live_only'
    INCLUDE_DELETED = 'include_deleted'


class FileType:
    """File type constants."""
    IMAGE = 1
    DOCUMENT = 2
    VIDEO = 3
    AUDIO = 4
    OTHER = 5

    EXTENSIONS = {
        IMAGE: {'jpg', 'jpeg', 'png', 'gif', 'bmp', 'webp', 'svg', 'tif', 'tiff'},
        DOCUMENT: {'pdf', 'doc', 'docx', 'xls', 'xlsx', 'ppt', 'pptx', 'txt', 'csv', 'rtf', 'odt'},
        VIDEO: {'mp4', 'mov', 'avi', 'mkv', 'wmv', 'flv', 'webm'},
        AUDIO: {'mp3', 'wav', 'aac', 'ogg', 'flac', 'm4a'},
    }

    @classmethod
    def for_extension(cls, extension: Optional[str]) -> int:
        """Classify a file extension (with or without the dot)."""
        ext = (extension or '').lstrip('.').lower()
        for type_id, extensions in cls.EXTENSIONS.items():
            if ext in extensions:
                return type_id
        return cls.OTHER


@dataclass
class Authorship:
    """Who created, last updated and soft-deleted a record, and when."""
    created_at: Optional[datetime] = None
    created_by: Optional[int] = None
    updated_at: Optional[datetime] = None
    updated_by: Optional[int] = None
    deleted_at: Optional[datetime] = None
    deleted_by: Optional[int] = None

    def create(self, at: datetime, by: Optional[int]) -> 'Authorship':
        self.created_at = at
        self.created_by = by
        return self

    def update(self, at: datetime, by: Optional[int]) -> 'Authorship':
        self.updated_at = at
        self.updated_by = by
        return self

    def delete(self, at: datetime, by: Optional[int]) -> 'Authorship':
        self.deleted_at = at
        self.deleted_by = by
        return self

    def restore(self) -> 'Authorship':
        self.deleted_at = None
        self.deleted_by = None
        return self

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with ISO timestamps."""
        return {
            key: value.isoformat() if isinstance(value, datetime) else value
            for key, value in asdict(self).items()
        }


@dataclass
class File:
    """File model representing one uploaded file and its audit trail."""
    id: Optional[int] = None
    url: str = ''
    name: str = ''
    extension: Optional[str] = None
    file_size: int = 0
    preview_url: Optional[str] = None
    dimension_x: Optional[int] = None
    dimension_y: Optional[int] = None
    duration: Optional[float] = None
    checksum: Optional[str] = None
    alt_text: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    type_id: Optional[int] = None
    authorship: Authorship = field(default_factory=Authorship)
    # Transient storage handle, never persisted
    file: Any = field(default=None, repr=False, compare=False)

    def get_url(self) -> str:
        return self.url

    def get_alt_text(self) -> str:
        return self.alt_text or ''

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data = {
            'id': self.id,
            'url': self.url,
            'name': self.name,
            'extension': self.extension,
            'file_size': self.file_size,
            'preview_url': self.preview_url,
            'dimension_x': self.dimension_x,
            'dimension_y': self.dimension_y,
            'duration': self.duration,
            'checksum': self.checksum,
            'alt_text': self.alt_text,
            'tags': list(self.tags),
            'type_id': self.type_id,
            'authorship': self.authorship.to_dict(),
        }
        if self.file is not None:
            try:
                data['public_url'] = self.file.public_url
            except StorageError as e:
                logger.warning(f"No public URL for file {self.id}: {e}")
                data['public_url'] = None
        return data
