#!/usr/bin/env python3
"""
Register files from a directory in the file manager database.

Each file gets a `file` row with its size, checksum, type and (for images,
video and audio) dimensions and duration. Files whose checksum is already
registered are skipped.

Run with: python -m scripts.register_files DIR [--user-id N] [--url-prefix public://files] [--dry-run]
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Dict

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tqdm import tqdm
from file_manager.database import Database
from file_manager.models import FileType
from file_manager.utils.media_metadata import (
    compute_checksum,
    extract_media_metadata,
    MediaMetadataError
)

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def register_directory(db: Database, directory: Path, user_id: int,
                       url_prefix: str = 'public://files', dry_run: bool = False) -> Dict[str, int]:
    """
    Register every file below a directory.

    Args:
        db: Database instance
        directory: Directory to walk
        user_id: Creator recorded on new rows
        url_prefix: Prefix for the stored URL; the path relative to the
            directory is appended
        dry_run: Log what would be registered without writing

    Returns:
        Counts of registered, duplicate and failed files
    """
    stats = {'registered': 0, 'duplicates': 0, 'errors': 0}
    paths = sorted(p for p in directory.rglob('*') if p.is_file())

    if not paths:
        logger.info(f"No files found in {directory}")
        return stats

    logger.info(f"Found {len(paths)} files in {directory}")
    logger.info(f"Mode: {'DRY RUN' if dry_run else 'LIVE'}")

    for path in tqdm(paths, desc="Registering files"):
        try:
            checksum = compute_checksum(str(path))
        except OSError as e:
            logger.warning(f"Skipping {path}: {e}")
            stats['errors'] += 1
            continue

        if db.list_file_ids_by_checksum(checksum):
            stats['duplicates'] += 1
            continue

        extension = path.suffix.lstrip('.').lower() or None
        type_id = FileType.for_extension(extension)

        try:
            metadata = extract_media_metadata(str(path), type_id)
        except MediaMetadataError as e:
            logger.warning(f"No media metadata for {path.name}: {e}")
            metadata = {}

        relative = path.relative_to(directory).as_posix()
        url = f"{url_prefix.rstrip('/')}/{relative}"

        if dry_run:
            logger.info(f"Would register {url} (type {type_id})")
            stats['registered'] += 1
            continue

        db.create_file(
            url=url,
            name=path.name,
            created_by=user_id,
            extension=extension,
            file_size=path.stat().st_size,
            type_id=type_id,
            checksum=checksum,
            dimension_x=metadata.get('dimension_x'),
            dimension_y=metadata.get('dimension_y'),
            duration=metadata.get('duration'),
        )
        stats['registered'] += 1

    return stats


def main():
    parser = argparse.ArgumentParser(description='Register files in the file manager database')
    parser.add_argument('directory', type=Path, help='Directory holding the files')
    parser.add_argument('--db', default='data/file_manager.db',
                        help='Database path (default: data/file_manager.db)')
    parser.add_argument('--user-id', type=int, default=0,
                        help='Creator id recorded on new files (default: 0)')
    parser.add_argument('--url-prefix', default='public://files',
                        help='Prefix for stored URLs (default: public://files)')
    parser.add_argument('--dry-run', action='store_true',
                        help='Show what would be registered without writing')
    args = parser.parse_args()

    if not args.directory.is_dir():
        logger.error(f"Not a directory: {args.directory}")
        sys.exit(1)

    db = Database(args.db)
    stats = register_directory(db, args.directory, args.user_id,
                               url_prefix=args.url_prefix, dry_run=args.dry_run)

    logger.info(f"Registered: {stats['registered']}, "
                f"duplicates skipped: {stats['duplicates']}, errors: {stats['errors']}")


if __name__ == '__main__':
    main()
