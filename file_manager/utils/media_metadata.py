"""
Media metadata extraction for file records.
Images are read with Pillow; video and audio are probed with FFprobe.
"""
import hashlib
import json
import subprocess
import shutil
from typing import Dict, Any, Optional
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from file_manager.models import FileType


class MediaMetadataError(Exception):
    """Exception raised for media metadata extraction errors."""
    pass


def compute_checksum(file_path: str, chunk_size: int = 1024 * 1024) -> str:
    """MD5 hex digest of a file's contents."""
    digest = hashlib.md5()
    with open(file_path, 'rb') as handle:
        for chunk in iter(lambda: handle.read(chunk_size), b''):
            digest.update(chunk)
    return digest.hexdigest()


def get_image_dimensions(file_path: str) -> tuple[int, int]:
    """
    Get image dimensions without loading full image data.

    Raises:
        MediaMetadataError: If the file is not a readable image
    """
    try:
        with Image.open(file_path) as img:
            return img.size
    except (OSError, UnidentifiedImageError) as e:
        raise MediaMetadataError(f"Failed to read image dimensions: {e}")


def probe_media(file_path: str) -> Dict[str, Any]:
    """
    Extract width, height and duration from a video or audio file using FFprobe.

    Returns:
        Dictionary with dimension_x, dimension_y and duration (any may be None)

    Raises:
        MediaMetadataError: If FFprobe is not available or extraction fails
    """
    if not shutil.which('ffprobe'):
        raise MediaMetadataError("ffprobe is not available on the system")

    file_path = str(Path(file_path).absolute())

    command = [
        'ffprobe',
        '-v', 'quiet',
        '-print_format', 'json',
        '-show_format',
        '-show_streams',
        file_path
    ]

    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            check=True,
            timeout=30
        )
    except subprocess.CalledProcessError as e:
        raise MediaMetadataError(f"FFprobe failed: {e.stderr}")
    except subprocess.TimeoutExpired:
        raise MediaMetadataError("FFprobe timed out")

    try:
        probe_data = json.loads(result.stdout)
    except json.JSONDecodeError as e:
        raise MediaMetadataError(f"Failed to parse FFprobe output: {e}")

    metadata = {'dimension_x': None, 'dimension_y': None, 'duration': None}

    format_info = probe_data.get('format', {})
    if 'duration' in format_info:
        try:
            metadata['duration'] = float(format_info['duration'])
        except (ValueError, TypeError):
            pass

    for stream in probe_data.get('streams', []):
        if stream.get('codec_type') == 'video':
            try:
                metadata['dimension_x'] = int(stream['width'])
                metadata['dimension_y'] = int(stream['height'])
            except (KeyError, ValueError, TypeError):
                pass
            break

    return metadata


def extract_media_metadata(file_path: str, type_id: Optional[int] = None) -> Dict[str, Any]:
    """
    Metadata columns for a file on disk.

    Args:
        file_path: Path to the file
        type_id: FileType of the file; derived from the extension when omitted

    Returns:
        Dictionary with dimension_x, dimension_y and duration. Documents and
        other files get all three as None.

    Raises:
        MediaMetadataError: If an image or media file cannot be read
    """
    if not Path(file_path).exists():
        raise MediaMetadataError(f"File not found: {file_path}")

    if type_id is None:
        type_id = FileType.for_extension(Path(file_path).suffix)

    if type_id == FileType.IMAGE:
        width, height = get_image_dimensions(file_path)
        return {'dimension_x': width, 'dimension_y': height, 'duration': None}

    if type_id in (FileType.VIDEO, FileType.AUDIO):
        return probe_media(file_path)

    return {'dimension_x': None, 'dimension_y': None, 'duration': None}
