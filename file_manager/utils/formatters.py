"""
Formatting utilities for display.
"""
from datetime import datetime
from typing import Optional


def format_timestamp(timestamp: Optional[datetime]) -> str:
    """
    Format a datetime for display.

    Args:
        timestamp: Timezone-aware datetime (UTC)

    Returns:
        'YYYY-MM-DD HH:MM:SS UTC', or 'N/A' when missing
    """
    if not timestamp:
        return 'N/A'
    return timestamp.strftime('%Y-%m-%d %H:%M:%S UTC')


def format_file_size(size_bytes: Optional[int]) -> str:
    """
    Format file size in bytes to human-readable string.

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted size string (e.g., "1.5 MB")
    """
    size_bytes = size_bytes or 0
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.1f} MB"
    else:
        return f"{size_bytes / (1024 * 1024 * 1024):.2f} GB"


def format_duration(duration_seconds: Optional[float]) -> str:
    """
    Format duration in seconds to human-readable string.

    Returns:
        Formatted duration string (e.g., "2h 15m", "1m 30s", "45s"), or
        '' for files without a duration
    """
    if duration_seconds is None:
        return ''
    if duration_seconds < 0:
        return '0s'

    total_seconds = int(duration_seconds)
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60

    if hours > 0:
        if minutes > 0:
            return f"{hours}h {minutes}m"
        else:
            return f"{hours}h"
    elif minutes > 0:
        return f"{minutes}m {seconds}s"
    else:
        return f"{seconds}s"


def format_dimensions(width: Optional[int], height: Optional[int]) -> str:
    """'1920x1080', or '' when either side is unknown."""
    if not width or not height:
        return ''
    return f"{width}x{height}"
