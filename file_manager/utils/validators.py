"""
Validation utilities for request input.
"""
from typing import List, Optional


class ValidationError(Exception):
    """Validation error exception."""
    pass


MAX_TAG_LENGTH = 255
MAX_ALT_TEXT_LENGTH = 1000


def parse_tags(raw: Optional[str]) -> List[str]:
    """
    Parse a comma-separated tag string.

    Args:
        raw: e.g. " logo, brand ,,header"

    Returns:
        Trimmed, non-empty tags in input order, e.g. ['logo', 'brand', 'header']

    Raises:
        ValidationError if a tag is too long
    """
    if not raw:
        return []

    tags = [tag.strip() for tag in raw.split(',')]
    tags = [tag for tag in tags if tag]

    for tag in tags:
        if len(tag) > MAX_TAG_LENGTH:
            raise ValidationError(f"Tag '{tag[:20]}...' exceeds {MAX_TAG_LENGTH} characters")
    return tags


def validate_alt_text(alt_text: Optional[str]) -> Optional[str]:
    """
    Validate alt text length.

    Returns:
        The alt text, stripped

    Raises:
        ValidationError if too long
    """
    if alt_text is None:
        return None
    alt_text = alt_text.strip()
    if len(alt_text) > MAX_ALT_TEXT_LENGTH:
        raise ValidationError(f"Alt text exceeds {MAX_ALT_TEXT_LENGTH} characters")
    return alt_text


def parse_optional_int(value: Optional[str], name: str) -> Optional[int]:
    """
    Parse an optional integer query parameter.

    Raises:
        ValidationError if present but not an integer
    """
    if value is None or value == '':
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"'{name}' must be an integer")
