"""
Translation service for user-facing strings.
"""
import logging
from typing import Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = 'en'

MESSAGES: Dict[str, Dict[str, str]] = {
    'en': {
        'file_manager.select.default': 'Select a file...',
        'file_manager.not_found': 'File {file_id} could not be found.',
        'file_manager.edit.success': '{name} was updated successfully',
        'file_manager.edit.error': '{name} could not be updated.',
        'file_manager.delete.success': '{name} was deleted. <a href="{restore_url}">Undo</a>',
        'file_manager.delete.error': '{name} could not be deleted.',
        'file_manager.restore.success': '{name} was restored successfully',
        'file_manager.restore.error': '{name} could not be restored.',
    },
}


class Translator:
    """Looks up localized strings by key."""

    def __init__(self, locale: str = DEFAULT_LOCALE,
                 catalog: Optional[Dict[str, Dict[str, str]]] = None):
        self.locale = locale
        self.catalog = catalog if catalog is not None else MESSAGES

    def trans(self, key: str, **params) -> str:
        """
        Translate a key, formatting it with any parameters given.

        Falls back to the default locale, then to the key itself.
        """
        message = self.catalog.get(self.locale, {}).get(key)
        if message is None:
            message = self.catalog.get(DEFAULT_LOCALE, {}).get(key)
        if message is None:
            logger.debug(f"Missing translation for '{key}' ({self.locale})")
            return key
        return message.format(**params) if params else message


def get_translator(app=None) -> Translator:
    """Factory function to create a Translator for the configured locale."""
    locale = app.config.get('DEFAULT_LOCALE', DEFAULT_LOCALE) if app else DEFAULT_LOCALE
    return Translator(locale)
