"""
A form field holding the id of a file in the file manager database.
"""
import logging
from typing import Any, Dict, Iterable, Optional, Union

from file_manager.fields.base import Field
from file_manager.models import File
from file_manager.services.storage import StorageError

logger = logging.getLogger(__name__)


class FieldConfigurationError(Exception):
    """A field was used before its services were supplied."""
    pass


class FileField(Field):
    """
    Field whose value is a file id.

    Renders as the file's public path and offers the stored files as
    choices, optionally limited to some file types. The loader and
    translator must be supplied (constructor or ``set_services``) before
    anything resolves the value.
    """

    FIELD_TYPE = 'file'
    FORM_TYPE = 'file_manager_file'

    def __init__(self, name: str, label: Optional[str] = None, value: Any = None,
                 loader=None, translator=None, storage=None, **field_options):
        super().__init__(name, label, value, **field_options)
        self._loader = loader
        self._translator = translator
        self._storage = storage
        self._allowed_types: Optional[frozenset] = None
        self._choices: Optional[Dict[int, str]] = None

    def set_services(self, loader=None, translator=None, storage=None) -> 'FileField':
        if loader is not None:
            self._loader = loader
            self._choices = None
        if translator is not None:
            self._translator = translator
        if storage is not None:
            self._storage = storage
        return self

    def __str__(self) -> str:
        """Public path to the file, or '' if it cannot be found."""
        file = self.get_file()
        if not file:
            return ''
        try:
            if file.file is not None:
                return file.file.public_url
            if self._storage is not None:
                return self._storage.get_public_url(file.url)
        except StorageError as e:
            logger.warning(f"No public URL for file {file.id}: {e}")
            return ''
        return file.url

    def get_url(self) -> str:
        file = self.get_file()
        return file.get_url() if file else ''

    def get_alt_text(self) -> str:
        file = self.get_file()
        return file.get_alt_text() if file else ''

    def set_allowed_types(self, types: Union[int, Iterable[int], None]) -> 'FileField':
        """Limit the choices to one file type or a collection of them."""
        if types is None:
            self._allowed_types = None
        elif isinstance(types, (int, str)):
            self._allowed_types = frozenset([int(types)])
        else:
            self._allowed_types = frozenset(int(t) for t in types)
        self._choices = None
        return self

    def get_allowed_types(self) -> Optional[frozenset]:
        return self._allowed_types

    def get_file(self) -> Optional[File]:
        if not self._value:
            return None
        if not isinstance(self._value, (int, str)):
            return None
        return self._require_loader().get_by_id(self._value)

    def get_field_options(self) -> Dict[str, Any]:
        if self._translator is None:
            raise FieldConfigurationError(
                f"Field '{self.get_name()}' has no translator; call set_services() first"
            )
        options = {
            'choices': self._get_choices(),
            'allowed_types': sorted(self._allowed_types) if self._allowed_types else False,
            'empty_value': self._translator.trans('file_manager.select.default'),
        }
        options.update(super().get_field_options())
        return options

    def _get_choices(self) -> Dict[int, str]:
        """Map of file id to name for the allowed types, sorted by name."""
        if self._choices is None:
            files = self._require_loader().get_all()
            choices = {}
            for file in files:
                if self._allowed_types and file.type_id not in self._allowed_types:
                    continue
                choices[file.id] = file.name
            self._choices = dict(sorted(choices.items(), key=lambda item: (item[1], item[0])))
            logger.debug(f"Built {len(self._choices)} file choices for '{self.get_name()}'")
        return self._choices

    def _require_loader(self):
        if self._loader is None:
            raise FieldConfigurationError(
                f"Field '{self.get_name()}' has no file loader; call set_services() first"
            )
        return self._loader


def get_file_field(name: str, app=None, db=None, **kwargs) -> FileField:
    """
    Factory function to create a FileField wired to the application services.

    Args:
        name: Field name
        app: Flask app instance (optional)
        db: Database instance (optional, defaults to the singleton)
        **kwargs: label, value and field options
    """
    from file_manager.services.file_loader import get_file_loader
    from file_manager.services.storage import get_file_storage
    from file_manager.services.translator import get_translator

    return FileField(
        name,
        loader=get_file_loader(app, db),
        translator=get_translator(app),
        storage=get_file_storage(app),
        **kwargs
    )
