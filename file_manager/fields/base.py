"""
Base class for form field types that other entities embed.
"""
from typing import Any, Dict, Optional


class Field:
    """A named value with options for a form builder."""

    FIELD_TYPE = 'text'
    FORM_TYPE = 'text'

    def __init__(self, name: str, label: Optional[str] = None, value: Any = None,
                 **field_options):
        self._name = name
        self._label = label or name.replace('_', ' ').capitalize()
        self._value = value
        self._field_options: Dict[str, Any] = dict(field_options)

    def get_name(self) -> str:
        return self._name

    def get_label(self) -> str:
        return self._label

    def get_value(self) -> Any:
        return self._value

    def set_value(self, value: Any) -> 'Field':
        self._value = value
        return self

    def get_field_type(self) -> str:
        return self.FIELD_TYPE

    def get_form_type(self) -> str:
        return self.FORM_TYPE

    def set_field_options(self, **options) -> 'Field':
        self._field_options.update(options)
        return self

    def get_field_options(self) -> Dict[str, Any]:
        options = {'label': self._label}
        options.update(self._field_options)
        return options

    def get_form_field(self, form):
        """Add this field to a form builder exposing ``add(name, type, options)``."""
        form.add(self.get_name(), self.get_form_type(), self.get_field_options())

    def __str__(self) -> str:
        return '' if self._value is None else str(self._value)
