"""
Form field types provided by the file manager.
"""
from file_manager.fields.base import Field
from file_manager.fields.file_field import FileField, FieldConfigurationError, get_file_field

__all__ = ['Field', 'FileField', 'FieldConfigurationError', 'get_file_field']
