"""Tests for the FileField form field type."""
import pytest

from file_manager.fields import FileField, FieldConfigurationError, get_file_field
from file_manager.models import FileType
from tests.conftest import T0


class FormBuilder:
    def __init__(self):
        self.fields = []

    def add(self, name, form_type, options):
        self.fields.append((name, form_type, options))


@pytest.fixture
def field(loader, translator, storage):
    return FileField('hero_image', loader=loader, translator=translator, storage=storage)


def test_str_is_public_path(field, insert_file):
    file_id = insert_file('logo.png')
    field.set_value(file_id)

    assert str(field) == '/media/files/logo.png'


def test_str_empty_when_unresolved(field, insert_file):
    assert str(field) == ''

    field.set_value(999)
    assert str(field) == ''

    deleted = insert_file('old.png', deleted_at=T0, deleted_by=1)
    field.set_value(deleted)
    assert str(field) == ''


def test_url_and_alt_text(field, insert_file):
    file_id = insert_file('logo.png', alt_text='Our logo')
    field.set_value(file_id)

    assert field.get_url() == 'public://files/logo.png'
    assert field.get_alt_text() == 'Our logo'


def test_url_and_alt_text_default_to_empty(field):
    field.set_value(999)

    assert field.get_url() == ''
    assert field.get_alt_text() == ''
    assert field.get_file() is None


def test_field_and_form_types(field):
    assert field.get_field_type() == 'file'
    assert field.get_form_type() == 'file_manager_file'


def test_choices_sorted_by_name(field, insert_file):
    c = insert_file('cherry.png')
    a = insert_file('apple.png')
    b = insert_file('banana.png')
    insert_file('aardvark.png', deleted_at=T0, deleted_by=1)

    choices = field.get_field_options()['choices']

    assert list(choices.items()) == [(a, 'apple.png'), (b, 'banana.png'), (c, 'cherry.png')]


def test_choices_filtered_by_allowed_types(field, insert_file):
    image = insert_file('photo.png', type_id=FileType.IMAGE)
    insert_file('report.pdf', type_id=FileType.DOCUMENT)
    video = insert_file('clip.mp4', type_id=FileType.VIDEO)

    field.set_allowed_types([FileType.IMAGE, FileType.VIDEO])
    options = field.get_field_options()

    assert list(options['choices']) == [video, image]
    assert options['allowed_types'] == [FileType.IMAGE, FileType.VIDEO]


def test_single_allowed_type(field, insert_file):
    insert_file('photo.png', type_id=FileType.IMAGE)
    doc = insert_file('report.pdf', type_id=FileType.DOCUMENT)

    assert field.set_allowed_types(FileType.DOCUMENT) is field
    assert field.get_allowed_types() == frozenset([FileType.DOCUMENT])
    assert list(field.get_field_options()['choices']) == [doc]


def test_choices_memoized_until_filter_changes(field, insert_file):
    image = insert_file('photo.png', type_id=FileType.IMAGE)
    doc = insert_file('report.pdf', type_id=FileType.DOCUMENT)

    first = field.get_field_options()['choices']
    insert_file('later.png', type_id=FileType.IMAGE)

    assert field.get_field_options()['choices'] == first

    field.set_allowed_types(FileType.DOCUMENT)
    assert list(field.get_field_options()['choices']) == [doc]

    field.set_allowed_types(None)
    assert image in field.get_field_options()['choices']
    assert len(field.get_field_options()['choices']) == 3


def test_field_options_defaults_and_overrides(loader, translator, insert_file):
    field = FileField('hero', loader=loader, translator=translator, required=True)
    options = field.get_field_options()

    assert options['empty_value'] == 'Select a file...'
    assert options['allowed_types'] is False
    assert options['required'] is True
    assert options['label'] == 'Hero'

    field.set_field_options(empty_value='Pick one')
    assert field.get_field_options()['empty_value'] == 'Pick one'


def test_get_form_field(field):
    form = FormBuilder()
    field.get_form_field(form)

    name, form_type, options = form.fields[0]
    assert name == 'hero_image'
    assert form_type == 'file_manager_file'
    assert 'choices' in options


def test_missing_loader_fails_fast(translator):
    field = FileField('hero', translator=translator, value=1)

    with pytest.raises(FieldConfigurationError):
        str(field)
    with pytest.raises(FieldConfigurationError):
        field.get_field_options()


def test_missing_translator_fails_fast(loader):
    field = FileField('hero', loader=loader)

    with pytest.raises(FieldConfigurationError):
        field.get_field_options()


def test_empty_value_needs_no_loader():
    field = FileField('hero')
    assert field.get_file() is None
    assert str(field) == ''


def test_set_services_later(loader, translator, insert_file):
    file_id = insert_file('logo.png')
    field = FileField('hero', value=file_id)

    field.set_services(loader=loader, translator=translator)

    assert field.get_file().id == file_id
    # No storage handle configured on the field, the loader's handle is used
    assert str(field) == '/media/files/logo.png'


def test_get_file_field_factory(app, db, insert_file):
    file_id = insert_file('logo.png')

    field = get_file_field('hero', app, db, value=file_id)

    assert str(field) == '/files/logo.png'
    assert field.get_field_options()['empty_value'] == 'Select a file...'


def test_str_empty_for_malformed_s3_url(field, insert_file, caplog):
    file_id = insert_file('logo.png', url='s3://bucket-only')
    field.set_value(file_id)

    assert str(field) == ''
    assert 'Invalid S3 URL' in caplog.text


def test_str_empty_without_aws_credentials(field, insert_file, no_aws_credentials):
    file_id = insert_file('logo.png', url='s3://assets/logo.png')
    field.set_value(file_id)

    assert str(field) == ''
    assert field.get_url() == 's3://assets/logo.png'
