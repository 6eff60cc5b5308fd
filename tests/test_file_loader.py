"""Tests for FileLoader lookups, soft deletion and row decoding."""
from datetime import datetime, timezone

import pytest

from file_manager.models import Visibility
from file_manager.services.file_loader import FileDecodeError, FileLoader, file_from_row
from tests.conftest import T0


class User:
    def __init__(self, id):
        self.id = id


def test_get_by_id_hydrates_record(loader, insert_file):
    insert_file('Logo.png', file_id=42, type_id=3)

    file = loader.get_by_id(42)

    assert file.id == 42
    assert file.name == 'Logo.png'
    assert file.tags == []
    assert file.type_id == 3
    assert file.authorship.deleted_at is None
    assert file.authorship.deleted_by is None
    assert file.authorship.created_at == datetime.fromtimestamp(T0, tz=timezone.utc)
    assert file.authorship.created_by == 1


def test_get_by_id_missing_returns_none(loader):
    assert loader.get_by_id(999) is None


def test_get_by_id_non_numeric_returns_none(loader):
    assert loader.get_by_id('abc') is None


def test_get_by_id_accepts_numeric_string(loader, insert_file):
    file_id = insert_file('a.png')
    assert loader.get_by_id(str(file_id)).id == file_id


def test_deleted_file_hidden_by_default(loader, insert_file):
    file_id = insert_file('old.png', deleted_at=T0 + 60, deleted_by=5)
    assert loader.get_by_id(file_id) is None


def test_include_deleted_toggle(loader, insert_file):
    insert_file('old.png', file_id=7, deleted_at=T0 + 60, deleted_by=5)

    file = loader.include_deleted(True).get_by_id(7)

    assert file is not None
    assert file.authorship.deleted_at == datetime.fromtimestamp(T0 + 60, tz=timezone.utc)
    assert file.authorship.deleted_by == 5
    assert file.authorship.is_deleted

    # The toggle persists until it is reset
    assert loader.get_by_id(7) is not None
    assert loader.include_deleted(False).get_by_id(7) is None


def test_visibility_argument_overrides_toggle(loader, insert_file):
    file_id = insert_file('old.png', deleted_at=T0, deleted_by=2)

    assert loader.get_by_id(file_id, visibility=Visibility.INCLUDE_DELETED) is not None
    assert loader.visibility is Visibility.LIVE_ONLY
    assert loader.get_by_id(file_id) is None

    loader.include_deleted(True)
    assert loader.get_by_id(file_id, visibility=Visibility.LIVE_ONLY) is None


def test_get_by_id_collection_drops_unresolved(loader, insert_file):
    first = insert_file('a.png')
    second = insert_file('b.png')
    deleted = insert_file('c.png', deleted_at=T0, deleted_by=1)

    files = loader.get_by_id([second, 999, deleted, first])

    assert [f.id for f in files] == [second, first]


def test_get_by_id_empty_collection(loader):
    assert loader.get_by_id([]) == []


def test_tags_attached_in_store_order(loader, insert_file):
    file_id = insert_file('a.png', tags=['zebra', 'apple', 'mango'])
    assert loader.get_by_id(file_id).tags == ['zebra', 'apple', 'mango']


def test_updated_pair_absent_until_edited(loader, insert_file):
    plain = insert_file('a.png')
    edited = insert_file('b.png', updated_at=T0 + 10, updated_by=3)

    assert loader.get_by_id(plain).authorship.updated_at is None
    authorship = loader.get_by_id(edited).authorship
    assert authorship.updated_at == datetime.fromtimestamp(T0 + 10, tz=timezone.utc)
    assert authorship.updated_by == 3


def test_get_by_type(loader, insert_file):
    image = insert_file('a.png', type_id=1)
    insert_file('b.pdf', type_id=2)
    insert_file('c.png', type_id=1, deleted_at=T0, deleted_by=1)

    assert [f.id for f in loader.get_by_type(1)] == [image]
    assert loader.get_by_type(4) == []


def test_get_all_excludes_deleted(loader, insert_file):
    live = insert_file('a.png')
    insert_file('b.png', deleted_at=T0, deleted_by=1)

    assert [f.id for f in loader.get_all()] == [live]
    assert len(loader.get_all(visibility=Visibility.INCLUDE_DELETED)) == 2


def test_get_all_empty(loader):
    assert loader.get_all() == []


def test_get_by_user_accepts_id_or_object(loader, insert_file):
    mine = insert_file('a.png', created_by=10)
    insert_file('b.png', created_by=11)

    assert [f.id for f in loader.get_by_user(10)] == [mine]
    assert [f.id for f in loader.get_by_user(User(10))] == [mine]
    assert loader.get_by_user(12) == []


def test_search_matches_names_and_tags_with_or(loader, insert_file):
    by_name = insert_file('alpha.png')
    by_tag = insert_file('header.png', tags=['beta'])
    sounds_alike = insert_file('alfa-logo.png')
    insert_file('gamma.png', tags=['delta'])

    ids = {f.id for f in loader.get_by_search_term('alpha beta')}

    assert ids == {by_name, by_tag, sounds_alike}


def test_search_returns_each_file_once(loader, insert_file):
    file_id = insert_file('alpha.png', tags=['alpha', 'alfa', 'beta'])

    files = loader.get_by_search_term('alpha beta')

    assert [f.id for f in files] == [file_id]


def test_search_excludes_deleted(loader, insert_file):
    insert_file('alpha.png', deleted_at=T0, deleted_by=1)
    assert loader.get_by_search_term('alpha') == []


def test_search_blank_term(loader, insert_file):
    insert_file('alpha.png')
    assert loader.get_by_search_term('   ') == []
    assert loader.get_by_search_term('') == []


def test_storage_handle_attached(loader, insert_file):
    file_id = insert_file('logo.png')
    file = loader.get_by_id(file_id)

    assert file.file.basename == 'logo.png'
    assert file.file.public_url == '/media/files/logo.png'


def test_loader_without_storage(db, insert_file):
    file_id = insert_file('logo.png')
    assert FileLoader(db).get_by_id(file_id).file is None


def test_file_from_row_missing_columns():
    with pytest.raises(FileDecodeError):
        file_from_row({'file_id': 1, 'url': 'public://a.png'})


def test_file_from_row_malformed_timestamp():
    row = {'file_id': 1, 'url': 'public://a.png', 'name': 'a.png', 'created_at': 'yesterday'}
    with pytest.raises(FileDecodeError):
        file_from_row(row)


def test_file_from_row_malformed_id():
    row = {'file_id': '1', 'url': 'public://a.png', 'name': 'a.png', 'created_at': T0}
    with pytest.raises(FileDecodeError):
        file_from_row(row)


def test_file_from_row_minimal():
    row = {'file_id': 1, 'url': 'public://a.png', 'name': 'a.png', 'created_at': T0}
    file = file_from_row(row, ['x'])

    assert file.id == 1
    assert file.tags == ['x']
    assert file.file_size == 0
    assert file.authorship.created_by is None
