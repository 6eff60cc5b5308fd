"""
Test configuration for the file manager.
"""
import pytest
from botocore.exceptions import NoCredentialsError

from file_manager import create_app
from file_manager.database import get_db, reset_db
from file_manager.services.file_loader import FileLoader
from file_manager.services.storage import FileStorage
from file_manager.services.translator import Translator

T0 = 1_700_000_000


@pytest.fixture
def app(tmp_path):
    reset_db()
    app = create_app('testing', {'DATABASE_PATH': tmp_path / 'file_manager.db'})
    yield app
    reset_db()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    return get_db()


@pytest.fixture
def storage():
    return FileStorage('/media')


@pytest.fixture
def loader(db, storage):
    return FileLoader(db, storage)


@pytest.fixture
def translator():
    return Translator('en')


@pytest.fixture
def insert_file(db):
    """Insert a raw `file` row (optionally with a fixed id) plus tags."""

    def _insert(name='file.png', file_id=None, url=None, type_id=1, created_by=1,
                created_at=T0, deleted_at=None, deleted_by=None, tags=(), **columns):
        row = {
            'url': url or f'public://files/{name}',
            'name': name,
            'extension': name.rsplit('.', 1)[-1] if '.' in name else None,
            'file_size': 1024,
            'created_at': created_at,
            'created_by': created_by,
            'type_id': type_id,
            'deleted_at': deleted_at,
            'deleted_by': deleted_by,
        }
        if file_id is not None:
            row['file_id'] = file_id
        row.update(columns)

        names = ', '.join(row)
        placeholders = ', '.join('?' for _ in row)
        with db.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f'INSERT INTO file ({names}) VALUES ({placeholders})',
                           tuple(row.values()))
            new_id = cursor.lastrowid
            for tag in tags:
                cursor.execute('INSERT INTO file_tag (file_id, tag_name) VALUES (?, ?)',
                               (new_id, tag))
        return new_id

    return _insert


class NoCredentialsS3Client:
    """S3 client stand-in for an environment without AWS credentials."""

    def generate_presigned_url(self, operation, Params, ExpiresIn):
        raise NoCredentialsError()


@pytest.fixture
def no_aws_credentials(monkeypatch):
    """Every S3 client created by FileStorage fails with NoCredentialsError."""
    monkeypatch.setattr('file_manager.services.storage.boto3.client',
                        lambda *args, **kwargs: NoCredentialsS3Client())
