"""
File storage service: turns stored file URLs into public-facing paths.

Stored URLs use one of these forms:
    public://files/logo.png      served by the host under PUBLIC_URL_PREFIX
    s3://bucket/uploads/logo.png private S3 object, exposed through a presigned URL
    https://cdn.example.com/...  already public, returned unchanged
"""
import os
import posixpath
import boto3
from botocore.exceptions import BotoCoreError, ClientError
from typing import Optional, Tuple


PUBLIC_SCHEME = 'public://'
S3_SCHEME = 's3://'


class StorageError(Exception):
    """Base exception for storage errors."""
    pass


class FileStorage:
    """Resolves stored file URLs to public URLs."""

    def __init__(self, public_url_prefix: str = '', region: str = 'us-east-1',
                 aws_access_key: str = None, aws_secret_key: str = None,
                 presigned_expires: int = 3600):
        self.public_url_prefix = (public_url_prefix or '').rstrip('/')
        self.region = region
        self.presigned_expires = presigned_expires
        self._aws_access_key = aws_access_key
        self._aws_secret_key = aws_secret_key
        self._s3_client = None

    @property
    def s3_client(self):
        """S3 client, created on first use."""
        if self._s3_client is None:
            session_kwargs = {'region_name': self.region}
            if self._aws_access_key and self._aws_secret_key:
                session_kwargs['aws_access_key_id'] = self._aws_access_key
                session_kwargs['aws_secret_access_key'] = self._aws_secret_key
            self._s3_client = boto3.client('s3', **session_kwargs)
        return self._s3_client

    def get_public_url(self, url: Optional[str]) -> str:
        """
        Public-facing path for a stored URL.

        Args:
            url: Stored file URL

        Returns:
            Public URL string ('' for an empty URL)

        Raises:
            StorageError: If the S3 URL is malformed or cannot be presigned
        """
        if not url:
            return ''

        if url.startswith(PUBLIC_SCHEME):
            path = url[len(PUBLIC_SCHEME):].lstrip('/')
            return f"{self.public_url_prefix}/{path}"

        if url.startswith(S3_SCHEME):
            bucket, key = split_s3_url(url)
            try:
                return self.s3_client.generate_presigned_url(
                    'get_object',
                    Params={'Bucket': bucket, 'Key': key},
                    ExpiresIn=self.presigned_expires
                )
            except (ClientError, BotoCoreError) as e:
                raise StorageError(f"Failed to generate presigned URL: {e}")

        return url

    def get(self, url: str) -> 'StoredFile':
        """Transient handle for a stored URL."""
        return StoredFile(url, self)


class StoredFile:
    """Handle on a stored file (not persisted)."""

    def __init__(self, url: str, storage: FileStorage):
        self.url = url
        self._storage = storage

    @property
    def basename(self) -> str:
        path = self.url.split('://', 1)[-1]
        return posixpath.basename(path.rstrip('/'))

    @property
    def extension(self) -> str:
        return posixpath.splitext(self.basename)[1].lstrip('.').lower()

    @property
    def public_url(self) -> str:
        return self._storage.get_public_url(self.url)

    def __repr__(self):
        return f"StoredFile({self.url!r})"


def split_s3_url(url: str) -> Tuple[str, str]:
    """Split 's3://bucket/key' into (bucket, key)."""
    remainder = url[len(S3_SCHEME):]
    bucket, _, key = remainder.partition('/')
    if not bucket or not key:
        raise StorageError(f"Invalid S3 URL: {url}")
    return bucket, key


def get_file_storage(app=None) -> FileStorage:
    """
    Factory function to create FileStorage instance.

    Args:
        app: Flask app instance (optional)

    Returns:
        FileStorage instance
    """
    if app:
        prefix = app.config.get('PUBLIC_URL_PREFIX', '')
        region = app.config.get('AWS_REGION', 'us-east-1')
        access_key = app.config.get('AWS_ACCESS_KEY_ID')
        secret_key = app.config.get('AWS_SECRET_ACCESS_KEY')
        expires = app.config.get('PRESIGNED_URL_EXPIRES', 3600)
    else:
        prefix = os.getenv('PUBLIC_URL_PREFIX', '')
        region = os.getenv('AWS_REGION', 'us-east-1')
        access_key = os.getenv('AWS_ACCESS_KEY_ID')
        secret_key = os.getenv('AWS_SECRET_ACCESS_KEY')
        expires = int(os.getenv('PRESIGNED_URL_EXPIRES', '3600'))

    return FileStorage(prefix, region, access_key, secret_key, expires)
