"""
Object storage: thin wrapper over a Supabase Storage bucket.
"""

import logging
from supabase import Client

from study_buddy.core.exceptions import StorageError

logger = logging.getLogger(__name__)


class ObjectStorage:
    """Upload, resolve and remove objects in one bucket."""

    def __init__(self, client: Client, bucket: str):
        self.client = client
        self.bucket = bucket

    def upload(self, path: str, data: bytes, content_type: str) -> str:
        """Upload raw bytes and return the object's public URL.

        Raises:
            StorageError: If the storage API rejects the upload.
        """
        try:
            self.client.storage.from_(self.bucket).upload(
                path=path,
                file=data,
                file_options={"content-type": content_type, "upsert": "false"},
            )
        except Exception as e:
            logger.error(f"Storage upload failed for {path}: {e}")
            raise StorageError(f"Failed to upload file: {e}") from e

        logger.info(f"Uploaded {len(data)} bytes to {self.bucket}/{path}")
        return self.public_url(path)

    def public_url(self, path: str) -> str:
        return self.client.storage.from_(self.bucket).get_public_url(path)

    def remove(self, path: str) -> bool:
        """Delete an object. Failures are logged, not raised."""
        try:
            self.client.storage.from_(self.bucket).remove([path])
            return True
        except Exception as e:
            logger.warning(f"Could not remove {self.bucket}/{path}: {e}")
            return False
