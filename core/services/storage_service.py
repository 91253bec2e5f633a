# =============================================================================
# core/services/storage_service.py - Supabase Storage Operations
# =============================================================================
# Writes uploaded images to a Supabase Storage bucket and resolves their
# public URLs.
#
# The Supabase client is created lazily on first use with the service_role
# key, so building the app (and running tests with a fake storage) never
# touches the network.
# =============================================================================

import logging
from typing import Any

from supabase import Client, create_client

from app.exceptions import InternalError, StorageUploadError

logger = logging.getLogger(__name__)


class StorageService:
    """
    Service for Supabase Storage operations.

    Example:
        storage = StorageService.from_settings(settings)
        storage.upload("projects/abc-cover.png", content, "image/png")
        url = storage.get_public_url("projects/abc-cover.png")
    """

    def __init__(self, url: str, service_role_key: str, bucket: str):
        self.url = url
        self.bucket = bucket
        self._service_role_key = service_role_key
        self._client: Client | None = None

    @classmethod
    def from_settings(cls, settings) -> "StorageService":
        return cls(
            url=settings.SUPABASE_URL,
            service_role_key=settings.SUPABASE_SERVICE_ROLE_KEY,
            bucket=settings.SUPABASE_STORAGE_BUCKET,
        )

    @property
    def client(self) -> Client:
        """
        Get or create the Supabase client.

        Raises:
            InternalError: If client creation fails
        """
        if self._client is None:
            try:
                self._client = create_client(self.url, self._service_role_key)
                logger.info("Supabase storage client initialized")
            except Exception as e:
                logger.error(f"Failed to create Supabase client: {e}")
                raise InternalError("Storage is not available") from e
        return self._client

    def upload(self, path: str, content: bytes, content_type: str) -> Any:
        """
        Upload raw bytes to the bucket. Existing objects are never replaced.

        Args:
            path: Object path inside the bucket
            content: File bytes
            content_type: MIME type stored with the object

        Raises:
            StorageUploadError: If upload fails
        """
        bucket = self.client.storage.from_(self.bucket)

        try:
            response = bucket.upload(
                path=path,
                file=content,
                file_options={"content-type": content_type, "upsert": "false"},
            )
        except Exception as e:
            logger.error(f"Storage upload failed for {path}: {e}")
            raise StorageUploadError(str(e)) from e

        logger.info(f"Uploaded file to storage: {self.bucket}/{path}")
        return response

    def get_public_url(self, path: str) -> str:
        """
        Public URL of an object.

        Raises:
            InternalError: If the URL cannot be resolved
        """
        url = self.client.storage.from_(self.bucket).get_public_url(path)
        if not url:
            raise InternalError("Failed to resolve uploaded image URL")
        return url
