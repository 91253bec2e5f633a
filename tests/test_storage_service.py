# =============================================================================
# tests/test_storage_service.py - Supabase Storage Wrapper Tests
# =============================================================================
# Tests for StorageService with the Supabase client mocked out.
#
# Run with: pytest tests/test_storage_service.py -v
# =============================================================================

from unittest.mock import MagicMock, patch

import pytest

from app.exceptions import InternalError, StorageUploadError
from core.services.storage_service import StorageService


@pytest.fixture
def mock_client():
    """Patch create_client and return the fake Supabase client."""
    with patch("core.services.storage_service.create_client") as mock_create:
        client = MagicMock()
        mock_create.return_value = client
        yield client


@pytest.fixture
def storage():
    return StorageService(url="https://test-project.supabase.co", service_role_key="key", bucket="images")


class TestStorageService:
    """Tests for StorageService."""

    def test_client_is_created_lazily_once(self, storage):
        with patch("core.services.storage_service.create_client") as mock_create:
            assert mock_create.call_count == 0

            storage.get_public_url("a.png")
            storage.get_public_url("b.png")

            mock_create.assert_called_once_with("https://test-project.supabase.co", "key")

    def test_upload_never_overwrites(self, storage, mock_client):
        storage.upload("projects/x-cover.png", b"data", "image/png")

        mock_client.storage.from_.assert_called_with("images")
        mock_client.storage.from_.return_value.upload.assert_called_once_with(
            path="projects/x-cover.png",
            file=b"data",
            file_options={"content-type": "image/png", "upsert": "false"},
        )

    def test_upload_failure(self, storage, mock_client):
        mock_client.storage.from_.return_value.upload.side_effect = RuntimeError("Bucket not found")

        with pytest.raises(StorageUploadError) as exc_info:
            storage.upload("projects/x-cover.png", b"data", "image/png")

        assert exc_info.value.details == "Bucket not found"

    def test_public_url(self, storage, mock_client):
        mock_client.storage.from_.return_value.get_public_url.return_value = "https://cdn/images/a.png"

        assert storage.get_public_url("a.png") == "https://cdn/images/a.png"

    def test_client_creation_failure(self, storage):
        with patch("core.services.storage_service.create_client", side_effect=Exception("bad key")):
            with pytest.raises(InternalError) as exc_info:
                storage.upload("a.png", b"data", "image/png")

        assert exc_info.value.message == "Storage is not available"
