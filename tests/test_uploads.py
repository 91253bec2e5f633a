# =============================================================================
# tests/test_uploads.py - Image Upload Tests
# =============================================================================
# Tests for the upload pipeline and POST /api/uploads:
# - Object path naming
# - Count, type and size checks happen before any storage call
# - Partial failure leaves earlier files stored
# - Oversized request bodies are rejected before routing
#
# Run with: pytest tests/test_uploads.py -v
# =============================================================================

import re

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from core.services.upload_service import (
    MAX_FILE_SIZE_BYTES,
    build_object_path,
    sanitize_file_name,
)
from tests.conftest import PUBLIC_URL_PREFIX

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32

UUID_PATTERN = r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"


def image(name="cover.png", content=PNG_BYTES, content_type="image/png"):
    return ("files", (name, content, content_type))


# =============================================================================
# Helper Function Tests
# =============================================================================

class TestObjectPaths:
    """Tests for file name sanitizing and object paths."""

    def test_sanitize_file_name(self):
        assert sanitize_file_name("My Cover (final).PNG") == "my-cover-final-.png"
        assert sanitize_file_name("   ") == "file"

    def test_object_path(self):
        path = build_object_path("projects", "Hero Shot.JPG", "image/jpeg")

        assert re.fullmatch(rf"projects/{UUID_PATTERN}-hero-shot\.jpg", path)

    def test_extension_falls_back_to_mime(self):
        path = build_object_path("blogs", "screenshot", "image/webp")

        assert re.fullmatch(rf"blogs/{UUID_PATTERN}-screenshot\.webp", path)

    def test_paths_are_unique(self):
        assert build_object_path("blogs", "a.png", "image/png") != build_object_path("blogs", "a.png", "image/png")


# =============================================================================
# Endpoint Tests
# =============================================================================

class TestUploadEndpoint:
    """Tests for POST /api/uploads."""

    def test_upload_returns_public_links(self, client, auth_headers, fake_storage):
        response = client.post(
            "/api/uploads",
            data={"folder": "projects"},
            files=[image("one.png"), image("two.gif", content_type="image/gif")],
            headers=auth_headers,
        )

        assert response.status_code == 200, response.text
        links = response.json()["links"]
        assert len(links) == 2
        assert all(link.startswith(f"{PUBLIC_URL_PREFIX}projects/") for link in links)
        assert [content_type for _, _, content_type in fake_storage.uploads] == ["image/png", "image/gif"]

    def test_requires_admin(self, client, fake_storage):
        response = client.post("/api/uploads", data={"folder": "projects"}, files=[image()])

        assert response.status_code == 401
        assert fake_storage.calls == 0

    def test_too_many_files(self, client, auth_headers, fake_storage):
        response = client.post(
            "/api/uploads",
            data={"folder": "blogs"},
            files=[image(f"{i}.png") for i in range(11)],
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Upload between 1 and 10 images"
        assert fake_storage.calls == 0

    def test_no_files(self, client, auth_headers, fake_storage):
        response = client.post("/api/uploads", data={"folder": "blogs"}, headers=auth_headers)

        assert response.status_code == 400
        assert fake_storage.calls == 0

    @pytest.mark.parametrize("folder", ["avatars", "", None])
    def test_invalid_folder(self, client, auth_headers, fake_storage, folder):
        data = {} if folder is None else {"folder": folder}

        response = client.post("/api/uploads", data=data, files=[image()], headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "folder must be either projects or blogs"
        assert fake_storage.calls == 0

    def test_disallowed_type_rejects_whole_batch(self, client, auth_headers, fake_storage):
        response = client.post(
            "/api/uploads",
            data={"folder": "projects"},
            files=[image(), image("notes.txt", b"hello", "text/plain")],
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Only JPG, PNG, WEBP, and GIF are allowed"
        assert fake_storage.calls == 0

    def test_oversized_file(self, client, auth_headers, fake_storage):
        response = client.post(
            "/api/uploads",
            data={"folder": "projects"},
            files=[image(content=b"\x00" * (MAX_FILE_SIZE_BYTES + 1))],
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert fake_storage.calls == 0

    def test_empty_file(self, client, auth_headers, fake_storage):
        response = client.post(
            "/api/uploads", data={"folder": "projects"}, files=[image(content=b"")], headers=auth_headers
        )

        assert response.status_code == 400
        assert fake_storage.calls == 0

    def test_storage_failure_keeps_earlier_files(self, client, auth_headers, fake_storage):
        fake_storage.fail_on_call = 1

        response = client.post(
            "/api/uploads",
            data={"folder": "blogs"},
            files=[image("a.png"), image("b.png"), image("c.png")],
            headers=auth_headers,
        )

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INTERNAL_ERROR"
        assert response.json()["error"]["message"] == "Failed to upload image"
        assert len(fake_storage.uploads) == 1
        assert fake_storage.calls == 2


class TestBodySizeLimit:
    """Tests for the Content-Length guard."""

    def test_oversized_body_is_rejected_before_routing(self, settings):
        app = create_app(settings.model_copy(update={"MAX_BODY_SIZE_MB": 1}))
        client = TestClient(app)

        response = client.post(
            "/api/uploads",
            content=b"\x00" * (1024 * 1024 + 1),
            headers={"Content-Type": "application/octet-stream"},
        )

        assert response.status_code == 400
        assert response.json() == {
            "error": {
                "code": "BAD_REQUEST",
                "message": "Upload payload too large. Max 10 images, 5MB each.",
            }
        }
