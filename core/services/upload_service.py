# =============================================================================
# core/services/upload_service.py - Image Upload Pipeline
# =============================================================================
# Validates a batch of uploaded images and stores them in the bucket.
#
# Every check (folder, file count, type, size) runs before the first storage
# call. Files are then stored one at a time; if file N fails, files 1..N-1
# stay in the bucket and the request fails with INTERNAL_ERROR.
# =============================================================================

import asyncio
import logging
import re
import uuid
from dataclasses import dataclass
from typing import Protocol, Sequence

from app.exceptions import BadRequestError
from core.services.storage_service import StorageService

logger = logging.getLogger(__name__)

MAX_FILES_PER_REQUEST = 10
MAX_FILE_SIZE_BYTES = 5 * 1024 * 1024

ALLOWED_FOLDERS = ("projects", "blogs")

MIME_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}

_UNSAFE_CHARACTERS = re.compile(r"[^a-z0-9._-]")
_DASH_RUNS = re.compile(r"-+")
_EXTENSION = re.compile(r"\.[^.]+$")


class UploadedFile(Protocol):
    """What the service needs from an upload (FastAPI's UploadFile fits)."""

    filename: str | None
    content_type: str | None

    async def read(self) -> bytes: ...


@dataclass(frozen=True)
class PreparedUpload:
    path: str
    content: bytes
    content_type: str


# =============================================================================
# Helper Functions
# =============================================================================

def sanitize_file_name(name: str) -> str:
    """
    Lowercase a filename and replace anything outside [a-z0-9._-] with '-'.

    Example:
        sanitize_file_name("My Cover (final).PNG")  # "my-cover-final-.png"
    """
    safe = _UNSAFE_CHARACTERS.sub("-", name.strip().lower())
    safe = _DASH_RUNS.sub("-", safe)
    return safe or "file"


def build_object_path(folder: str, filename: str, content_type: str) -> str:
    """<folder>/<uuid4>-<sanitized stem>.<extension>"""
    safe_name = sanitize_file_name(filename)

    extension = ""
    if "." in safe_name:
        extension = safe_name.rsplit(".", 1)[-1]
    if not extension:
        extension = MIME_EXTENSIONS.get(content_type, "bin")

    stem = _EXTENSION.sub("", safe_name) or "file"
    return f"{folder}/{uuid.uuid4()}-{stem}.{extension}"


def parse_upload_folder(value: object) -> str:
    folder = value.strip() if isinstance(value, str) else None
    if folder not in ALLOWED_FOLDERS:
        raise BadRequestError("folder must be either projects or blogs")
    return folder


def check_file_count(count: int) -> None:
    if count < 1 or count > MAX_FILES_PER_REQUEST:
        raise BadRequestError(f"Upload between 1 and {MAX_FILES_PER_REQUEST} images")


# =============================================================================
# Service
# =============================================================================

class UploadService:
    """Service that turns a multipart batch into public image URLs."""

    def __init__(self, storage: StorageService):
        self.storage = storage

    async def _prepare(self, folder: str, file: UploadedFile) -> PreparedUpload:
        content_type = file.content_type or ""
        if content_type not in MIME_EXTENSIONS:
            raise BadRequestError("Only JPG, PNG, WEBP, and GIF are allowed")

        content = await file.read()
        if not content:
            raise BadRequestError("Uploaded file is empty")
        if len(content) > MAX_FILE_SIZE_BYTES:
            raise BadRequestError("Each image must be 5MB or smaller")

        return PreparedUpload(
            path=build_object_path(folder, file.filename or "", content_type),
            content=content,
            content_type=content_type,
        )

    async def upload_images(self, folder: object, files: Sequence[UploadedFile]) -> list[str]:
        """
        Validate and store a batch of images.

        Args:
            folder: "projects" or "blogs"
            files: uploaded files from the "files" form field

        Returns:
            Public URLs in upload order

        Raises:
            BadRequestError: invalid folder, file count, type, size or empty file
            StorageUploadError: the bucket rejected a file
        """
        folder = parse_upload_folder(folder)
        check_file_count(len(files))

        prepared = [await self._prepare(folder, file) for file in files]

        links: list[str] = []
        for upload in prepared:
            # Supabase storage calls are blocking
            await asyncio.to_thread(self.storage.upload, upload.path, upload.content, upload.content_type)
            links.append(await asyncio.to_thread(self.storage.get_public_url, upload.path))

        logger.info(f"Uploaded {len(links)} image(s) to {folder}")
        return links
