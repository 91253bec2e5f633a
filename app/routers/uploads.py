# =============================================================================
# app/routers/uploads.py - Image Upload Endpoint
# =============================================================================
# Proxies image uploads to the Supabase Storage bucket and returns the
# public URLs. Admin only.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import BaseModel

from app.auth import require_admin
from app.dependencies import StorageDep
from core.services import UploadService

logger = logging.getLogger(__name__)

router = APIRouter()


class UploadResponse(BaseModel):
    """Public URLs of the stored images, in upload order."""
    links: list[str]


@router.post("", response_model=UploadResponse, dependencies=[Depends(require_admin)])
async def upload_images(
    storage: StorageDep,
    files: Annotated[list[UploadFile] | None, File(description="1 to 10 images")] = None,
    folder: Annotated[str | None, Form(description="projects or blogs")] = None,
):
    """
    Upload images to object storage.

    This endpoint:
    1. Checks the folder and the number of files
    2. Checks type (JPG, PNG, WEBP, GIF) and size (5MB) of every file
    3. Stores the files one by one and collects their public URLs

    Nothing is stored unless every file passes step 2. A storage failure
    part-way through leaves the earlier files in the bucket.
    """
    links = await UploadService(storage).upload_images(folder, files or [])
    return UploadResponse(links=links)
