"""Image upload endpoint."""

from __future__ import annotations

from fastapi import APIRouter, File, UploadFile

from inkpost.api.dependencies import error_responses
from inkpost.core.errors import InputValidationError
from inkpost.core.settings import settings
from inkpost.schemas.upload import UploadResponse
from inkpost.services.upload_service import store_upload

router = APIRouter(tags=["uploads"], responses=error_responses(400, 500))


@router.post("/upload", response_model=UploadResponse)
async def upload_image(image: UploadFile | None = File(None)) -> UploadResponse:
    """Store a single uploaded image and return its public URL."""
    if image is None or not image.filename:
        raise InputValidationError("No file uploaded")

    content = await image.read()
    stored_name = store_upload(image.filename, content, settings.upload_dir)
    prefix = settings.upload_url_prefix.rstrip("/")
    return UploadResponse(url=f"{prefix}/{stored_name}")
