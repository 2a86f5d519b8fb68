"""
Inkpost Backend — Cover Image Route
====================================

What:  GET /uploads/{path} serves stored cover images read-only.
How:   Resolves the path inside UPLOAD_DIR and streams it with FileResponse,
       which picks the content type from the file suffix (the reason uploads
       are renamed to keep their extension).
"""

from fastapi import APIRouter
from fastapi.responses import FileResponse

from inkpost.exceptions import NotFoundError, ValidationError
from inkpost.services.file_service import UPLOAD_URL_PREFIX, file_service

router = APIRouter(tags=["Uploads"])


@router.get(
    f"/{UPLOAD_URL_PREFIX}/{{file_path:path}}",
    summary="Serve uploaded cover images",
    responses={
        200: {"description": "Image file"},
        404: {"description": "File not found"},
    },
)
async def serve_upload(file_path: str) -> FileResponse:
    """
    Security:
        - The resolved path must stay inside UPLOAD_DIR (no ../ escapes)
        - Only regular files are served
    """
    upload_root = file_service.upload_dir
    full_path = (upload_root / file_path).resolve()

    if not full_path.is_relative_to(upload_root):
        raise ValidationError(message="Invalid file path")

    if not full_path.is_file():
        raise NotFoundError(resource="file", resource_id=file_path)

    return FileResponse(
        path=str(full_path),
        headers={"Cache-Control": "public, max-age=86400"},
    )
