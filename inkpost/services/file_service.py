"""
Inkpost Backend — Cover Upload Service
=======================================

What:  Stores uploaded cover images and removes them again on failure.
How:   Validates extension and size, writes the bytes under a generated
       name, then renames the file to carry the original extension so the
       static /uploads mount serves it with the right content type.
Who:   Called by PostService when a post is created or its cover replaced.

Upload Flow:
    client "holiday.PNG" ──▶ uploads/3f2a9c...   (raw write, generated name)
                         ──▶ uploads/3f2a9c....png (rename, extension appended)
                         ──▶ "uploads/3f2a9c....png" stored as Post.cover

    Names are uuid4 hex strings, so concurrent uploads never collide and no
    user input reaches the file system path.
"""

import logging
import os
import uuid
from pathlib import Path
from typing import Optional, Tuple

import aiofiles

from inkpost.config import settings
from inkpost.exceptions import FileStorageError, ValidationError

logger = logging.getLogger(__name__)

# URL prefix of the static mount; also the first segment of every stored cover path
UPLOAD_URL_PREFIX = "uploads"


class FileService:
    """
    Manages the cover image lifecycle on local disk.

    Directory Structure:
        <upload_dir>/
        ├── 3f2a9c0e....png
        └── b81d77aa....jpg
    """

    def __init__(self, upload_dir: Optional[str] = None):
        """
        Args:
            upload_dir: Override the configured directory (used in tests).
        """
        self.upload_dir = Path(upload_dir or settings.upload_dir).resolve()
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        logger.info("FileService initialized with upload_dir=%s", self.upload_dir)

    def validate_extension(self, filename: str) -> str:
        """
        Check the original filename's extension against the allow-list.

        Returns: Normalized extension (lowercase with dot).
        Raises:  ValidationError if the extension is missing or not allowed.
        """
        ext = Path(filename).suffix.lower()
        allowed = settings.allowed_extensions_set
        if ext not in allowed:
            raise ValidationError(
                message=(
                    f"File type '{ext or filename}' is not supported. "
                    f"Allowed types: {', '.join(sorted(allowed))}"
                ),
                field="file",
                context={"extension": ext, "allowed": sorted(allowed)},
            )
        return ext

    def validate_size(self, size: int) -> None:
        """
        Reject empty files and files over MAX_FILE_SIZE.

        Raises:
            ValidationError with a human-readable size message.
        """
        if size == 0:
            raise ValidationError(message="Uploaded file is empty.", field="file")

        if size > settings.max_file_size:
            max_mb = settings.max_file_size / (1024 * 1024)
            raise ValidationError(
                message=f"File size ({size / (1024 * 1024):.1f}MB) exceeds maximum of {max_mb:.0f}MB.",
                field="file",
                context={"max_size_mb": max_mb, "actual_size": size},
            )

    async def write_raw(self, content: bytes) -> Path:
        """
        Write the upload under a generated, extension-less name.

        Raises:
            FileStorageError if the write fails.
        """
        path = self.upload_dir / uuid.uuid4().hex
        try:
            async with aiofiles.open(path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to store upload at %s: %s", path, str(e))
            raise FileStorageError(
                message="Failed to save uploaded image. Please try again.",
                context={"path": str(path), "os_error": str(e)},
            )
        return path

    def rename_with_extension(self, raw_path: Path, extension: str) -> Path:
        """
        Append the original extension to a raw upload.

        Raises:
            FileStorageError if the rename fails (the raw file is removed).
        """
        final_path = raw_path.with_name(raw_path.name + extension)
        try:
            os.rename(raw_path, final_path)
        except OSError as e:
            logger.error("Failed to rename upload %s: %s", raw_path.name, str(e))
            raw_path.unlink(missing_ok=True)
            raise FileStorageError(
                message="Failed to save uploaded image. Please try again.",
                context={"path": str(raw_path), "os_error": str(e)},
            )
        return final_path

    def cover_path_for(self, stored_path: Path) -> str:
        """Relative cover path as stored on the Post, e.g. uploads/<hex>.png."""
        return f"{UPLOAD_URL_PREFIX}/{stored_path.name}"

    async def save_upload(self, filename: str, content: bytes) -> Tuple[str, str]:
        """
        Complete validation and storage pipeline for one uploaded cover.

        Validation order:
            1. Extension check (no bytes touched)
            2. Size check
            3. Raw write under generated name
            4. Rename to append the original extension

        Returns:
            Tuple of (absolute_path, cover_path_for_db).
        """
        ext = self.validate_extension(filename)
        self.validate_size(len(content))

        raw_path = await self.write_raw(content)
        final_path = self.rename_with_extension(raw_path, ext)

        cover = self.cover_path_for(final_path)
        logger.info("Cover stored: %s (%d bytes)", cover, len(content))
        return str(final_path), cover

    async def cleanup_file(self, file_path: str) -> None:
        """
        Remove a stored file after a failed request.

        Missing files are ignored and other errors are logged, so a failed
        cleanup never replaces the error that triggered it.
        """
        try:
            path = Path(file_path)
            if path.exists():
                os.remove(path)
                logger.info("Cleaned up file: %s", path.name)
            else:
                logger.debug("Cleanup: file already gone: %s", path.name)
        except OSError as e:
            logger.warning("Failed to clean up file %s: %s", file_path, str(e))


file_service = FileService()
