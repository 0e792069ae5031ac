"""
Portfolio API - Upload Storage Service
=======================================

What:  Validates, stores and removes files attached to resource records.
How:   Writes the upload into the upload directory under a generated name and
       returns the public path (/uploads/<name>) recorded as the resource's
       fileUrl. The directory is served as static files by main.py.
Who:   Called by the resource routes on create, update and delete.

Naming:
    <epoch-millis>-<8 hex chars><original extension>
    e.g. 1718035200123-9f86d081.pdf

    The timestamp keeps names roughly sortable by upload time; the random
    suffix keeps two uploads within the same millisecond apart. No part of
    the client's filename other than a sanitized extension reaches the disk.
"""

import logging
import os
import re
import time
import uuid
from pathlib import Path
from typing import Optional, Tuple

import aiofiles

from portfolio_api.config import settings
from portfolio_api.exceptions import FileStorageError, ValidationError

logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "/uploads/"

# Extensions are kept only when they look like an extension
_EXTENSION_PATTERN = re.compile(r"^\.[a-z0-9]{1,16}$")


class FileService:
    """
    Manages the upload lifecycle for resource attachments.

    Lifecycle of an uploaded file:
        1. Route reads the multipart part → FileService.validate_and_store()
        2. Extension is sanitized, size is checked
        3. File is written under a generated unique name
        4. Public path is returned and stored as fileUrl
        5. When the record is updated with a new file, or deleted, the old
           file is removed with remove_upload()
    """

    def __init__(self, upload_dir: Optional[str] = None):
        """
        Args:
            upload_dir: Override the configured upload directory (used in tests).
        """
        self.upload_dir = Path(upload_dir or settings.upload_dir).resolve()
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        logger.info("FileService initialized with upload_dir=%s", self.upload_dir)

    def validate_extension(self, filename: str) -> str:
        """
        Return the lowercase extension of the client filename, or "" when it
        has none.

        Raises:  ValidationError if the extension contains anything other
                 than ASCII letters and digits.
        """
        ext = Path(filename or "").suffix.lower()
        if ext and not _EXTENSION_PATTERN.match(ext):
            raise ValidationError(
                message=f"File extension '{ext}' is not allowed.",
                field="file",
                context={"extension": ext},
            )
        return ext

    def validate_size(self, size: int) -> None:
        """Rejects empty files and files larger than settings.max_upload_size."""
        if size == 0:
            raise ValidationError(message="Uploaded file is empty.", field="file")

        if size > settings.max_upload_size:
            max_mb = settings.max_upload_size / (1024 * 1024)
            raise ValidationError(
                message=f"File is too large ({size / (1024 * 1024):.1f}MB). Maximum is {max_mb:.0f}MB.",
                field="file",
                context={"max_size_mb": max_mb, "actual_size": size},
            )

    def generate_name(self, extension: str) -> str:
        millis = int(time.time() * 1000)
        return f"{millis}-{uuid.uuid4().hex[:8]}{extension}"

    async def store_file(self, content: bytes, extension: str) -> Tuple[str, str]:
        """
        Write file content to the upload directory.

        Returns: Tuple of (absolute_path, public_url).
        Raises:  FileStorageError if the write fails.
        """
        name = self.generate_name(extension)
        absolute_path = self.upload_dir / name

        try:
            absolute_path.parent.mkdir(parents=True, exist_ok=True)
            # "xb": never overwrite an existing upload
            async with aiofiles.open(absolute_path, "xb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to store file at %s: %s", absolute_path, str(e))
            raise FileStorageError(
                message="Failed to save uploaded file. Please try again.",
                context={"path": str(absolute_path), "os_error": str(e)},
            )

        logger.info("File stored: %s (%d bytes)", name, len(content))
        return str(absolute_path), PUBLIC_PREFIX + name

    async def validate_and_store(self, filename: str, content: bytes) -> Tuple[str, str]:
        """
        Validate extension and size, then store the file.

        Returns: Tuple of (absolute_path, public_url).
        """
        ext = self.validate_extension(filename)
        self.validate_size(len(content))
        return await self.store_file(content, ext)

    def path_for_url(self, file_url: Optional[str]) -> Optional[Path]:
        """
        Map a stored fileUrl back to its path inside the upload directory.

        Returns None for URLs this service did not produce, including any
        attempt to point outside the upload directory.
        """
        if not file_url or not file_url.startswith(PUBLIC_PREFIX):
            return None
        name = file_url[len(PUBLIC_PREFIX):]
        if not name or "/" in name or "\\" in name or name in (".", ".."):
            return None
        return self.upload_dir / name

    async def cleanup_file(self, file_path: str) -> None:
        """
        Remove a file from disk, best-effort.

        Missing files are ignored; other failures are logged and swallowed so
        that cleanup never turns a successful request into an error.
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

    async def remove_upload(self, file_url: Optional[str]) -> None:
        """Remove the stored file behind a fileUrl, if it is one of ours."""
        path = self.path_for_url(file_url)
        if path is None:
            if file_url:
                logger.warning("Refusing to remove file outside upload dir: %s", file_url)
            return
        await self.cleanup_file(str(path))


file_service = FileService()
