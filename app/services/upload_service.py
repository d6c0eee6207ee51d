"""
Upload adapter for internship applications.

Validates the optional file attached to a submission and stores it in
Cloudinary under the configured folder. The stored object's secure URL
becomes the submission's file reference.
"""
from __future__ import annotations

import asyncio
import hashlib
import io
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import cloudinary.uploader

from app.core.config import Settings
from app.core.errors import UploadRejectedError, UploadTransportError
from app.schemas.submission import NO_FILE_REFERENCE, UploadedFile

logger = logging.getLogger(__name__)


@dataclass
class UploadResult:
    """Result of a Cloudinary upload."""

    url: str
    size_bytes: int


class UploadService:
    """Validate and store application attachments in Cloudinary."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def validate(self, upload: UploadedFile) -> None:
        if upload.content_type not in self.settings.ALLOWED_FILE_TYPES:
            raise UploadRejectedError("Invalid file type")
        if upload.size_bytes > self.settings.MAX_UPLOAD_BYTES:
            raise UploadRejectedError("File too large")

    def _upload_options(self, upload: UploadedFile) -> Dict[str, Any]:
        secret = self.settings.CLOUDINARY_API_SECRET
        return {
            "folder": self.settings.UPLOAD_FOLDER,
            "allowed_formats": self.settings.UPLOAD_FORMATS,
            "resource_type": "auto",
            "filename": upload.filename,
            "cloud_name": self.settings.CLOUDINARY_CLOUD_NAME,
            "api_key": self.settings.CLOUDINARY_API_KEY,
            "api_secret": secret.get_secret_value() if secret else None,
        }

    def _upload_sync(self, upload: UploadedFile) -> Dict[str, Any]:
        return cloudinary.uploader.upload(
            io.BytesIO(upload.content), **self._upload_options(upload)
        )

    async def upload(self, upload: UploadedFile) -> UploadResult:
        """Store one validated file; raises UploadTransportError on any failure."""
        self.validate(upload)

        content_hash = hashlib.sha256(upload.content).hexdigest()
        try:
            response = await asyncio.to_thread(self._upload_sync, upload)
        except Exception as exc:
            logger.error(
                "Cloudinary upload failed filename=%s size=%s error=%s",
                upload.filename,
                upload.size_bytes,
                exc,
            )
            raise UploadTransportError(f"Upload failed: {exc}") from exc

        url = response.get("secure_url") or response.get("url")
        if not url:
            raise UploadTransportError("Upload failed: no URL returned")

        logger.info(
            "Attachment uploaded filename=%s size=%s sha256=%s public_id=%s",
            upload.filename,
            upload.size_bytes,
            content_hash,
            response.get("public_id"),
        )
        return UploadResult(url=url, size_bytes=upload.size_bytes)

    async def resolve_reference(self, upload: Optional[UploadedFile]) -> str:
        """Return the stored file URL, or the no-file sentinel."""
        if upload is None:
            return NO_FILE_REFERENCE
        result = await self.upload(upload)
        return result.url
