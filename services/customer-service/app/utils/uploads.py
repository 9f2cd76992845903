"""
Photo Upload Utilities
Stores uploaded photos on disk and returns their public path
"""

import asyncio
import os
import uuid
from pathlib import Path
from typing import Optional

import structlog
from fastapi import UploadFile

from app.exceptions import PayloadTooLargeError, StoreError, ValidationError

logger = structlog.get_logger(__name__)

READ_CHUNK_BYTES = 64 * 1024
_ALLOWED_SUFFIX_CHARS = set("abcdefghijklmnopqrstuvwxyz0123456789")


def _safe_suffix(filename: Optional[str]) -> str:
    suffix = Path(filename or "").suffix.lower()
    if 1 < len(suffix) <= 6 and set(suffix[1:]) <= _ALLOWED_SUFFIX_CHARS:
        return suffix
    return ""


class PhotoStorage:
    """Writes uploads under `upload_dir`, served back under `url_prefix`"""

    def __init__(self, upload_dir: str, url_prefix: str = "/images", max_bytes: int = 10_000_000):
        self.upload_dir = Path(upload_dir)
        self.url_prefix = url_prefix.rstrip("/")
        self.max_bytes = max_bytes

    async def _read_limited(self, upload: UploadFile) -> bytes:
        total = 0
        chunks: list[bytes] = []
        while True:
            chunk = await upload.read(READ_CHUNK_BYTES)
            if not chunk:
                break
            total += len(chunk)
            if total > self.max_bytes:
                raise PayloadTooLargeError(f"File exceeds {self.max_bytes} bytes")
            chunks.append(chunk)
        return b"".join(chunks)

    def _write(self, name: str, content: bytes) -> None:
        os.makedirs(self.upload_dir, exist_ok=True)
        with open(self.upload_dir / name, "wb") as f:
            f.write(content)

    async def save(self, upload: Optional[UploadFile]) -> str:
        """
        Save an uploaded photo

        Args:
            upload: Multipart file, or None when the field was missing

        Returns:
            str: Public path of the stored photo
        """
        if upload is None or not upload.filename:
            raise ValidationError("photo is required")

        content = await self._read_limited(upload)
        name = uuid.uuid4().hex + _safe_suffix(upload.filename)
        try:
            await asyncio.to_thread(self._write, name, content)
        except OSError as e:
            logger.error("Failed to store photo", error=str(e), upload_dir=str(self.upload_dir))
            raise StoreError("Failed to store photo") from e

        logger.info("Photo stored", name=name, size=len(content))
        return f"{self.url_prefix}/{name}"
