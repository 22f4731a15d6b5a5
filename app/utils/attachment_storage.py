# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.

import inspect
import logging
import os

from storage3 import create_client

from app.utils.errors import LogValidationError, TransientIOError

logger = logging.getLogger(__name__)

LOG_PHOTO_BUCKET = "log-photos"
AVATAR_BUCKET = "avatars"
MAX_ATTACHMENT_BYTES = 5 * 1024 * 1024

IMAGE_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}


def image_extension(content_type: str) -> str:
    ext = IMAGE_EXTENSIONS.get((content_type or "").lower())
    if not ext:
        raise LogValidationError(f"Unsupported image type: {content_type or 'unknown'}")
    return ext


def check_attachment_size(data: bytes):
    if not data:
        raise LogValidationError("Uploaded file is empty")
    if len(data) > MAX_ATTACHMENT_BYTES:
        raise LogValidationError("Uploaded file is larger than 5 MB")


def build_storage_client():
    # Supabase Storage
    supabase_url = os.getenv("SUPABASE_URL")
    supabase_key = os.getenv("SUPABASE_KEY")
    if not supabase_url or not supabase_key:
        raise TransientIOError("Attachment storage is not configured")

    return create_client(
        url=f"{supabase_url.rstrip('/')}/storage/v1",
        headers={"apiKey": supabase_key, "Authorization": f"Bearer {supabase_key}"},
        is_async=True
    )


class AttachmentStorage:
    """Public-URL file storage for one bucket (log photos, avatars)."""

    def __init__(self, bucket: str, client=None):
        self.bucket = bucket
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = build_storage_client()
        return self._client

    async def upload(self, path: str, data: bytes, content_type: str) -> str:
        check_attachment_size(data)
        bucket = self.client.from_(self.bucket)
        try:
            await bucket.upload(path, data, {"content-type": content_type, "upsert": "true"})
            public_url = bucket.get_public_url(path)
            if inspect.isawaitable(public_url):
                public_url = await public_url
        except Exception as e:
            logger.error(f"🛑 Upload to {self.bucket}/{path} failed: {e}")
            raise TransientIOError("Failed to upload file") from e

        logger.info(f"📤 Uploaded {len(data)} bytes to {self.bucket}/{path}")
        return public_url

    async def remove(self, path: str):
        try:
            await self.client.from_(self.bucket).remove([path])
        except Exception as e:
            logger.error(f"🛑 Removing {self.bucket}/{path} failed: {e}")
            raise TransientIOError("Failed to remove file") from e

        logger.info(f"🗑️ Removed {self.bucket}/{path}")


def path_from_public_url(public_url: str, bucket: str):
    marker = f"/{bucket}/"
    if not public_url or marker not in public_url:
        return None
    return public_url.split(marker, 1)[1].split("?", 1)[0]
