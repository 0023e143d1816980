"""Client for the file-upload provider (UploadThing-compatible REST API).

Custom thumbnails are uploaded by the browser straight to the provider; the
service only needs to delete files by key when a thumbnail is replaced or its
video is removed.
"""

from __future__ import annotations

import logging

import httpx

from video_service.core.settings.uploads import UploadSettings
from video_service.infra.external.base_client import BaseHTTPClient

logger = logging.getLogger(__name__)


class FileStorageClient(BaseHTTPClient):
    """File-storage provider client."""

    provider = "uploads"

    def __init__(
        self,
        settings: UploadSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(
            base_url=settings.base_url,
            timeout=settings.timeout,
            headers={"X-Uploadthing-Api-Key": settings.token.get_secret_value()},
            transport=transport,
        )

    async def delete_files(self, *keys: str) -> int:
        """Delete files by key.

        Returns:
            Number of files the provider reports as deleted.
        """
        if not keys:
            return 0
        body = await self.post(
            "/v6/deleteFiles",
            json={"fileKeys": list(keys)},
            operation="delete_files",
        )
        deleted = int(body.get("deletedCount", len(keys)))
        logger.info("Files deleted", extra={"file_keys": list(keys), "deleted": deleted})
        return deleted
