"""Client for the video-processing provider (Mux-compatible REST API).

Covers the calls the service makes: creating direct uploads, reading upload
and asset state during revalidation, and deleting assets. Playback-id derived
thumbnail and preview URLs are built locally.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field

from video_service.core.settings.media import MediaSettings
from video_service.infra.external.base_client import BaseHTTPClient

logger = logging.getLogger(__name__)


class _ProviderModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class PlaybackId(_ProviderModel):
    id: str
    policy: str = "public"


class DirectUpload(_ProviderModel):
    """A direct upload slot; the browser PUTs the file to ``url``."""

    id: str
    url: str | None = None
    status: str | None = None
    asset_id: str | None = None


class Asset(_ProviderModel):
    """A transcoded asset.

    ``duration`` is reported in seconds.
    """

    id: str
    status: str | None = None
    duration: float | None = None
    playback_ids: list[PlaybackId] = Field(default_factory=list)

    @property
    def playback_id(self) -> str | None:
        return self.playback_ids[0].id if self.playback_ids else None

    @property
    def duration_ms(self) -> int:
        return round((self.duration or 0) * 1000)


class MediaProcessingClient(BaseHTTPClient):
    """Video-processing provider client.

    Usage:
        async with MediaProcessingClient(get_media_settings()) as media:
            upload = await media.create_upload(passthrough=user.id)
    """

    provider = "media"

    def __init__(
        self,
        settings: MediaSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        super().__init__(
            base_url=settings.base_url,
            timeout=settings.timeout,
            auth=(settings.token_id, settings.token_secret.get_secret_value()),
            transport=transport,
        )

    async def create_upload(self, *, passthrough: str) -> DirectUpload:
        """Create a direct upload for a new public asset with English auto-subtitles.

        Args:
            passthrough: Opaque value echoed back on asset webhooks (the owner's id).
        """
        payload: dict[str, Any] = {
            "cors_origin": self.settings.cors_origin,
            "new_asset_settings": {
                "passthrough": passthrough,
                "playback_policy": ["public"],
                "input": [
                    {
                        "generated_subtitles": [
                            {"language_code": "en", "name": "English"},
                        ],
                    },
                ],
            },
        }
        body = await self.post("/video/v1/uploads", json=payload, operation="create_upload")
        upload = DirectUpload.model_validate(body["data"])
        logger.info("Direct upload created", extra={"upload_id": upload.id})
        return upload

    async def get_upload(self, upload_id: str) -> DirectUpload:
        body = await self.get(f"/video/v1/uploads/{upload_id}", operation="get_upload")
        return DirectUpload.model_validate(body["data"])

    async def get_asset(self, asset_id: str) -> Asset:
        body = await self.get(f"/video/v1/assets/{asset_id}", operation="get_asset")
        return Asset.model_validate(body["data"])

    async def delete_asset(self, asset_id: str) -> None:
        await self.delete(f"/video/v1/assets/{asset_id}", operation="delete_asset")
        logger.info("Asset deleted", extra={"asset_id": asset_id})

    def thumbnail_url(self, playback_id: str) -> str:
        return f"{self.settings.thumbnail_base_url.rstrip('/')}/{playback_id}/thumbnail.jpg"

    def preview_url(self, playback_id: str) -> str:
        return f"{self.settings.thumbnail_base_url.rstrip('/')}/{playback_id}/animated.gif"
