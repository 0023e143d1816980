"""Third-party provider client dependencies.

One client per provider is created lazily and shared for the life of the
process; ``close_provider_clients`` is called from the application lifespan.
Tests replace them through ``app.dependency_overrides``.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from video_service.core.settings import (
    get_media_settings,
    get_upload_settings,
    get_workflow_settings,
)
from video_service.infra.external import (
    FileStorageClient,
    MediaProcessingClient,
    WorkflowClient,
)

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_media_client() -> MediaProcessingClient:
    """Get the shared media-processing client."""
    return MediaProcessingClient(get_media_settings())


@lru_cache(maxsize=1)
def get_storage_client() -> FileStorageClient:
    """Get the shared file-storage client."""
    return FileStorageClient(get_upload_settings())


@lru_cache(maxsize=1)
def get_workflow_client() -> WorkflowClient:
    """Get the shared workflow-trigger client."""
    return WorkflowClient(get_workflow_settings())


async def close_provider_clients() -> None:
    """Close every provider client that was created and drop the cache."""
    for getter in (get_media_client, get_storage_client, get_workflow_client):
        if getter.cache_info().currsize:
            client = getter()
            await client.close()
            logger.debug("Closed provider client", extra={"provider": client.provider})
        getter.cache_clear()


MediaClientDep = Annotated[MediaProcessingClient, Depends(get_media_client)]
StorageClientDep = Annotated[FileStorageClient, Depends(get_storage_client)]
WorkflowClientDep = Annotated[WorkflowClient, Depends(get_workflow_client)]


__all__ = [
    "MediaClientDep",
    "StorageClientDep",
    "WorkflowClientDep",
    "close_provider_clients",
    "get_media_client",
    "get_storage_client",
    "get_workflow_client",
]
