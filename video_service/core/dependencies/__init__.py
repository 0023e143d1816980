"""FastAPI dependencies for route handlers.

Re-exports the dependencies shared by every feature router:

    from video_service.core.dependencies import (
        get_db_session,
        KeysetParams,
        MediaClientDep,
        StorageClientDep,
        WorkflowClientDep,
    )

    @router.get("/videos")
    async def list_videos(
        session: Annotated[AsyncSession, Depends(get_db_session)],
        page: Annotated[KeysetParams, Depends(get_keyset_params)],
    ):
        ...

Caller identity lives with the users feature, see
``video_service.features.users.dependencies``.
"""

from __future__ import annotations

from .database import get_db_session
from .pagination import KeysetParams, get_keyset_params
from .providers import (
    MediaClientDep,
    StorageClientDep,
    WorkflowClientDep,
    close_provider_clients,
    get_media_client,
    get_storage_client,
    get_workflow_client,
)

__all__ = [
    "KeysetParams",
    "MediaClientDep",
    "StorageClientDep",
    "WorkflowClientDep",
    "close_provider_clients",
    "get_db_session",
    "get_keyset_params",
    "get_media_client",
    "get_storage_client",
    "get_workflow_client",
]
