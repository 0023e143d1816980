"""API router for the creator studio.

Endpoints:
    GET    /studio/videos             - Caller's videos of every visibility
    GET    /studio/videos/{video_id}  - One of the caller's videos
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from video_service.core.dependencies import KeysetParams, get_db_session, get_keyset_params
from video_service.core.pagination import PageResponse
from video_service.features.users.dependencies import CurrentUser
from video_service.features.videos.schemas import StudioVideoResponse
from video_service.features.videos.service import VideoService

router = APIRouter(prefix="/studio", tags=["studio"])


@router.get(
    "/videos",
    response_model=PageResponse[StudioVideoResponse],
    summary="List my videos",
    description="Every video owned by the caller, public and private, ordered by last update.",
    responses={401: {"description": "Not authenticated"}},
)
async def list_studio_videos(
    user: CurrentUser,
    session: Annotated[AsyncSession, Depends(get_db_session)],
    page: Annotated[KeysetParams, Depends(get_keyset_params)],
) -> PageResponse[StudioVideoResponse]:
    result = await VideoService(session).list_studio(user.id, cursor=page.cursor, limit=page.limit)
    return PageResponse[StudioVideoResponse].from_page(
        result.map(lambda row: StudioVideoResponse.model_validate(row.Video))
    )


@router.get(
    "/videos/{video_id}",
    response_model=StudioVideoResponse,
    summary="Get one of my videos",
    responses={404: {"description": "Video not found"}},
)
async def get_studio_video(
    video_id: str,
    user: CurrentUser,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> StudioVideoResponse:
    video = await VideoService(session).get_owned(video_id, user.id)
    return StudioVideoResponse.model_validate(video)
