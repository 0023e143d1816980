"""API router for the videos feature.

Endpoints:
    Feeds:
        GET    /videos                          - Public videos, newest first
        GET    /videos/trending                 - Public videos, most viewed first
        GET    /videos/subscribed               - Public videos of followed creators

    Video CRUD:
        GET    /videos/{video_id}               - Watch-page video
        POST   /videos                          - Start a direct upload
        PATCH  /videos/{video_id}               - Update owned video metadata
        DELETE /videos/{video_id}               - Remove an owned video

    Provider state:
        POST   /videos/{video_id}/revalidate         - Re-read asset state from the media provider
        POST   /videos/{video_id}/thumbnail/restore  - Restore the provider-generated thumbnail

    AI generation:
        POST   /videos/{video_id}/generate-title
        POST   /videos/{video_id}/generate-description
        POST   /videos/{video_id}/generate-thumbnail

    Engagement:
        POST   /videos/{video_id}/views         - Record a view
        POST   /videos/{video_id}/like          - Toggle like
        POST   /videos/{video_id}/dislike       - Toggle dislike

Every list endpoint is keyset-paginated: pass ``next_cursor`` back as
``cursor`` to continue.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from video_service.core.dependencies import (
    KeysetParams,
    MediaClientDep,
    StorageClientDep,
    WorkflowClientDep,
    get_db_session,
    get_keyset_params,
)
from video_service.core.pagination import PageResponse
from video_service.features.users.dependencies import CurrentUser, OptionalUser
from video_service.features.videos.models import ReactionType
from video_service.features.videos.schemas import (
    GenerateThumbnailRequest,
    ReactionResponse,
    StudioVideoResponse,
    VideoCardResponse,
    VideoCreateResponse,
    VideoDetailResponse,
    VideoUpdate,
    ViewResponse,
    WorkflowRunResponse,
)
from video_service.features.videos.service import VideoService

router = APIRouter(prefix="/videos", tags=["videos"])

SessionDep = Annotated[AsyncSession, Depends(get_db_session)]
PageParams = Annotated[KeysetParams, Depends(get_keyset_params)]


# ──────────────────────────────────────────────────────────────
# Feeds
# ──────────────────────────────────────────────────────────────


@router.get(
    "",
    response_model=PageResponse[VideoCardResponse],
    summary="List public videos",
    description="Public videos ordered by last update, optionally restricted to one owner or category.",
)
async def list_videos(
    session: SessionDep,
    page: PageParams,
    user_id: str | None = None,
    category_id: str | None = None,
) -> PageResponse[VideoCardResponse]:
    result = await VideoService(session).list_public(
        user_id=user_id,
        category_id=category_id,
        cursor=page.cursor,
        limit=page.limit,
    )
    return PageResponse[VideoCardResponse].from_page(result.map(VideoCardResponse.from_row))


@router.get(
    "/trending",
    response_model=PageResponse[VideoCardResponse],
    summary="List trending videos",
    description="Public videos ordered by view count. The cursor carries the integer view count.",
)
async def list_trending(
    session: SessionDep,
    page: PageParams,
) -> PageResponse[VideoCardResponse]:
    result = await VideoService(session).list_trending(cursor=page.cursor, limit=page.limit)
    return PageResponse[VideoCardResponse].from_page(result.map(VideoCardResponse.from_row))


@router.get(
    "/subscribed",
    response_model=PageResponse[VideoCardResponse],
    summary="List videos from subscriptions",
    responses={401: {"description": "Not authenticated"}},
)
async def list_subscribed(
    user: CurrentUser,
    session: SessionDep,
    page: PageParams,
) -> PageResponse[VideoCardResponse]:
    result = await VideoService(session).list_subscribed(
        user.id,
        cursor=page.cursor,
        limit=page.limit,
    )
    return PageResponse[VideoCardResponse].from_page(result.map(VideoCardResponse.from_row))


# ──────────────────────────────────────────────────────────────
# Video CRUD
# ──────────────────────────────────────────────────────────────


@router.get(
    "/{video_id}",
    response_model=VideoDetailResponse,
    summary="Get a video",
    responses={404: {"description": "Video not found"}},
)
async def get_video(
    video_id: str,
    viewer: OptionalUser,
    session: SessionDep,
) -> VideoDetailResponse:
    """Get a video with its owner, engagement counts and the caller's reaction."""
    row = await VideoService(session).get_detail(video_id, viewer_id=viewer.id if viewer else None)
    return VideoDetailResponse.from_detail_row(row)


@router.post(
    "",
    response_model=VideoCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a video",
    description="Open a direct upload at the media provider and create an untitled video waiting for it.",
    responses={502: {"description": "Media provider unavailable"}},
)
async def create_video(
    user: CurrentUser,
    session: SessionDep,
    media: MediaClientDep,
) -> VideoCreateResponse:
    video, upload = await VideoService(session).create_video(user.id, media=media)
    await session.commit()
    return VideoCreateResponse(
        video=StudioVideoResponse.model_validate(video),
        upload_url=upload.url,
    )


@router.patch(
    "/{video_id}",
    response_model=StudioVideoResponse,
    summary="Update a video",
    description="Update title, description, category or visibility. Only provided fields change.",
    responses={404: {"description": "Video not found"}},
)
async def update_video(
    video_id: str,
    payload: VideoUpdate,
    user: CurrentUser,
    session: SessionDep,
) -> StudioVideoResponse:
    video = await VideoService(session).update_video(video_id, user.id, payload)
    await session.commit()
    return StudioVideoResponse.model_validate(video)


@router.delete(
    "/{video_id}",
    response_model=StudioVideoResponse,
    summary="Delete a video",
    description="Delete the video. Provider thumbnail and asset are removed on a best-effort basis.",
    responses={404: {"description": "Video not found"}},
)
async def delete_video(
    video_id: str,
    user: CurrentUser,
    session: SessionDep,
    media: MediaClientDep,
    storage: StorageClientDep,
) -> StudioVideoResponse:
    video = await VideoService(session).remove_video(
        video_id,
        user.id,
        media=media,
        storage=storage,
    )
    await session.commit()
    return StudioVideoResponse.model_validate(video)


# ──────────────────────────────────────────────────────────────
# Provider state
# ──────────────────────────────────────────────────────────────


@router.post(
    "/{video_id}/revalidate",
    response_model=StudioVideoResponse,
    summary="Revalidate provider state",
    responses={
        400: {"description": "Video has no upload or asset"},
        404: {"description": "Video not found"},
        502: {"description": "Media provider unavailable"},
    },
)
async def revalidate_video(
    video_id: str,
    user: CurrentUser,
    session: SessionDep,
    media: MediaClientDep,
) -> StudioVideoResponse:
    video = await VideoService(session).revalidate(video_id, user.id, media=media)
    await session.commit()
    return StudioVideoResponse.model_validate(video)


@router.post(
    "/{video_id}/thumbnail/restore",
    response_model=StudioVideoResponse,
    summary="Restore the generated thumbnail",
    responses={
        400: {"description": "Video has no playback id"},
        404: {"description": "Video not found"},
    },
)
async def restore_thumbnail(
    video_id: str,
    user: CurrentUser,
    session: SessionDep,
    media: MediaClientDep,
    storage: StorageClientDep,
) -> StudioVideoResponse:
    video = await VideoService(session).restore_thumbnail(
        video_id,
        user.id,
        media=media,
        storage=storage,
    )
    await session.commit()
    return StudioVideoResponse.model_validate(video)


# ──────────────────────────────────────────────────────────────
# AI generation
# ──────────────────────────────────────────────────────────────


@router.post(
    "/{video_id}/generate-title",
    response_model=WorkflowRunResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Generate a title",
    responses={404: {"description": "Video not found"}},
)
async def generate_title(
    video_id: str,
    user: CurrentUser,
    session: SessionDep,
    workflows: WorkflowClientDep,
) -> WorkflowRunResponse:
    run = await VideoService(session).trigger_generation(
        video_id, user.id, "title", workflows=workflows
    )
    return WorkflowRunResponse(workflow_run_id=run.workflow_run_id)


@router.post(
    "/{video_id}/generate-description",
    response_model=WorkflowRunResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Generate a description",
    responses={404: {"description": "Video not found"}},
)
async def generate_description(
    video_id: str,
    user: CurrentUser,
    session: SessionDep,
    workflows: WorkflowClientDep,
) -> WorkflowRunResponse:
    run = await VideoService(session).trigger_generation(
        video_id, user.id, "description", workflows=workflows
    )
    return WorkflowRunResponse(workflow_run_id=run.workflow_run_id)


@router.post(
    "/{video_id}/generate-thumbnail",
    response_model=WorkflowRunResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Generate a thumbnail from a prompt",
    responses={404: {"description": "Video not found"}},
)
async def generate_thumbnail(
    video_id: str,
    payload: GenerateThumbnailRequest,
    user: CurrentUser,
    session: SessionDep,
    workflows: WorkflowClientDep,
) -> WorkflowRunResponse:
    run = await VideoService(session).trigger_generation(
        video_id,
        user.id,
        "thumbnail",
        workflows=workflows,
        prompt=payload.prompt,
    )
    return WorkflowRunResponse(workflow_run_id=run.workflow_run_id)


# ──────────────────────────────────────────────────────────────
# Engagement
# ──────────────────────────────────────────────────────────────


@router.post(
    "/{video_id}/views",
    response_model=ViewResponse,
    summary="Record a view",
    responses={404: {"description": "Video not found"}},
)
async def record_view(
    video_id: str,
    user: CurrentUser,
    session: SessionDep,
) -> ViewResponse:
    view = await VideoService(session).record_view(video_id, user.id)
    await session.commit()
    return ViewResponse(video_id=view.video_id, viewed_at=view.updated_at)


@router.post(
    "/{video_id}/like",
    response_model=ReactionResponse,
    summary="Toggle like",
    responses={404: {"description": "Video not found"}},
)
async def like_video(
    video_id: str,
    user: CurrentUser,
    session: SessionDep,
) -> ReactionResponse:
    reaction = await VideoService(session).toggle_reaction(video_id, user.id, ReactionType.LIKE)
    await session.commit()
    return ReactionResponse(video_id=video_id, reaction=reaction)


@router.post(
    "/{video_id}/dislike",
    response_model=ReactionResponse,
    summary="Toggle dislike",
    responses={404: {"description": "Video not found"}},
)
async def dislike_video(
    video_id: str,
    user: CurrentUser,
    session: SessionDep,
) -> ReactionResponse:
    reaction = await VideoService(session).toggle_reaction(
        video_id, user.id, ReactionType.DISLIKE
    )
    await session.commit()
    return ReactionResponse(video_id=video_id, reaction=reaction)
