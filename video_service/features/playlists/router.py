"""API router for the playlists feature.

Endpoints:
    Library:
        GET    /playlists/history                 - Watched videos, latest view first
        GET    /playlists/liked                   - Liked videos, latest like first

    Playlist CRUD:
        GET    /playlists                         - Caller's playlists
        GET    /playlists/for-video/{video_id}    - Caller's playlists flagged for one video
        POST   /playlists                         - Create a playlist
        GET    /playlists/{playlist_id}           - Get a playlist
        DELETE /playlists/{playlist_id}           - Delete a playlist

    Playlist contents:
        GET    /playlists/{playlist_id}/videos
        POST   /playlists/{playlist_id}/videos/{video_id}
        DELETE /playlists/{playlist_id}/videos/{video_id}
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from video_service.core.dependencies import KeysetParams, get_db_session, get_keyset_params
from video_service.core.pagination import PageResponse
from video_service.features.playlists.schemas import (
    HistoryVideoResponse,
    LikedVideoResponse,
    PlaylistCreate,
    PlaylistForVideoResponse,
    PlaylistResponse,
    PlaylistSummaryResponse,
    PlaylistVideoResponse,
)
from video_service.features.playlists.service import PlaylistService
from video_service.features.users.dependencies import CurrentUser
from video_service.features.videos.schemas import VideoCardResponse

router = APIRouter(prefix="/playlists", tags=["playlists"])

SessionDep = Annotated[AsyncSession, Depends(get_db_session)]
PageParams = Annotated[KeysetParams, Depends(get_keyset_params)]


# ──────────────────────────────────────────────────────────────
# Library
# ──────────────────────────────────────────────────────────────


@router.get(
    "/history",
    response_model=PageResponse[HistoryVideoResponse],
    summary="Watch history",
)
async def list_history(
    user: CurrentUser,
    session: SessionDep,
    page: PageParams,
) -> PageResponse[HistoryVideoResponse]:
    result = await PlaylistService(session).list_history(
        user.id, cursor=page.cursor, limit=page.limit
    )
    return PageResponse[HistoryVideoResponse].from_page(
        result.map(lambda row: HistoryVideoResponse.from_row(row, viewed_at=row.viewed_at))
    )


@router.get(
    "/liked",
    response_model=PageResponse[LikedVideoResponse],
    summary="Liked videos",
)
async def list_liked(
    user: CurrentUser,
    session: SessionDep,
    page: PageParams,
) -> PageResponse[LikedVideoResponse]:
    result = await PlaylistService(session).list_liked(user.id, cursor=page.cursor, limit=page.limit)
    return PageResponse[LikedVideoResponse].from_page(
        result.map(lambda row: LikedVideoResponse.from_row(row, liked_at=row.liked_at))
    )


# ──────────────────────────────────────────────────────────────
# Playlist CRUD
# ──────────────────────────────────────────────────────────────


@router.get(
    "",
    response_model=PageResponse[PlaylistSummaryResponse],
    summary="List my playlists",
)
async def list_playlists(
    user: CurrentUser,
    session: SessionDep,
    page: PageParams,
) -> PageResponse[PlaylistSummaryResponse]:
    result = await PlaylistService(session).list_playlists(
        user.id, cursor=page.cursor, limit=page.limit
    )
    return PageResponse[PlaylistSummaryResponse].from_page(
        result.map(PlaylistSummaryResponse.from_row)
    )


@router.get(
    "/for-video/{video_id}",
    response_model=PageResponse[PlaylistForVideoResponse],
    summary="List my playlists for a video",
    description="The caller's playlists, each flagged with whether it already contains the video.",
)
async def list_playlists_for_video(
    video_id: str,
    user: CurrentUser,
    session: SessionDep,
    page: PageParams,
) -> PageResponse[PlaylistForVideoResponse]:
    result = await PlaylistService(session).list_for_video(
        user.id, video_id, cursor=page.cursor, limit=page.limit
    )
    return PageResponse[PlaylistForVideoResponse].from_page(
        result.map(PlaylistForVideoResponse.from_video_row)
    )


@router.post(
    "",
    response_model=PlaylistResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a playlist",
)
async def create_playlist(
    payload: PlaylistCreate,
    user: CurrentUser,
    session: SessionDep,
) -> PlaylistResponse:
    playlist = await PlaylistService(session).create_playlist(user.id, payload)
    await session.commit()
    return PlaylistResponse.model_validate(playlist)


@router.get(
    "/{playlist_id}",
    response_model=PlaylistResponse,
    summary="Get a playlist",
    responses={404: {"description": "Playlist not found"}},
)
async def get_playlist(
    playlist_id: str,
    user: CurrentUser,
    session: SessionDep,
) -> PlaylistResponse:
    playlist = await PlaylistService(session).get_owned(playlist_id, user.id)
    return PlaylistResponse.model_validate(playlist)


@router.delete(
    "/{playlist_id}",
    response_model=PlaylistResponse,
    summary="Delete a playlist",
    responses={404: {"description": "Playlist not found"}},
)
async def delete_playlist(
    playlist_id: str,
    user: CurrentUser,
    session: SessionDep,
) -> PlaylistResponse:
    playlist = await PlaylistService(session).remove_playlist(playlist_id, user.id)
    await session.commit()
    return PlaylistResponse.model_validate(playlist)


# ──────────────────────────────────────────────────────────────
# Playlist contents
# ──────────────────────────────────────────────────────────────


@router.get(
    "/{playlist_id}/videos",
    response_model=PageResponse[VideoCardResponse],
    summary="List playlist videos",
    responses={404: {"description": "Playlist not found"}},
)
async def list_playlist_videos(
    playlist_id: str,
    user: CurrentUser,
    session: SessionDep,
    page: PageParams,
) -> PageResponse[VideoCardResponse]:
    result = await PlaylistService(session).list_videos(
        playlist_id, user.id, cursor=page.cursor, limit=page.limit
    )
    return PageResponse[VideoCardResponse].from_page(result.map(VideoCardResponse.from_row))


@router.post(
    "/{playlist_id}/videos/{video_id}",
    response_model=PlaylistVideoResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a video to a playlist",
    responses={
        404: {"description": "Playlist or video not found"},
        409: {"description": "Video already in playlist"},
    },
)
async def add_playlist_video(
    playlist_id: str,
    video_id: str,
    user: CurrentUser,
    session: SessionDep,
) -> PlaylistVideoResponse:
    member = await PlaylistService(session).add_video(playlist_id, video_id, user.id)
    await session.commit()
    return PlaylistVideoResponse.model_validate(member)


@router.delete(
    "/{playlist_id}/videos/{video_id}",
    response_model=PlaylistVideoResponse,
    summary="Remove a video from a playlist",
    responses={404: {"description": "Playlist, video or membership not found"}},
)
async def remove_playlist_video(
    playlist_id: str,
    video_id: str,
    user: CurrentUser,
    session: SessionDep,
) -> PlaylistVideoResponse:
    member = await PlaylistService(session).remove_video(playlist_id, video_id, user.id)
    await session.commit()
    return PlaylistVideoResponse.model_validate(member)
