"""API router for the users feature.

Endpoints:
    PUT    /users/me          - Create or refresh the caller's profile
    GET    /users/{user_id}   - Public profile with subscriber/video counts
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from video_service.core.dependencies.database import get_db_session
from video_service.features.users.dependencies import OptionalUser, Subject
from video_service.features.users.schemas import UserProfileResponse, UserSummary, UserSync
from video_service.features.users.service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.put(
    "/me",
    response_model=UserSummary,
    summary="Sync caller profile",
    description="Create the local profile for the authenticated subject, or refresh its name and image.",
    responses={401: {"description": "No authenticated subject"}},
)
async def sync_me(
    payload: UserSync,
    subject: Subject,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> UserSummary:
    user = await UserService(session).sync_identity(subject, payload)
    await session.commit()
    return UserSummary.model_validate(user)


@router.get(
    "/{user_id}",
    response_model=UserProfileResponse,
    summary="Get a user profile",
    responses={404: {"description": "User not found"}},
)
async def get_user(
    user_id: str,
    viewer: OptionalUser,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> UserProfileResponse:
    """Get a user's channel header, including whether the caller subscribes."""
    return await UserService(session).get_profile(
        user_id,
        viewer_id=viewer.id if viewer else None,
    )
