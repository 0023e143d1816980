"""API router for the subscriptions feature.

Endpoints:
    GET    /subscriptions                - Creators the caller follows
    POST   /subscriptions/{creator_id}   - Follow a creator
    DELETE /subscriptions/{creator_id}   - Unfollow a creator
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from video_service.core.dependencies import KeysetParams, get_db_session, get_keyset_params
from video_service.core.pagination import PageResponse
from video_service.features.subscriptions.schemas import (
    SubscribedCreatorResponse,
    SubscriptionResponse,
)
from video_service.features.subscriptions.service import SubscriptionService
from video_service.features.users.dependencies import CurrentUser

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


@router.get(
    "",
    response_model=PageResponse[SubscribedCreatorResponse],
    summary="List subscriptions",
    description="Creators the caller follows, most recently subscribed first.",
)
async def list_subscriptions(
    user: CurrentUser,
    session: Annotated[AsyncSession, Depends(get_db_session)],
    page: Annotated[KeysetParams, Depends(get_keyset_params)],
) -> PageResponse[SubscribedCreatorResponse]:
    result = await SubscriptionService(session).list_creators(
        user.id,
        cursor=page.cursor,
        limit=page.limit,
    )
    return PageResponse[SubscribedCreatorResponse].from_page(
        result.map(SubscribedCreatorResponse.from_row)
    )


@router.post(
    "/{creator_id}",
    response_model=SubscriptionResponse,
    summary="Subscribe to a creator",
    responses={
        400: {"description": "Cannot subscribe to yourself"},
        404: {"description": "Creator not found"},
    },
)
async def subscribe(
    creator_id: str,
    user: CurrentUser,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> SubscriptionResponse:
    subscription = await SubscriptionService(session).subscribe(user.id, creator_id)
    await session.commit()
    return SubscriptionResponse.model_validate(subscription)


@router.delete(
    "/{creator_id}",
    response_model=SubscriptionResponse,
    summary="Unsubscribe from a creator",
    responses={404: {"description": "Not subscribed"}},
)
async def unsubscribe(
    creator_id: str,
    user: CurrentUser,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> SubscriptionResponse:
    subscription = await SubscriptionService(session).unsubscribe(user.id, creator_id)
    await session.commit()
    return SubscriptionResponse.model_validate(subscription)
