"""Service layer for the subscriptions feature."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from video_service.core.exceptions import BadRequestException, NotFoundException
from video_service.features.subscriptions.models import Subscription
from video_service.features.subscriptions.repository import (
    SubscriptionRepository,
    get_subscription_repository,
)
from video_service.features.users.repository import get_user_repository
from video_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy import Row
    from sqlalchemy.ext.asyncio import AsyncSession

    from video_service.core.pagination import Cursor, Page

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)


class SubscriptionService:
    """Service for following and unfollowing creators."""

    def __init__(
        self,
        session: AsyncSession,
        repo: SubscriptionRepository | None = None,
    ) -> None:
        self._session = session
        self._repo = repo or get_subscription_repository()

    async def subscribe(self, viewer_id: str, creator_id: str) -> Subscription:
        """Follow a creator. Subscribing twice returns the existing subscription.

        Raises:
            BadRequestException: If the viewer tries to follow themselves
            NotFoundException: If the creator does not exist
        """
        if viewer_id == creator_id:
            raise BadRequestException(
                detail="Cannot subscribe to yourself",
                type="self-subscription",
                extra={"user_id": viewer_id},
            )

        if await get_user_repository().get(self._session, creator_id) is None:
            raise NotFoundException(
                detail=f"User {creator_id} not found",
                type="user-not-found",
                extra={"user_id": creator_id},
            )

        existing = await self._repo.get_for(self._session, viewer_id, creator_id)
        if existing is not None:
            lazy_logger.debug(lambda: f"subscription.exists: {viewer_id} -> {creator_id}")
            return existing

        subscription = await self._repo.create(
            self._session,
            Subscription(viewer_id=viewer_id, creator_id=creator_id),
        )
        logger.info(
            "Subscription created",
            extra={"viewer_id": viewer_id, "creator_id": creator_id},
        )
        return subscription

    async def unsubscribe(self, viewer_id: str, creator_id: str) -> Subscription:
        """Stop following a creator.

        Raises:
            NotFoundException: If the viewer does not follow the creator
        """
        subscription = await self._repo.get_for(self._session, viewer_id, creator_id)
        if subscription is None:
            raise NotFoundException(
                detail=f"Not subscribed to user {creator_id}",
                type="subscription-not-found",
                extra={"creator_id": creator_id},
            )
        await self._repo.delete(self._session, subscription)
        return subscription

    async def list_creators(
        self,
        viewer_id: str,
        *,
        cursor: Cursor | str | None = None,
        limit: int,
    ) -> Page[Row[Any]]:
        return await self._repo.list_creators(
            self._session, viewer_id, cursor=cursor, limit=limit
        )


__all__ = ["SubscriptionService"]
