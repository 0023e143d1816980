"""Repository for the subscriptions feature."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import select

from video_service.core.database import BaseRepository, attach
from video_service.core.pagination import KeysetOrder, KeysetPaginator
from video_service.features.subscriptions.models import Subscription
from video_service.features.users.models import User
from video_service.features.users.repository import SUBSCRIBER_COUNT

if TYPE_CHECKING:
    from sqlalchemy import Row
    from sqlalchemy.ext.asyncio import AsyncSession

    from video_service.core.pagination import Cursor, Page


class SubscriptionRepository(BaseRepository[Subscription]):
    def __init__(self) -> None:
        super().__init__(Subscription)
        # creator_id is unique per viewer, so it breaks sort-key ties
        self._creators = KeysetPaginator(
            "subscriptions",
            KeysetOrder(Subscription.updated_at, Subscription.creator_id),
        )

    async def get_for(
        self,
        session: AsyncSession,
        viewer_id: str,
        creator_id: str,
    ) -> Subscription | None:
        return await self.get(session, (viewer_id, creator_id))

    async def list_creators(
        self,
        session: AsyncSession,
        viewer_id: str,
        *,
        cursor: Cursor | str | None = None,
        limit: int,
    ) -> Page[Row[Any]]:
        """Creators ``viewer_id`` follows, most recently subscribed first."""
        stmt = attach(
            select(Subscription, User).join(User, User.id == Subscription.creator_id),
            SUBSCRIBER_COUNT,
        )
        return await self._creators.fetch_page(
            session,
            stmt,
            where=Subscription.viewer_id == viewer_id,
            cursor=cursor,
            limit=limit,
        )


_subscription_repository: SubscriptionRepository | None = None


def get_subscription_repository() -> SubscriptionRepository:
    """Get SubscriptionRepository instance."""
    global _subscription_repository
    if _subscription_repository is None:
        _subscription_repository = SubscriptionRepository()
    return _subscription_repository


__all__ = ["SubscriptionRepository", "get_subscription_repository"]
