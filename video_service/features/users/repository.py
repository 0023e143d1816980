"""Repository for the users feature."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import select

from video_service.core.database import BaseRepository, CountOf, Exists, attach
from video_service.features.subscriptions.models import Subscription
from video_service.features.users.models import User
from video_service.features.videos.models import Video

if TYPE_CHECKING:
    from sqlalchemy import Row
    from sqlalchemy.ext.asyncio import AsyncSession


SUBSCRIBER_COUNT = CountOf("subscriber_count", Subscription, Subscription.creator_id == User.id)


def viewer_subscribed(viewer_id: str | None) -> Exists:
    """Whether ``viewer_id`` follows the ``User`` in the enclosing query.

    A missing viewer compares against NULL and is never subscribed.
    """
    return Exists(
        "viewer_subscribed",
        Subscription,
        Subscription.creator_id == User.id,
        Subscription.viewer_id == viewer_id,
    )


class UserRepository(BaseRepository[User]):
    """Repository for user profiles."""

    def __init__(self) -> None:
        super().__init__(User)

    async def get_by_external_id(self, session: AsyncSession, external_id: str) -> User | None:
        return await self.get_by(session, User.external_id, external_id)

    async def get_profile(
        self,
        session: AsyncSession,
        user_id: str,
        *,
        viewer_id: str | None,
    ) -> Row[Any] | None:
        """Fetch a user with subscriber/video counts and the viewer's subscription flag."""
        stmt = attach(
            select(User).where(User.id == user_id),
            SUBSCRIBER_COUNT,
            CountOf("video_count", Video, Video.user_id == User.id),
            viewer_subscribed(viewer_id),
        )
        result = await session.execute(stmt)
        return result.one_or_none()


_user_repository: UserRepository | None = None


def get_user_repository() -> UserRepository:
    """Get UserRepository instance."""
    global _user_repository
    if _user_repository is None:
        _user_repository = UserRepository()
    return _user_repository


__all__ = [
    "SUBSCRIBER_COUNT",
    "UserRepository",
    "get_user_repository",
    "viewer_subscribed",
]
