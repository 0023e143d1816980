"""Service layer for the users feature."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from video_service.core.exceptions import NotFoundException
from video_service.features.users.models import User
from video_service.features.users.repository import UserRepository, get_user_repository
from video_service.features.users.schemas import UserProfileResponse, UserSummary
from video_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from video_service.features.users.schemas import UserSync

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)


class UserService:
    """Service for user profiles and identity resolution."""

    def __init__(
        self,
        session: AsyncSession,
        repo: UserRepository | None = None,
    ) -> None:
        self._session = session
        self._repo = repo or get_user_repository()

    async def resolve_subject(self, external_id: str) -> User | None:
        """Map an identity-provider subject to the local user, if any."""
        return await self._repo.get_by_external_id(self._session, external_id)

    async def sync_identity(self, external_id: str, payload: UserSync) -> User:
        """Create or refresh the local profile of an authenticated identity."""
        user = await self._repo.get_by_external_id(self._session, external_id)
        if user is None:
            user = await self._repo.create(
                self._session,
                User(external_id=external_id, name=payload.name, image_url=payload.image_url),
            )
            logger.info("User created", extra={"user_id": user.id})
            return user

        user.name = payload.name
        user.image_url = payload.image_url
        await self._session.flush()
        lazy_logger.debug(lambda: f"user.sync: refreshed profile of {user.id}")
        return user

    async def get_profile(self, user_id: str, *, viewer_id: str | None) -> UserProfileResponse:
        """Get a user's public profile.

        Raises:
            NotFoundException: If the user does not exist
        """
        row = await self._repo.get_profile(self._session, user_id, viewer_id=viewer_id)
        if row is None:
            raise NotFoundException(
                detail=f"User {user_id} not found",
                type="user-not-found",
                extra={"user_id": user_id},
            )
        return UserProfileResponse(
            **UserSummary.model_validate(row.User).model_dump(),
            created_at=row.User.created_at,
            subscriber_count=row.subscriber_count,
            video_count=row.video_count,
            viewer_subscribed=bool(row.viewer_subscribed),
        )


__all__ = ["UserService"]
