"""Feature tests for user profiles and identity sync."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from video_service.core.exceptions import NotFoundException
from video_service.features.subscriptions.models import Subscription
from video_service.features.users.schemas import UserSync
from video_service.features.users.service import UserService
from video_service.features.videos.models import Visibility

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


@pytest.mark.asyncio
async def test_sync_identity_creates_then_refreshes(db_session: AsyncSession) -> None:
    service = UserService(db_session)

    created = await service.sync_identity("sub_new", UserSync(name="Alice"))
    refreshed = await service.sync_identity(
        "sub_new", UserSync(name="Alice B.", image_url="https://avatars.test/a.png")
    )

    assert refreshed.id == created.id
    assert refreshed.name == "Alice B."
    assert refreshed.image_url == "https://avatars.test/a.png"
    assert (await service.resolve_subject("sub_new")).id == created.id


@pytest.mark.asyncio
async def test_unknown_subject_resolves_to_none(db_session: AsyncSession) -> None:
    assert await UserService(db_session).resolve_subject("sub_nobody") is None


@pytest.mark.asyncio
async def test_profile_counts(
    db_session: AsyncSession, create_user, create_video
) -> None:
    alice = await create_user("Alice")
    fan = await create_user("Fan")
    stranger = await create_user("Stranger")
    await create_video(alice)
    await create_video(alice, visibility=Visibility.PRIVATE)
    db_session.add(Subscription(viewer_id=fan.id, creator_id=alice.id))
    await db_session.flush()
    service = UserService(db_session)

    as_fan = await service.get_profile(alice.id, viewer_id=fan.id)
    as_stranger = await service.get_profile(alice.id, viewer_id=stranger.id)
    anonymous = await service.get_profile(alice.id, viewer_id=None)

    assert as_fan.name == "Alice"
    assert as_fan.subscriber_count == 1
    assert as_fan.video_count == 2
    assert as_fan.viewer_subscribed is True
    assert as_stranger.viewer_subscribed is False
    assert anonymous.viewer_subscribed is False


@pytest.mark.asyncio
async def test_missing_profile(db_session: AsyncSession) -> None:
    with pytest.raises(NotFoundException) as exc_info:
        await UserService(db_session).get_profile("missing", viewer_id=None)

    assert exc_info.value.type == "user-not-found"
