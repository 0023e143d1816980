"""Feature tests for subscriptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from video_service.core.exceptions import BadRequestException, NotFoundException
from video_service.features.subscriptions.schemas import SubscribedCreatorResponse
from video_service.features.subscriptions.service import SubscriptionService

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


@pytest.fixture
def service(db_session: AsyncSession) -> SubscriptionService:
    return SubscriptionService(db_session)


@pytest.mark.asyncio
async def test_cannot_subscribe_to_self(service: SubscriptionService, create_user) -> None:
    alice = await create_user("Alice")

    with pytest.raises(BadRequestException) as exc_info:
        await service.subscribe(alice.id, alice.id)

    assert exc_info.value.type == "self-subscription"


@pytest.mark.asyncio
async def test_unknown_creator(service: SubscriptionService, create_user) -> None:
    alice = await create_user("Alice")

    with pytest.raises(NotFoundException) as exc_info:
        await service.subscribe(alice.id, "missing")

    assert exc_info.value.type == "user-not-found"


@pytest.mark.asyncio
async def test_subscribe_is_idempotent(service: SubscriptionService, create_user) -> None:
    alice = await create_user("Alice")
    bob = await create_user("Bob")

    first = await service.subscribe(alice.id, bob.id)
    second = await service.subscribe(alice.id, bob.id)

    assert first is second
    page = await service.list_creators(alice.id, limit=10)
    assert len(page.items) == 1


@pytest.mark.asyncio
async def test_unsubscribe(service: SubscriptionService, create_user) -> None:
    alice = await create_user("Alice")
    bob = await create_user("Bob")
    await service.subscribe(alice.id, bob.id)

    await service.unsubscribe(alice.id, bob.id)

    with pytest.raises(NotFoundException) as exc_info:
        await service.unsubscribe(alice.id, bob.id)
    assert exc_info.value.type == "subscription-not-found"


@pytest.mark.asyncio
async def test_list_creators_newest_first_with_counts(
    service: SubscriptionService, create_user
) -> None:
    viewer = await create_user("Viewer")
    other = await create_user("Other")
    popular = await create_user("Popular")
    niche = await create_user("Niche")
    await service.subscribe(other.id, popular.id)
    await service.subscribe(viewer.id, popular.id)
    await service.subscribe(viewer.id, niche.id)

    first = await service.list_creators(viewer.id, limit=1)
    rest = await service.list_creators(viewer.id, cursor=first.next_cursor, limit=1)
    creators = [SubscribedCreatorResponse.from_row(row) for row in [*first.items, *rest.items]]

    assert [c.id for c in creators] == [niche.id, popular.id]
    assert [c.subscriber_count for c in creators] == [1, 2]
    assert rest.next_cursor is None
