"""Feature tests for playlists and playlist membership."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from video_service.core.exceptions import ConflictException, NotFoundException
from video_service.features.playlists.schemas import (
    PlaylistCreate,
    PlaylistForVideoResponse,
    PlaylistSummaryResponse,
)
from video_service.features.playlists.service import PlaylistService
from video_service.features.videos.models import Visibility

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


@pytest.fixture
def service(db_session: AsyncSession) -> PlaylistService:
    return PlaylistService(db_session)


class TestPlaylists:
    @pytest.mark.asyncio
    async def test_create_strips_name(self, service: PlaylistService, create_user) -> None:
        alice = await create_user("Alice")

        playlist = await service.create_playlist(
            alice.id, PlaylistCreate(name="  Watch later ", description="Weekend")
        )

        assert playlist.name == "Watch later"
        assert playlist.user_id == alice.id

    def test_blank_name_rejected(self) -> None:
        with pytest.raises(ValueError, match="cannot be blank"):
            PlaylistCreate(name="   ")

    @pytest.mark.asyncio
    async def test_summary_counts_and_latest_thumbnail(
        self, service: PlaylistService, create_user, create_video
    ) -> None:
        alice = await create_user("Alice")
        first = await create_video(alice, thumbnail_url="https://image.test/first.jpg")
        second = await create_video(alice, thumbnail_url="https://image.test/second.jpg")
        playlist = await service.create_playlist(alice.id, PlaylistCreate(name="Mix"))
        empty = await service.create_playlist(alice.id, PlaylistCreate(name="Empty"))
        await service.add_video(playlist.id, first.id, alice.id)
        await service.add_video(playlist.id, second.id, alice.id)

        page = await service.list_playlists(alice.id, limit=10)
        summaries = {s.id: s for s in map(PlaylistSummaryResponse.from_row, page.items)}

        assert summaries[playlist.id].video_count == 2
        assert summaries[playlist.id].thumbnail_url == "https://image.test/second.jpg"
        assert summaries[empty.id].video_count == 0
        assert summaries[empty.id].thumbnail_url is None

    @pytest.mark.asyncio
    async def test_lists_only_own_playlists(self, service: PlaylistService, create_user) -> None:
        alice = await create_user("Alice")
        bob = await create_user("Bob")
        mine = await service.create_playlist(alice.id, PlaylistCreate(name="Mine"))
        await service.create_playlist(bob.id, PlaylistCreate(name="Theirs"))

        page = await service.list_playlists(alice.id, limit=10)

        assert [row.Playlist.id for row in page.items] == [mine.id]

    @pytest.mark.asyncio
    async def test_foreign_playlist_is_not_found(
        self, service: PlaylistService, create_user
    ) -> None:
        alice = await create_user("Alice")
        mallory = await create_user("Mallory")
        playlist = await service.create_playlist(alice.id, PlaylistCreate(name="Private"))

        with pytest.raises(NotFoundException) as exc_info:
            await service.remove_playlist(playlist.id, mallory.id)

        assert exc_info.value.type == "playlist-not-found"

    @pytest.mark.asyncio
    async def test_remove_playlist(self, service: PlaylistService, create_user) -> None:
        alice = await create_user("Alice")
        playlist = await service.create_playlist(alice.id, PlaylistCreate(name="Gone"))

        await service.remove_playlist(playlist.id, alice.id)

        page = await service.list_playlists(alice.id, limit=10)
        assert list(page.items) == []


class TestMembership:
    @pytest.mark.asyncio
    async def test_adding_twice_conflicts(
        self, service: PlaylistService, create_user, create_video
    ) -> None:
        alice = await create_user("Alice")
        video = await create_video(alice)
        playlist = await service.create_playlist(alice.id, PlaylistCreate(name="Mix"))
        await service.add_video(playlist.id, video.id, alice.id)

        with pytest.raises(ConflictException) as exc_info:
            await service.add_video(playlist.id, video.id, alice.id)

        assert exc_info.value.type == "playlist-video-exists"
        assert exc_info.value.status_code == 409

    @pytest.mark.asyncio
    async def test_add_missing_video(self, service: PlaylistService, create_user) -> None:
        alice = await create_user("Alice")
        playlist = await service.create_playlist(alice.id, PlaylistCreate(name="Mix"))

        with pytest.raises(NotFoundException) as exc_info:
            await service.add_video(playlist.id, "missing", alice.id)

        assert exc_info.value.type == "video-not-found"

    @pytest.mark.asyncio
    async def test_add_to_foreign_playlist(
        self, service: PlaylistService, create_user, create_video
    ) -> None:
        alice = await create_user("Alice")
        mallory = await create_user("Mallory")
        video = await create_video(mallory)
        playlist = await service.create_playlist(alice.id, PlaylistCreate(name="Mix"))

        with pytest.raises(NotFoundException) as exc_info:
            await service.add_video(playlist.id, video.id, mallory.id)

        assert exc_info.value.type == "playlist-not-found"

    @pytest.mark.asyncio
    async def test_remove_non_member(
        self, service: PlaylistService, create_user, create_video
    ) -> None:
        alice = await create_user("Alice")
        video = await create_video(alice)
        playlist = await service.create_playlist(alice.id, PlaylistCreate(name="Mix"))

        with pytest.raises(NotFoundException) as exc_info:
            await service.remove_video(playlist.id, video.id, alice.id)

        assert exc_info.value.type == "playlist-video-not-found"

    @pytest.mark.asyncio
    async def test_add_then_remove(
        self, service: PlaylistService, create_user, create_video
    ) -> None:
        alice = await create_user("Alice")
        video = await create_video(alice)
        playlist = await service.create_playlist(alice.id, PlaylistCreate(name="Mix"))

        await service.add_video(playlist.id, video.id, alice.id)
        await service.remove_video(playlist.id, video.id, alice.id)

        page = await service.list_videos(playlist.id, alice.id, limit=10)
        assert list(page.items) == []

    @pytest.mark.asyncio
    async def test_playlists_flag_containing_video(
        self, service: PlaylistService, create_user, create_video
    ) -> None:
        alice = await create_user("Alice")
        video = await create_video(alice)
        with_video = await service.create_playlist(alice.id, PlaylistCreate(name="With"))
        without_video = await service.create_playlist(alice.id, PlaylistCreate(name="Without"))
        await service.add_video(with_video.id, video.id, alice.id)

        page = await service.list_for_video(alice.id, video.id, limit=10)
        flags = {
            item.id: item.contains_video
            for item in map(PlaylistForVideoResponse.from_video_row, page.items)
        }

        assert flags == {with_video.id: True, without_video.id: False}

    @pytest.mark.asyncio
    async def test_playlist_videos_hide_private(
        self, service: PlaylistService, create_user, create_video, at
    ) -> None:
        alice = await create_user("Alice")
        bob = await create_user("Bob")
        older = await create_video(bob, "older", updated_at=at(1))
        newer = await create_video(bob, "newer", updated_at=at(2))
        hidden = await create_video(bob, "hidden", visibility=Visibility.PRIVATE, updated_at=at(3))
        playlist = await service.create_playlist(alice.id, PlaylistCreate(name="Mix"))
        for video in (older, newer, hidden):
            await service.add_video(playlist.id, video.id, alice.id)

        first = await service.list_videos(playlist.id, alice.id, limit=1)
        rest = await service.list_videos(
            playlist.id, alice.id, cursor=first.next_cursor, limit=1
        )

        assert [row.Video.id for row in first.items] == [newer.id]
        assert [row.Video.id for row in rest.items] == [older.id]
        assert rest.next_cursor is None
