"""Caller identity dependencies.

The identity provider is trusted upstream: it authenticates the request and
forwards the subject in the header named by ``AuthSettings.subject_header``
(``X-Auth-Subject`` by default). These dependencies map that subject to the
local ``User`` row:

    @router.get("/playlists")
    async def list_playlists(user: CurrentUser, ...):
        ...

    @router.get("/videos/{video_id}")
    async def get_video(viewer: OptionalUser, ...):
        ...
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from video_service.core.dependencies.database import get_db_session
from video_service.core.exceptions import UnauthorizedException
from video_service.core.settings import get_auth_settings
from video_service.features.users.models import User
from video_service.features.users.service import UserService
from video_service.infra.logging import set_log_context


def get_subject(request: Request) -> str | None:
    """Read the authenticated subject forwarded by the identity provider."""
    subject = request.headers.get(get_auth_settings().subject_header)
    if subject is None or not subject.strip():
        return None
    return subject.strip()


def require_subject(subject: Annotated[str | None, Depends(get_subject)]) -> str:
    """Require an authenticated subject, even one without a local profile yet."""
    if subject is None:
        raise UnauthorizedException()
    return subject


async def get_optional_user(
    subject: Annotated[str | None, Depends(get_subject)],
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> User | None:
    """Resolve the caller, or None for anonymous or unknown subjects."""
    if subject is None:
        return None
    user = await UserService(session).resolve_subject(subject)
    if user is not None:
        set_log_context(viewer_id=user.id)
    return user


async def get_current_user(
    subject: Annotated[str, Depends(require_subject)],
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> User:
    """Resolve the caller or fail with 401."""
    user = await UserService(session).resolve_subject(subject)
    if user is None:
        raise UnauthorizedException(
            detail="No user profile exists for the authenticated subject",
            type="unknown-subject",
        )
    set_log_context(viewer_id=user.id)
    return user


Subject = Annotated[str, Depends(require_subject)]
CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[User | None, Depends(get_optional_user)]


__all__ = [
    "CurrentUser",
    "OptionalUser",
    "Subject",
    "get_current_user",
    "get_optional_user",
    "get_subject",
    "require_subject",
]
