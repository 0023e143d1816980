"""Pydantic schemas for the subscriptions feature."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict

from video_service.features.users.schemas import UserSummary

if TYPE_CHECKING:
    from sqlalchemy import Row


class SubscriptionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    viewer_id: str
    creator_id: str
    created_at: datetime
    updated_at: datetime


class SubscribedCreatorResponse(UserSummary):
    """A creator the caller follows."""

    subscriber_count: int = 0
    subscribed_at: datetime

    @classmethod
    def from_row(cls, row: Row[Any]) -> SubscribedCreatorResponse:
        return cls(
            **UserSummary.model_validate(row.User).model_dump(),
            subscriber_count=row.subscriber_count,
            subscribed_at=row.Subscription.updated_at,
        )


__all__ = ["SubscribedCreatorResponse", "SubscriptionResponse"]
