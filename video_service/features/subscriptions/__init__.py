"""Subscriptions feature: viewers following creators."""

from __future__ import annotations

from .models import Subscription
from .schemas import SubscribedCreatorResponse, SubscriptionResponse

__all__ = ["SubscribedCreatorResponse", "Subscription", "SubscriptionResponse"]
