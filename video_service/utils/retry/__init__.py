"""Retry with exponential backoff for transient provider and database failures."""

from __future__ import annotations

from video_service.utils.retry.decorator import retry
from video_service.utils.retry.exceptions import RetryError
from video_service.utils.retry.strategies import RetryStrategy

__all__ = ["RetryError", "RetryStrategy", "retry"]
