"""Shared utilities."""

from video_service.utils.retry import RetryError, RetryStrategy, retry

__all__ = ["RetryError", "RetryStrategy", "retry"]
