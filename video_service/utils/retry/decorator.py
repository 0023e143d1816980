"""Async retry decorator used by provider clients and database startup."""

from __future__ import annotations

import asyncio
import logging
from functools import wraps
from typing import TYPE_CHECKING, ParamSpec, TypeVar

from video_service.infra.metrics.tracking import (
    track_retry_attempt,
    track_retry_exhausted,
    track_retry_success,
)

from .exceptions import RetryError
from .strategies import RetryStrategy

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def retry(
    max_attempts: int = 3,
    initial_delay: float = 1.0,
    max_delay: float = 60.0,
    exponential_base: float = 2.0,
    jitter: bool = True,
    exceptions: tuple[type[Exception], ...] = (Exception,),
    retry_if: Callable[[Exception], bool] | None = None,
    on_retry: Callable[[Exception, int], None] | None = None,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Retry an async callable with exponential backoff.

    Exceptions the strategy does not retry propagate unchanged. When the last
    of ``max_attempts`` fails, its exception is wrapped in ``RetryError``.
    ``on_retry(exc, attempt)`` runs before each wait.

    Example:
        @retry(max_attempts=3, initial_delay=0.5, exceptions=(httpx.TransportError,))
        async def _send(self, request: httpx.Request) -> httpx.Response: ...
    """
    strategy = RetryStrategy(
        max_attempts=max_attempts,
        initial_delay=initial_delay,
        max_delay=max_delay,
        exponential_base=exponential_base,
        jitter=jitter,
        exceptions=exceptions,
        retry_if=retry_if,
    )

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        operation = func.__name__

        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            failures: list[str] = []
            waited = 0.0
            attempt = 0

            while True:
                attempt += 1
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    if not strategy.should_retry(e):
                        raise
                    failures.append(type(e).__name__)

                    if attempt >= strategy.max_attempts:
                        track_retry_exhausted(operation)
                        logger.error(
                            "Retries exhausted",
                            extra={
                                "operation": operation,
                                "attempts": attempt,
                                "error": str(e),
                                "total_delay": round(waited, 3),
                            },
                        )
                        raise RetryError(e, attempt, failures, waited) from e

                    delay = strategy.delay_before(attempt - 1)
                    waited += delay
                    track_retry_attempt(operation, attempt + 1)
                    logger.warning(
                        "Retrying after failure",
                        extra={
                            "operation": operation,
                            "attempt": attempt,
                            "max_attempts": strategy.max_attempts,
                            "delay": round(delay, 3),
                            "error": str(e),
                        },
                    )
                    if on_retry is not None:
                        on_retry(e, attempt)
                    await asyncio.sleep(delay)
                    continue

                if failures:
                    track_retry_success(operation, attempt)
                return result

        return wrapper

    return decorator
