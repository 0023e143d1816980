"""Backoff policy for the retry decorator."""

from __future__ import annotations

import random
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RetryStrategy:
    """Which failures to retry and how long to wait before the next attempt.

    The wait before retry ``n`` (0-based) is
    ``min(initial_delay * exponential_base**n, max_delay)``, scaled by a
    random factor from ``jitter_range`` when ``jitter`` is on.
    """

    max_attempts: int = 3
    initial_delay: float = 1.0
    max_delay: float = 60.0
    exponential_base: float = 2.0
    jitter: bool = True
    jitter_range: tuple[float, float] = (0.5, 1.5)
    exceptions: tuple[type[Exception], ...] = (Exception,)
    retry_if: Callable[[Exception], bool] | None = None

    def should_retry(self, exception: Exception) -> bool:
        # an explicit predicate wins over the exception types
        if self.retry_if is not None:
            return self.retry_if(exception)
        return isinstance(exception, self.exceptions)

    def delay_before(self, retry_number: int) -> float:
        delay = min(self.initial_delay * self.exponential_base**retry_number, self.max_delay)
        if not self.jitter:
            return delay
        low, high = self.jitter_range
        return delay * random.uniform(low, high)
