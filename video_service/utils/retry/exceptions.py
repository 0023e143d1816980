"""Error raised when a retried call never succeeds."""

from __future__ import annotations


class RetryError(Exception):
    """Every attempt failed with a retryable exception.

    Attributes:
        last_exception: The exception raised by the final attempt.
        attempts: Number of attempts made.
        failures: Exception class name of each failed attempt, in order.
        total_delay: Seconds spent waiting between attempts.
    """

    def __init__(
        self,
        last_exception: Exception,
        attempts: int,
        failures: list[str] | None = None,
        total_delay: float = 0.0,
    ) -> None:
        self.last_exception = last_exception
        self.attempts = attempts
        self.failures = failures or []
        self.total_delay = total_delay
        super().__init__(f"Failed after {attempts} attempts. Last error: {last_exception}")
