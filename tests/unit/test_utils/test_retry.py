"""Unit tests for the async retry decorator."""

from __future__ import annotations

import pytest

from video_service.utils import RetryError, RetryStrategy, retry


class Flaky:
    """Fails ``failures`` times with ``error`` before succeeding."""

    def __init__(self, failures: int, error: Exception) -> None:
        self.failures = failures
        self.error = error
        self.calls = 0
        self.__name__ = "flaky"

    async def __call__(self) -> str:
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error
        return "ok"


@pytest.mark.asyncio
async def test_succeeds_after_transient_failures():
    flaky = Flaky(2, ConnectionError("reset"))
    retried: list[int] = []

    wrapped = retry(
        max_attempts=3,
        initial_delay=0.001,
        jitter=False,
        exceptions=(ConnectionError,),
        on_retry=lambda exc, attempt: retried.append(attempt),
    )(flaky)

    assert await wrapped() == "ok"
    assert flaky.calls == 3
    assert retried == [1, 2]


@pytest.mark.asyncio
async def test_exhausted_attempts_raise_retry_error():
    flaky = Flaky(5, TimeoutError("slow"))

    wrapped = retry(max_attempts=2, initial_delay=0.001, jitter=False)(flaky)

    with pytest.raises(RetryError) as exc_info:
        await wrapped()

    assert exc_info.value.attempts == 2
    assert isinstance(exc_info.value.last_exception, TimeoutError)
    assert exc_info.value.failures == ["TimeoutError", "TimeoutError"]
    assert flaky.calls == 2


@pytest.mark.asyncio
async def test_non_retryable_error_propagates_immediately():
    flaky = Flaky(1, KeyError("bad"))

    wrapped = retry(max_attempts=3, initial_delay=0.001, exceptions=(ConnectionError,))(flaky)

    with pytest.raises(KeyError):
        await wrapped()
    assert flaky.calls == 1


@pytest.mark.asyncio
async def test_retry_if_predicate_overrides_exception_types():
    flaky = Flaky(1, ValueError("retry me"))

    wrapped = retry(
        max_attempts=2,
        initial_delay=0.001,
        exceptions=(ConnectionError,),
        retry_if=lambda exc: "retry" in str(exc),
    )(flaky)

    assert await wrapped() == "ok"


class TestRetryStrategy:
    def test_exponential_delay_is_capped(self):
        strategy = RetryStrategy(initial_delay=1.0, max_delay=5.0, jitter=False)

        assert [strategy.delay_before(n) for n in range(4)] == [1.0, 2.0, 4.0, 5.0]

    def test_jitter_stays_in_range(self):
        strategy = RetryStrategy(initial_delay=2.0, jitter=True, jitter_range=(0.5, 1.5))

        for _ in range(20):
            assert 1.0 <= strategy.delay_before(0) <= 3.0
