"""Helper functions for recording metrics from application code.

Call sites use these functions rather than touching collectors directly so
label names stay consistent.
"""

from __future__ import annotations

from video_service.infra.metrics import prometheus


def track_page(collection: str, size: int, has_more: bool) -> None:
    """Record one keyset page fetch.

    Example:
        track_page("videos.trending", 20, has_more=True)
    """
    prometheus.pagination_page_size.labels(collection=collection).observe(size)
    prometheus.pagination_requests_total.labels(
        collection=collection,
        has_more=str(has_more).lower(),
    ).inc()


def track_external_call(provider: str, operation: str, outcome: str, duration: float) -> None:
    """Record a third-party provider call.

    Args:
        provider: Provider name (media, uploads, workflow).
        operation: HTTP verb and path template, e.g. ``GET /video/v1/assets``.
        outcome: ``success`` or ``error``.
        duration: Wall time in seconds.
    """
    prometheus.external_requests_total.labels(
        provider=provider,
        operation=operation,
        outcome=outcome,
    ).inc()
    prometheus.external_request_duration_seconds.labels(
        provider=provider,
        operation=operation,
    ).observe(duration)


def track_query_duration(operation: str, duration: float) -> None:
    """Record the execution time of a database statement."""
    prometheus.database_query_duration_seconds.labels(operation=operation).observe(duration)


def track_retry_attempt(operation: str, attempt_number: int) -> None:
    """Track a retry attempt.

    Example:
        track_retry_attempt("get", 2)
    """
    prometheus.retry_attempts_total.labels(
        operation=operation,
        attempt_number=str(attempt_number),
    ).inc()


def track_retry_exhausted(operation: str) -> None:
    """Track when all retry attempts are exhausted."""
    prometheus.retry_exhausted_total.labels(operation=operation).inc()


def track_retry_success(operation: str, attempts_needed: int) -> None:
    """Track successful operation after retries."""
    prometheus.retry_success_after_failure_total.labels(
        operation=operation,
        attempts_needed=str(attempts_needed),
    ).inc()


def track_error(error_type: str, endpoint: str, status_code: int) -> None:
    """Track an application error rendered as a problem response.

    Example:
        track_error("video-not-found", "/api/v1/videos/abc", 404)
    """
    prometheus.errors_total.labels(
        error_type=error_type,
        endpoint=endpoint,
        status_code=str(status_code),
    ).inc()


def track_validation_error(endpoint: str, field: str) -> None:
    prometheus.validation_errors_total.labels(endpoint=endpoint, field=field).inc()


def track_unhandled_exception(exception_type: str, endpoint: str) -> None:
    prometheus.unhandled_exceptions_total.labels(
        exception_type=exception_type,
        endpoint=endpoint,
    ).inc()
