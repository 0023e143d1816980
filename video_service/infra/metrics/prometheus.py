"""Prometheus metrics for the video service.

All collectors live in a dedicated registry exposed by ``GET /metrics``.
"""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Histogram

REGISTRY = CollectorRegistry()

# 1ms to 10s
DEFAULT_LATENCY_BUCKETS = (
    0.001,
    0.005,
    0.01,
    0.025,
    0.05,
    0.1,
    0.25,
    0.5,
    1.0,
    2.5,
    5.0,
    10.0,
)

# Page sizes are capped at 100
PAGE_SIZE_BUCKETS = (0, 1, 5, 10, 20, 50, 100)

# Database metrics
database_query_duration_seconds = Histogram(
    "database_query_duration_seconds",
    "Database statement execution time in seconds",
    ["operation"],
    buckets=DEFAULT_LATENCY_BUCKETS,
    registry=REGISTRY,
)

# Pagination metrics
pagination_page_size = Histogram(
    "pagination_page_size",
    "Number of items returned per keyset page",
    ["collection"],
    buckets=PAGE_SIZE_BUCKETS,
    registry=REGISTRY,
)

pagination_requests_total = Counter(
    "pagination_requests_total",
    "Keyset page fetches by collection and whether another page exists",
    ["collection", "has_more"],
    registry=REGISTRY,
)

# External provider metrics
external_requests_total = Counter(
    "external_requests_total",
    "Third-party provider calls by outcome",
    ["provider", "operation", "outcome"],
    registry=REGISTRY,
)

external_request_duration_seconds = Histogram(
    "external_request_duration_seconds",
    "Third-party provider call duration in seconds",
    ["provider", "operation"],
    buckets=DEFAULT_LATENCY_BUCKETS,
    registry=REGISTRY,
)

# Retry metrics
retry_attempts_total = Counter(
    "retry_attempts_total",
    "Retry attempts by operation and attempt number",
    ["operation", "attempt_number"],
    registry=REGISTRY,
)

retry_exhausted_total = Counter(
    "retry_exhausted_total",
    "Operations that failed after exhausting all retries",
    ["operation"],
    registry=REGISTRY,
)

retry_success_after_failure_total = Counter(
    "retry_success_after_failure_total",
    "Operations that succeeded after at least one retry",
    ["operation", "attempts_needed"],
    registry=REGISTRY,
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Application errors rendered as problem responses",
    ["error_type", "endpoint", "status_code"],
    registry=REGISTRY,
)

validation_errors_total = Counter(
    "validation_errors_total",
    "Request validation failures by field",
    ["endpoint", "field"],
    registry=REGISTRY,
)

unhandled_exceptions_total = Counter(
    "unhandled_exceptions_total",
    "Exceptions that reached the generic handler",
    ["exception_type", "endpoint"],
    registry=REGISTRY,
)
