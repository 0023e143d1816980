"""Prometheus metrics endpoint for observability.

Endpoints:
    GET /metrics - Prometheus scrape endpoint

Metrics Exposed:
    Database:
        - database_query_duration_seconds - Statement execution time by verb

    Pagination:
        - pagination_page_size - Items returned per page by collection
        - pagination_requests_total - Page fetches by collection and has_more

    Providers:
        - external_requests_total - Provider calls by provider, operation, outcome
        - external_request_duration_seconds - Provider call latency
        - retry_attempts_total / retry_exhausted_total / retry_success_after_failure_total

    Errors:
        - errors_total, validation_errors_total, unhandled_exceptions_total
"""

from __future__ import annotations

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from video_service.infra.metrics.prometheus import REGISTRY

router = APIRouter(tags=["observability"])


@router.get("/metrics")
async def metrics() -> Response:
    """Expose Prometheus metrics in text exposition format."""
    data = generate_latest(REGISTRY)
    return Response(
        content=data,
        media_type=CONTENT_TYPE_LATEST,
        headers={"Cache-Control": "no-cache, no-store, must-revalidate"},
    )
