"""Logging infrastructure.

Structured JSONL logging with automatic context injection, a non-blocking
QueueHandler/QueueListener pipeline, lazy DEBUG messages and OpenTelemetry
trace correlation.

Basic usage:
    import logging

    from video_service.infra.logging import get_lazy_logger, set_log_context

    logger = logging.getLogger(__name__)
    lazy_logger = get_lazy_logger(__name__)

    set_log_context(request_id="abc-123")
    logger.info("Video created", extra={"video_id": video.id})
    lazy_logger.debug(lambda: f"page size={len(page.items)}")
"""

from video_service.infra.logging.config import (
    complete,
    configure_logging,
    setup_logging,
    shutdown,
)
from video_service.infra.logging.context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    remove_from_log_context,
    set_log_context,
)
from video_service.infra.logging.formatters import JSONFormatter
from video_service.infra.logging.lazy import (
    LazyLoggerAdapter,
    LazyString,
    get_lazy_logger,
)

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "LazyLoggerAdapter",
    "LazyString",
    "clear_log_context",
    "complete",
    "configure_logging",
    "get_lazy_logger",
    "get_log_context",
    "remove_from_log_context",
    "set_log_context",
    "setup_logging",
    "shutdown",
]
