"""Logging configuration setup.

Provides production-ready logging configuration using:
- dictConfig for formatters and root filters
- QueueHandler + QueueListener for non-blocking I/O
- ContextInjectingFilter for automatic context propagation
- JSONL format for machine parsing
"""

from __future__ import annotations

import atexit
import logging
import logging.config
import time
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path
from queue import Queue
from typing import TYPE_CHECKING, Any

from video_service.infra.logging.formatters import JSONFormatter

if TYPE_CHECKING:
    from video_service.core.settings.logs import LoggingSettings

_log_queue: Queue[logging.LogRecord] | None = None
_listener: QueueListener | None = None
_queue_handler: QueueHandler | None = None
_LOGGING_INITIALIZED = False

_TEXT_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def complete(max_wait: float = 5.0) -> None:
    """Wait until queued log records have been handed to the handlers."""
    if _log_queue is None or _listener is None:
        return

    start = time.monotonic()
    while not _log_queue.empty() and (time.monotonic() - start) < max_wait:
        time.sleep(0.01)


def shutdown() -> None:
    """Flush pending records and stop the QueueListener."""
    global _log_queue, _listener, _queue_handler, _LOGGING_INITIALIZED

    if _listener is not None:
        complete()
        _listener.stop()
        _listener = None

    if _queue_handler is not None:
        logging.getLogger().removeHandler(_queue_handler)
        _queue_handler = None

    _log_queue = None
    _LOGGING_INITIALIZED = False


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    service_name: str = "video-service",
    force: bool = False,
) -> None:
    """Ensure logging is configured once across entrypoints.

    Args:
        log_settings: Optional logging settings instance. If omitted, settings
            are loaded via get_logging_settings().
        service_name: Static ``service`` field added to JSON records.
        force: Reconfigure logging even if it was already initialized.
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED and not force:
        return

    if log_settings is None:
        from video_service.core.settings import get_logging_settings

        log_settings = get_logging_settings()

    configure_logging(
        log_level=log_settings.level,
        file_path=log_settings.log_file,
        json_logs=log_settings.json_format,
        console_enabled=log_settings.console_enabled,
        file_max_bytes=log_settings.max_bytes,
        file_backup_count=log_settings.backup_count,
        include_uvicorn=log_settings.include_uvicorn,
        service_name=service_name,
    )
    _LOGGING_INITIALIZED = True


def configure_logging(
    log_level: str = "INFO",
    file_path: str | Path | None = None,
    json_logs: bool = True,
    console_enabled: bool = True,
    include_context: bool = True,
    file_max_bytes: int = 10 * 1024 * 1024,
    file_backup_count: int = 5,
    include_uvicorn: bool = True,
    service_name: str = "video-service",
) -> None:
    """Configure logging with dictConfig and the QueueHandler pattern.

    All handlers hang off a QueueListener; the root logger only carries a
    QueueHandler so that request handling never blocks on log I/O.

    Args:
        log_level: Root logger level.
        file_path: Path to a rotating JSONL/text log file, or None.
        json_logs: Emit JSON Lines instead of human-readable text.
        console_enabled: Write to stderr.
        include_context: Attach ContextInjectingFilter to the root logger.
        file_max_bytes: Maximum log file size before rotation.
        file_backup_count: Number of rotated files to keep.
        include_uvicorn: Keep uvicorn access logs; when False they are raised to WARNING.
        service_name: Static ``service`` field for JSON records.
    """
    global _log_queue, _listener, _queue_handler

    shutdown()
    logging.captureWarnings(True)

    path = Path(file_path) if file_path else None
    if path:
        path.parent.mkdir(parents=True, exist_ok=True)

    filters: dict[str, Any] = {}
    root_filters: list[str] = []
    if include_context:
        filters["context"] = {
            "()": "video_service.infra.logging.context.ContextInjectingFilter",
        }
        root_filters.append("context")

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "filters": filters,
            "root": {
                "level": log_level.upper(),
                "handlers": [],
                "filters": root_filters,
            },
            "loggers": {
                "uvicorn.access": {
                    "level": "INFO" if include_uvicorn else "WARNING",
                },
            },
        }
    )

    handlers: list[logging.Handler] = []
    if console_enabled:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(_build_formatter(json_logs, service_name))
        handlers.append(console_handler)

    if path:
        file_handler = RotatingFileHandler(
            path,
            maxBytes=file_max_bytes,
            backupCount=file_backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(_build_formatter(json_logs, service_name))
        handlers.append(file_handler)

    _log_queue = Queue()
    if handlers:
        _listener = QueueListener(_log_queue, *handlers, respect_handler_level=True)
        _listener.start()
        atexit.register(shutdown)

    _queue_handler = QueueHandler(_log_queue)
    logging.getLogger().addHandler(_queue_handler)


def _build_formatter(json_logs: bool, service_name: str) -> logging.Formatter:
    if json_logs:
        return JSONFormatter(static={"service": service_name})
    return logging.Formatter(fmt=_TEXT_FORMAT, datefmt=_DATE_FORMAT)
