"""Middleware configuration for FastAPI application."""

from __future__ import annotations

import logging
import time
import uuid
from typing import TYPE_CHECKING

from fastapi import Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from video_service.core.settings import get_app_settings
from video_service.infra.logging import clear_log_context, set_log_context

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = logging.getLogger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id, echoed back in ``X-Request-ID`` and in every log line."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        clear_log_context()
        set_log_context(request_id=request_id, path=request.url.path, method=request.method)

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


class TimingMiddleware(BaseHTTPMiddleware):
    """Add timing information to responses."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()
        response = await call_next(request)
        response.headers["X-Process-Time"] = f"{time.perf_counter() - start_time:.6f}"
        return response


def configure_middleware(app: FastAPI) -> None:
    """Configure CORS, request ids and timing."""
    app_settings = get_app_settings()

    cors_origins = app_settings.cors_origins or ["*"]
    logger.info("Configuring CORS", extra={"origins": cors_origins})

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=app_settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=3600,
    )
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)
