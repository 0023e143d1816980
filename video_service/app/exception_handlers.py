"""Global exception handlers for FastAPI application.

Every error leaves the API as an RFC 7807 problem document:

    {"type": "video-not-found", "title": "Not Found", "status": 404,
     "detail": "Video abc not found", "instance": "...", "video_id": "abc",
     "request_id": "..."}
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from video_service.core.database import NotFoundError
from video_service.core.exceptions import AppException, status_title
from video_service.core.schemas.error import FieldError, ProblemDetail, ValidationProblemDetail
from video_service.infra.metrics import tracking

logger = logging.getLogger(__name__)

PROBLEM_MEDIA_TYPE = "application/problem+json"


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _render(request: Request, problem: ProblemDetail) -> JSONResponse:
    """Serialize a problem, defaulting ``instance`` to the request URL."""
    if problem.instance is None:
        problem.instance = str(request.url)
    problem.request_id = _request_id(request)
    return JSONResponse(
        status_code=problem.status,
        content=problem.model_dump(mode="json", exclude_none=True),
        media_type=PROBLEM_MEDIA_TYPE,
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render an ``AppException``; ``extra`` members go to the top level."""
    tracking.track_error(exc.type, request.url.path, exc.status_code)

    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "Request failed",
        extra={
            "path": request.url.path,
            "method": request.method,
            "problem_type": exc.type,
            "status_code": exc.status_code,
            "detail": exc.detail,
        },
    )
    return _render(
        request,
        ProblemDetail(
            type=exc.type,
            title=exc.title,
            status=exc.status_code,
            detail=exc.detail,
            instance=exc.instance,
            **exc.extra,
        ),
    )


async def not_found_error_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Repository lookups that found nothing."""
    tracking.track_error("not-found", request.url.path, status.HTTP_404_NOT_FOUND)
    logger.info("Entity not found", extra={"path": request.url.path, "model": exc.model_name})
    return _render(
        request,
        ProblemDetail(
            type="not-found",
            title=status_title(status.HTTP_404_NOT_FOUND),
            status=status.HTTP_404_NOT_FOUND,
            detail=exc.message,
        ),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Request bodies and parameters that fail schema validation, one entry per field."""
    errors = [
        FieldError(
            field=".".join(str(part) for part in error["loc"]),
            message=error["msg"],
            type=error["type"],
            value=error.get("input"),
        )
        for error in exc.errors()
    ]
    for error in errors:
        tracking.track_validation_error(request.url.path, error.field)

    logger.warning(
        "Request validation failed",
        extra={
            "path": request.url.path,
            "method": request.method,
            "fields": [error.field for error in errors],
        },
    )
    return _render(
        request,
        ValidationProblemDetail(
            type="validation-error",
            title="Validation Error",
            status=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Request validation failed for {len(errors)} field(s)",
            errors=errors,
        ),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything else: logged with its traceback, reported without internals."""
    tracking.track_unhandled_exception(type(exc).__name__, request.url.path)
    logger.error(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
        },
        exc_info=exc,
    )
    return _render(
        request,
        ProblemDetail(
            type="internal-error",
            title=status_title(status.HTTP_500_INTERNAL_SERVER_ERROR),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred while processing your request",
        ),
    )


def configure_exception_handlers(app: FastAPI) -> None:
    """Register the problem-detail exception handlers on ``app``."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(NotFoundError, not_found_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.debug("Exception handlers configured")
