"""Unit tests for application exceptions."""

from __future__ import annotations

import pytest

from video_service.core.database import NotFoundError
from video_service.core.exceptions import (
    AppException,
    BadRequestException,
    ConflictException,
    ExternalServiceException,
    NotFoundException,
    UnauthorizedException,
    ValidationException,
)


@pytest.mark.parametrize(
    ("exc", "status_code", "title"),
    [
        (NotFoundException("missing"), 404, "Not Found"),
        (ValidationException("bad"), 422, "Validation Error"),
        (UnauthorizedException(), 401, "Unauthorized"),
        (ConflictException("dupe"), 409, "Conflict"),
        (BadRequestException("nope"), 400, "Bad Request"),
        (ExternalServiceException("down", service="media"), 502, "Bad Gateway"),
    ],
)
def test_status_and_title(exc: AppException, status_code: int, title: str):
    assert exc.status_code == status_code
    assert exc.title == title
    assert isinstance(exc, AppException)


def test_default_title_for_unknown_status():
    assert AppException(status_code=418, detail="teapot").title == "Error"


def test_external_service_exception_records_provider():
    exc = ExternalServiceException("timeout", service="uploads", extra={"operation": "delete_files"})

    assert exc.service == "uploads"
    assert exc.extra == {"service": "uploads", "operation": "delete_files"}
    assert exc.type == "external-service-error"


def test_not_found_error_message():
    error = NotFoundError("Video", {"id": "v1"})

    assert error.message == "Video not found with id='v1'"
    assert error.details == {"model": "Video", "id": "v1"}
    assert str(error) == "Video not found with id='v1' (model='Video', id='v1')"
