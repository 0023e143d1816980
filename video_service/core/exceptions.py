"""Application exceptions rendered as RFC 7807 problem details.

Every error a request can surface derives from ``AppException``. Handlers in
``app.exception_handlers`` turn ``status_code``, ``type``, ``title``,
``detail`` and ``extra`` into an ``application/problem+json`` body.

Each HTTP-status subclass carries its status, default problem type and title,
so call sites only name what is specific to them:

    raise NotFoundException(
        detail=f"Playlist {playlist_id} not found",
        type="playlist-not-found",
        extra={"playlist_id": playlist_id},
    )
"""

from __future__ import annotations

from typing import Any, ClassVar

_STATUS_TITLES = {
    400: "Bad Request",
    401: "Unauthorized",
    404: "Not Found",
    409: "Conflict",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
    502: "Bad Gateway",
    503: "Service Unavailable",
}


def status_title(status_code: int) -> str:
    """Default problem title for an HTTP status."""
    return _STATUS_TITLES.get(status_code, "Error")


class AppException(Exception):
    """Base application exception.

    Attributes:
        status_code: HTTP status code for the error.
        detail: Human-readable error message.
        type: Problem type identifier, e.g. ``video-not-found``.
        title: Short summary of the problem type.
        instance: URI reference of this occurrence; the handler defaults it to the request URL.
        extra: Additional members merged into the problem body.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        type: str = "about:blank",
        title: str | None = None,
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        self.detail = detail
        self.type = type
        self.title = title or status_title(status_code)
        self.instance = instance
        self.extra = extra or {}
        super().__init__(detail)


class _StatusException(AppException):
    """AppException with a fixed status, default type and title."""

    status: ClassVar[int]
    default_type: ClassVar[str]
    default_title: ClassVar[str]

    def __init__(
        self,
        detail: str,
        type: str | None = None,
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=self.status,
            detail=detail,
            type=type or self.default_type,
            title=self.default_title,
            instance=instance,
            extra=extra,
        )


class BadRequestException(_StatusException):
    """The request cannot be fulfilled in the resource's current state."""

    status = 400
    default_type = "bad-request"
    default_title = "Bad Request"


class UnauthorizedException(_StatusException):
    """The caller identity is missing or has no local profile."""

    status = 401
    default_type = "unauthorized"
    default_title = "Unauthorized"

    def __init__(
        self,
        detail: str = "Authentication credentials required",
        type: str | None = None,
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(detail, type=type, instance=instance, extra=extra)


class NotFoundException(_StatusException):
    """A resource is missing or not owned by the caller.

    Ownership failures surface as 404 so callers cannot probe for other
    users' videos or playlists.
    """

    status = 404
    default_type = "not-found"
    default_title = "Not Found"


class ConflictException(_StatusException):
    status = 409
    default_type = "conflict"
    default_title = "Conflict"


class ValidationException(_StatusException):
    """Invalid input that passed schema validation, e.g. a page limit or a cursor token."""

    status = 422
    default_type = "validation-error"
    default_title = "Validation Error"


class ExternalServiceException(_StatusException):
    """A required call to the media, file-storage or workflow provider failed.

    ``service`` names the provider and is always part of ``extra``.
    """

    status = 502
    default_type = "external-service-error"
    default_title = "Bad Gateway"

    def __init__(
        self,
        detail: str,
        service: str,
        type: str | None = None,
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.service = service
        super().__init__(
            detail,
            type=type,
            instance=instance,
            extra={"service": service, **(extra or {})},
        )


__all__ = [
    "AppException",
    "BadRequestException",
    "ConflictException",
    "ExternalServiceException",
    "NotFoundException",
    "UnauthorizedException",
    "ValidationException",
    "status_title",
]
