"""RFC 7807 problem detail schemas returned by the exception handlers."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs.

    Problem-specific members (``video_id``, ``limit``, ``service``...) are
    accepted as extra fields and rendered at the top level.
    """

    model_config = ConfigDict(extra="allow")

    type: str = Field("about:blank", description="Problem type identifier")
    title: str = Field(..., description="Short summary of the problem type")
    status: int = Field(..., description="HTTP status code")
    detail: str | None = Field(None, description="Explanation of this occurrence")
    instance: str | None = Field(None, description="URI of this occurrence")
    request_id: str | None = Field(None, description="X-Request-ID of the failed request")


class FieldError(BaseModel):
    """One failed field of a request."""

    field: str
    message: str
    type: str
    value: Any = None


class ValidationProblemDetail(ProblemDetail):
    errors: list[FieldError] = Field(default_factory=list)


__all__ = ["FieldError", "ProblemDetail", "ValidationProblemDetail"]
