"""Shared API schemas."""

from video_service.core.schemas.error import FieldError, ProblemDetail, ValidationProblemDetail

__all__ = ["FieldError", "ProblemDetail", "ValidationProblemDetail"]
