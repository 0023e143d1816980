"""Health check endpoints.

Endpoints:
    GET /health        - Liveness: the process is serving requests
    GET /health/ready  - Readiness: the database answers queries
"""

from __future__ import annotations

import logging
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from video_service.core.dependencies.database import get_db_session
from video_service.core.settings import get_app_settings

router = APIRouter(prefix="/health", tags=["health"])
logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    status: Literal["ok", "unavailable"]
    service: str
    version: str
    checks: dict[str, bool] = {}


@router.get("", response_model=HealthResponse, summary="Liveness probe")
async def liveness() -> HealthResponse:
    settings = get_app_settings()
    return HealthResponse(status="ok", service=settings.service_name, version=settings.version)


@router.get(
    "/ready",
    response_model=HealthResponse,
    summary="Readiness probe",
    responses={503: {"description": "Database unavailable"}},
)
async def readiness(
    response: Response,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> HealthResponse:
    settings = get_app_settings()
    try:
        await session.execute(text("SELECT 1"))
        database_ok = True
    except SQLAlchemyError as e:
        logger.warning("Readiness check failed", extra={"check": "database", "error": str(e)})
        database_ok = False

    if not database_ok:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return HealthResponse(
        status="ok" if database_ok else "unavailable",
        service=settings.service_name,
        version=settings.version,
        checks={"database": database_ok},
    )
