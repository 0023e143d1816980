"""Tests for health probes and the Prometheus scrape endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy.exc import OperationalError

from video_service.core.dependencies import get_db_session

if TYPE_CHECKING:
    from fastapi import FastAPI
    from httpx import AsyncClient


@pytest.mark.asyncio
async def test_liveness(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_readiness_checks_database(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health/ready")

    assert response.status_code == 200
    assert response.json()["checks"] == {"database": True}


@pytest.mark.asyncio
async def test_readiness_reports_unavailable_database(app: FastAPI, client: AsyncClient) -> None:
    class BrokenSession:
        async def execute(self, *args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    async def _broken():
        yield BrokenSession()

    app.dependency_overrides[get_db_session] = _broken

    response = await client.get("/api/v1/health/ready")

    assert response.status_code == 503
    assert response.json()["status"] == "unavailable"
    assert response.json()["checks"] == {"database": False}


@pytest.mark.asyncio
async def test_metrics_exposition(client: AsyncClient) -> None:
    await client.get("/api/v1/videos", params={"limit": 0})

    response = await client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "errors_total" in response.text
    assert "pagination_requests_total" in response.text
