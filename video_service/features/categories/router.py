"""API router for the categories feature.

Endpoints:
    GET    /categories   - List all categories ordered by name
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from video_service.core.dependencies.database import get_db_session
from video_service.features.categories.schemas import CategoryResponse
from video_service.features.categories.service import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get(
    "",
    response_model=list[CategoryResponse],
    summary="List categories",
)
async def list_categories(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> list[CategoryResponse]:
    categories = await CategoryService(session).list_categories()
    return [CategoryResponse.model_validate(category) for category in categories]
