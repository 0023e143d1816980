"""Pydantic schemas for the categories feature."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None = None


__all__ = ["CategoryResponse"]
