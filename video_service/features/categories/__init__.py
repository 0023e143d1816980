"""Categories feature: the fixed vocabulary videos are filed under."""

from __future__ import annotations

from .models import Category
from .schemas import CategoryResponse

__all__ = ["Category", "CategoryResponse"]
