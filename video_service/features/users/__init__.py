"""Users feature: local profiles of identity-provider accounts.

Only models and schemas are re-exported here; import the repository, service
and router from their modules so feature packages can load each other's models
without import cycles.
"""

from __future__ import annotations

from .models import User
from .schemas import UserProfileResponse, UserSummary, UserSync

__all__ = [
    "User",
    "UserProfileResponse",
    "UserSummary",
    "UserSync",
]
