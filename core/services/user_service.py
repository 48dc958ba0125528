# =============================================================================
# core/services/user_service.py - User Lookups
# =============================================================================

import logging
from typing import Any

from lib.database import Database

logger = logging.getLogger(__name__)

_USER_COLUMNS = "id AS user_id, username, email, super_seller"


class UserService:
    """Read-only access to the users table."""

    def __init__(self, db: Database):
        self.db = db

    async def get_by_username(self, username: str) -> dict[str, Any] | None:
        """Find a user by exact username, or None."""
        return await self.db.fetch_one(
            f"SELECT {_USER_COLUMNS} FROM users WHERE username = :username",
            {"username": username},
        )

    async def get_by_id(self, user_id: int) -> dict[str, Any] | None:
        """Find a user by ID, or None."""
        return await self.db.fetch_one(
            f"SELECT {_USER_COLUMNS} FROM users WHERE id = :user_id",
            {"user_id": user_id},
        )
